"""
Очистить базу данных от тестовых подписок пользователя
Run:  python clean_db.py <user_id>
"""
import sys
import uuid

from app.infrastructure.db.session import session_scope
from app.infrastructure.db.models import SubscriptionModel

if len(sys.argv) != 2:
    print("Usage: python clean_db.py <user_id>"); sys.exit(1)

user_id = uuid.UUID(sys.argv[1])

print("=== ОЧИСТКА БАЗЫ ДАННЫХ ===")

with session_scope() as db:
    deleted = db.query(SubscriptionModel).filter(
        SubscriptionModel.user_id == user_id
    ).delete()
    print(f"✓ Удалено подписок: {deleted}")
    db.commit()

print("\n✓ База очищена!")
