"""
Seed demo subscriptions for one user.
Run:  python seed_test_data.py [user_id]
"""
import sys
import uuid

# ── bootstrap ────────────────────────────────────────────────────
from app.infrastructure.db.session import session_scope
from app.application.subscriptions import CreateSubscriptionUseCase, TotalCostUseCase

USER_ID = uuid.UUID(sys.argv[1]) if len(sys.argv) > 1 else uuid.UUID("60601fee-2bf1-4721-ae6f-7636e79a0cba")

SUBSCRIPTIONS = [
    # (service_name, price, start, end)
    ("Yandex Plus", 400, "07-2025", None),
    ("Netflix", 999, "01-2025", "06-2025"),
    ("Spotify Premium", 169, "03-2025", "12-2025"),
    ("Kinopoisk", 299, "09-2025", None),
]

with session_scope() as db:
    create = CreateSubscriptionUseCase(db)
    for name, price, start, end in SUBSCRIPTIONS:
        sub = create.execute(
            service_name=name, price=price, user_id=USER_ID,
            start_date=start, end_date=end,
        )
        print(f"  + {sub['service_name']}: {sub['price']} ({sub['start_date']} .. {sub.get('end_date', 'open')})")

    total = TotalCostUseCase(db).execute(period_from="01-2025", period_to="12-2025", user_id=USER_ID)
    print(f"✓ Итого за 2025: {total}")
