"""
FastAPI dependencies (DB session)
"""
from app.infrastructure.db.session import get_db as _get_db


# Re-export get_db для удобства
get_db = _get_db
