"""
Database session management (SQLAlchemy)

One engine per process; the API gets a session per request through get_db,
scripts use session_scope.
"""
from contextlib import contextmanager
from typing import Iterator

import psycopg
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from app.config import Settings, get_settings


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


# Singleton engine and session factory
_engine = None
_SessionLocal = None


def build_engine(settings: Settings) -> Engine:
    """
    Engine for the configured DATABASE_URL.

    PostgreSQL connections get DB_CONNECT_TIMEOUT so an unreachable server
    fails the request (StorageError) instead of hanging a worker thread.
    """
    url = settings.get_sqlalchemy_url()
    connect_args = {}
    if url.startswith("postgresql"):
        connect_args["connect_timeout"] = settings.DB_CONNECT_TIMEOUT
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def get_engine() -> Engine:
    """Get or create SQLAlchemy engine (singleton)"""
    global _engine
    if _engine is None:
        _engine = build_engine(get_settings())
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create session factory (singleton)"""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)
    return _SessionLocal


def get_db() -> Iterator[Session]:
    """
    FastAPI dependency: one session per request, closed afterwards

    Usage:
        @router.get("/subscriptions")
        def list_subscriptions(db: Session = Depends(get_db)):
            ...
    """
    with session_scope() as db:
        yield db


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for scripts; uncommitted work is rolled back on close"""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> None:
    """
    Readiness probe: raw psycopg round trip, bounded by DB_CONNECT_TIMEOUT

    Raises:
        psycopg.OperationalError: database unreachable
    """
    settings = get_settings()
    with psycopg.connect(settings.DATABASE_URL, connect_timeout=settings.DB_CONNECT_TIMEOUT) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")
            cur.fetchone()
