"""
Subscription storage (SQLAlchemy).

Returns domain Subscription objects. "Not found" is None/False, never an
exception. Database failures are rolled back and raised as StorageError.
"""
import uuid
from functools import wraps
from typing import Any, Dict, List

from sqlalchemy import select, update, delete, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.cost_query import SubscriptionFilter, CostWindow
from app.domain.subscription import Subscription
from app.infrastructure.db.models import SubscriptionModel

_COLUMNS = SubscriptionModel.__table__.c


class StorageError(RuntimeError):
    pass


def _storage_call(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"{method.__name__} failed: {e.__class__.__name__}") from e
    return wrapper


def _to_entity(row) -> Subscription:
    return Subscription(
        id=row.id,
        service_name=row.service_name,
        price=row.price,
        user_id=row.user_id,
        start_date=row.start_date,
        end_date=row.end_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _filter_clauses(flt: SubscriptionFilter) -> list:
    clauses = []
    if flt.user_id is not None:
        clauses.append(SubscriptionModel.user_id == flt.user_id)
    if flt.service_name is not None:
        clauses.append(
            SubscriptionModel.service_name.ilike(f"%{_escape_like(flt.service_name)}%", escape="\\")
        )
    return clauses


class SubscriptionRepository:
    def __init__(self, db: Session):
        self.db = db

    @_storage_call
    def insert(self, sub: Subscription) -> Subscription:
        model = SubscriptionModel(
            id=sub.id,
            service_name=sub.service_name,
            price=sub.price,
            user_id=sub.user_id,
            start_date=sub.start_date,
            end_date=sub.end_date,
        )
        self.db.add(model)
        self.db.flush()
        self.db.commit()
        # expired on commit -> reload brings server-assigned timestamps
        self.db.refresh(model)
        return _to_entity(model)

    @_storage_call
    def find_by_id(self, sub_id: uuid.UUID) -> Subscription | None:
        model = self.db.get(SubscriptionModel, sub_id)
        if model is None:
            return None
        return _to_entity(model)

    @_storage_call
    def find_many(self, flt: SubscriptionFilter) -> List[Subscription]:
        query = (
            select(SubscriptionModel)
            .where(*_filter_clauses(flt))
            .order_by(SubscriptionModel.created_at.desc())
        )
        return [_to_entity(m) for m in self.db.scalars(query).all()]

    @_storage_call
    def update_fields(self, sub_id: uuid.UUID, fields: Dict[str, Any]) -> Subscription | None:
        """Single UPDATE ... RETURNING; empty fields -> current record, updated_at untouched."""
        if not fields:
            return self.find_by_id(sub_id)

        stmt = (
            update(SubscriptionModel.__table__)
            .where(_COLUMNS.id == sub_id)
            .values(**fields, updated_at=func.now())
            .returning(*_COLUMNS)
        )
        row = self.db.execute(stmt).first()
        self.db.commit()
        if row is None:
            return None
        return _to_entity(row)

    @_storage_call
    def delete_by_id(self, sub_id: uuid.UUID) -> bool:
        result = self.db.execute(
            delete(SubscriptionModel.__table__).where(_COLUMNS.id == sub_id)
        )
        self.db.commit()
        return result.rowcount > 0

    @_storage_call
    def sum_price_where_active(self, flt: SubscriptionFilter, window: CostWindow) -> int:
        query = select(func.coalesce(func.sum(SubscriptionModel.price), 0)).where(
            SubscriptionModel.start_date <= window.period_to,
            or_(
                SubscriptionModel.end_date.is_(None),
                SubscriptionModel.end_date >= window.period_from,
            ),
            *_filter_clauses(flt),
        )
        return int(self.db.scalar(query))
