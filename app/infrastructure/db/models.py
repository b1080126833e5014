"""
SQLAlchemy ORM models
"""
import uuid
from datetime import date as date_type, datetime
from sqlalchemy import String, Integer, Date, TIMESTAMP, Uuid, func, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.subscription import MAX_SERVICE_NAME_LENGTH
from app.infrastructure.db.session import Base


class SubscriptionModel(Base):
    """User subscription to a recurring service, active over a month range"""
    __tablename__ = "subscriptions"
    __table_args__ = (
        CheckConstraint("price >= 1", name="ck_subscriptions_price_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    service_name: Mapped[str] = mapped_column(String(MAX_SERVICE_NAME_LENGTH), nullable=False, index=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    # First day of the month; day is never user-visible
    start_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    end_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)  # NULL = open-ended

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
