"""
Filters and reporting window for subscription queries.

A subscription is active during [period_from, period_to] when

    start_date <= period_to AND (end_date IS NULL OR end_date >= period_from)

Both bounds are inclusive month points, so a single-month window is valid.
The predicate itself runs in SQL, see SubscriptionRepository.sum_price_where_active.
"""
import uuid
from dataclasses import dataclass
from datetime import date

from app.domain.period import parse_period
from app.domain.subscription import SubscriptionValidationError


@dataclass(frozen=True)
class SubscriptionFilter:
    user_id: uuid.UUID | None = None
    service_name: str | None = None  # case-insensitive substring


@dataclass(frozen=True)
class CostWindow:
    period_from: date
    period_to: date

    @classmethod
    def parse(cls, period_from: str, period_to: str) -> "CostWindow":
        start = parse_period(period_from, "period_from")
        end = parse_period(period_to, "period_to")
        if end < start:
            raise SubscriptionValidationError("period_to must be >= period_from")
        return cls(period_from=start, period_to=end)
