"""
Subscription domain entity and its rules.

Rules:
  - service_name is non-empty (stored stripped), at most 255 characters
  - price is an integer in [1, 2**31 - 1] (smallest monetary unit)
  - start_date / end_date carry month+year only, see app.domain.period
  - end_date, when present, is strictly after start_date (checked on create)

Partial updates validate every supplied field on its own. Start/end ordering
is not re-checked against the stored record on update.
"""
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict

from app.domain.period import parse_period, format_period

MAX_SERVICE_NAME_LENGTH = 255  # subscriptions.service_name VARCHAR(255)
MAX_PRICE = 2**31 - 1  # subscriptions.price INTEGER


class SubscriptionValidationError(ValueError):
    pass


@dataclass
class Subscription:
    id: uuid.UUID
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: date
    end_date: date | None = None
    created_at: datetime | None = None  # assigned by storage
    updated_at: datetime | None = None  # assigned by storage


@dataclass
class SubscriptionPatch:
    """Partial update: None means "leave as is"."""
    service_name: str | None = None
    price: int | None = None
    start_date: str | None = None
    end_date: str | None = None

    def is_empty(self) -> bool:
        return all(
            v is None
            for v in (self.service_name, self.price, self.start_date, self.end_date)
        )


def validate_service_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise SubscriptionValidationError("service_name must not be empty")
    if len(name) > MAX_SERVICE_NAME_LENGTH:
        raise SubscriptionValidationError(
            f"service_name must be at most {MAX_SERVICE_NAME_LENGTH} characters"
        )
    return name


def validate_price(price: int) -> int:
    # bool is an int subclass; True must not pass as price=1
    if isinstance(price, bool) or not isinstance(price, int):
        raise SubscriptionValidationError("price must be an integer")
    if price < 1:
        raise SubscriptionValidationError("price must be positive")
    if price > MAX_PRICE:
        raise SubscriptionValidationError(f"price must be at most {MAX_PRICE}")
    return price


def build_new(
    service_name: str,
    price: int,
    user_id: uuid.UUID,
    start_date: str,
    end_date: str | None = None,
) -> Subscription:
    """
    Validate request data and build a new, not yet persisted Subscription.

    Raises:
        SubscriptionValidationError: empty name, price < 1, end <= start
        InvalidPeriodFormat: start_date / end_date are not "MM-YYYY"
    """
    service_name = validate_service_name(service_name)
    price = validate_price(price)

    start = parse_period(start_date, "start_date")
    end = None
    if end_date is not None:
        end = parse_period(end_date, "end_date")
        if not end > start:
            raise SubscriptionValidationError("end_date must be after start_date")

    return Subscription(
        id=uuid.uuid4(),
        service_name=service_name,
        price=price,
        user_id=user_id,
        start_date=start,
        end_date=end,
    )


def apply_partial_update(patch: SubscriptionPatch) -> Dict[str, Any]:
    """
    Turn a patch into the column -> value mapping to persist.

    Only supplied fields end up in the result; an empty patch gives {}.
    """
    fields: Dict[str, Any] = {}
    if patch.service_name is not None:
        fields["service_name"] = validate_service_name(patch.service_name)
    if patch.price is not None:
        fields["price"] = validate_price(patch.price)
    if patch.start_date is not None:
        fields["start_date"] = parse_period(patch.start_date, "start_date")
    if patch.end_date is not None:
        fields["end_date"] = parse_period(patch.end_date, "end_date")
    return fields


def to_presentation(sub: Subscription) -> Dict[str, Any]:
    """Externally shaped view: periods as "MM-YYYY", end_date omitted when open-ended."""
    payload = {
        "id": sub.id,
        "service_name": sub.service_name,
        "price": sub.price,
        "user_id": sub.user_id,
        "start_date": format_period(sub.start_date),
        "created_at": sub.created_at,
        "updated_at": sub.updated_at,
    }
    if sub.end_date is not None:
        payload["end_date"] = format_period(sub.end_date)
    return payload
