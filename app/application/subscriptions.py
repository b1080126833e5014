"""
Subscription use cases: CRUD подписок и расчёт суммарной стоимости за период.

Each use case is one independent transaction against SubscriptionRepository.
Validation happens before any storage call; storage errors are logged and
re-raised unchanged.
"""
import logging
import uuid
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.domain.cost_query import SubscriptionFilter, CostWindow
from app.domain.period import InvalidPeriodFormat
from app.domain.subscription import (
    SubscriptionPatch, SubscriptionValidationError,
    build_new, apply_partial_update, to_presentation,
)
from app.infrastructure.db.subscription_repository import SubscriptionRepository, StorageError

logger = logging.getLogger(__name__)

_VALIDATION_ERRORS = (SubscriptionValidationError, InvalidPeriodFormat)


class CreateSubscriptionUseCase:
    def __init__(self, db: Session):
        self.repo = SubscriptionRepository(db)

    def execute(
        self,
        service_name: str,
        price: int,
        user_id: uuid.UUID,
        start_date: str,
        end_date: str | None = None,
    ) -> Dict[str, Any]:
        try:
            sub = build_new(service_name, price, user_id, start_date, end_date)
        except _VALIDATION_ERRORS as e:
            logger.warning("Rejected subscription for user_id=%s: %s", user_id, e)
            raise

        try:
            created = self.repo.insert(sub)
        except StorageError:
            logger.exception("Failed to create subscription service=%s", sub.service_name)
            raise

        logger.info(
            "Created subscription id=%s service=%s user_id=%s",
            created.id, created.service_name, created.user_id,
        )
        return to_presentation(created)


class GetSubscriptionUseCase:
    def __init__(self, db: Session):
        self.repo = SubscriptionRepository(db)

    def execute(self, sub_id: uuid.UUID) -> Dict[str, Any] | None:
        try:
            sub = self.repo.find_by_id(sub_id)
        except StorageError:
            logger.exception("Failed to load subscription id=%s", sub_id)
            raise
        if sub is None:
            logger.info("Subscription id=%s not found", sub_id)
            return None
        return to_presentation(sub)


class ListSubscriptionsUseCase:
    def __init__(self, db: Session):
        self.repo = SubscriptionRepository(db)

    def execute(
        self,
        user_id: uuid.UUID | None = None,
        service_name: str | None = None,
    ) -> List[Dict[str, Any]]:
        flt = SubscriptionFilter(user_id=user_id, service_name=service_name)
        try:
            subs = self.repo.find_many(flt)
        except StorageError:
            logger.exception("Failed to list subscriptions (%s)", flt)
            raise
        logger.info("Listed %d subscription(s) (%s)", len(subs), flt)
        return [to_presentation(s) for s in subs]


class UpdateSubscriptionUseCase:
    def __init__(self, db: Session):
        self.repo = SubscriptionRepository(db)

    def execute(self, sub_id: uuid.UUID, patch: SubscriptionPatch) -> Dict[str, Any] | None:
        if patch.is_empty():
            # Nothing to change: current record as is, updated_at untouched
            return GetSubscriptionUseCase(self.repo.db).execute(sub_id)

        try:
            fields = apply_partial_update(patch)
        except _VALIDATION_ERRORS as e:
            logger.warning("Rejected update for subscription id=%s: %s", sub_id, e)
            raise

        try:
            sub = self.repo.update_fields(sub_id, fields)
        except StorageError:
            logger.exception("Failed to update subscription id=%s", sub_id)
            raise

        if sub is None:
            logger.info("Subscription id=%s not found for update", sub_id)
            return None
        logger.info("Updated subscription id=%s fields=%s", sub_id, sorted(fields))
        return to_presentation(sub)


class DeleteSubscriptionUseCase:
    def __init__(self, db: Session):
        self.repo = SubscriptionRepository(db)

    def execute(self, sub_id: uuid.UUID) -> bool:
        try:
            deleted = self.repo.delete_by_id(sub_id)
        except StorageError:
            logger.exception("Failed to delete subscription id=%s", sub_id)
            raise
        if deleted:
            logger.info("Deleted subscription id=%s", sub_id)
        else:
            logger.info("Subscription id=%s not found for delete", sub_id)
        return deleted


class TotalCostUseCase:
    def __init__(self, db: Session):
        self.repo = SubscriptionRepository(db)

    def execute(
        self,
        period_from: str,
        period_to: str,
        user_id: uuid.UUID | None = None,
        service_name: str | None = None,
    ) -> int:
        try:
            window = CostWindow.parse(period_from, period_to)
        except _VALIDATION_ERRORS as e:
            logger.warning("Rejected total cost query: %s", e)
            raise

        flt = SubscriptionFilter(user_id=user_id, service_name=service_name)
        try:
            total = self.repo.sum_price_where_active(flt, window)
        except StorageError:
            logger.exception("Failed to compute total cost %s..%s", period_from, period_to)
            raise

        logger.info("Total cost %s..%s (%s) = %d", period_from, period_to, flt, total)
        return total
