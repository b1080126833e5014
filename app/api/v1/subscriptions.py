"""
Subscription API endpoints
"""
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field, StrictInt
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.application.subscriptions import (
    CreateSubscriptionUseCase, GetSubscriptionUseCase, ListSubscriptionsUseCase,
    UpdateSubscriptionUseCase, DeleteSubscriptionUseCase, TotalCostUseCase,
)
from app.domain.subscription import SubscriptionPatch


router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


# === Request/Response models ===

class CreateSubscriptionRequest(BaseModel):
    service_name: str = Field(examples=["Yandex Plus"])
    price: StrictInt = Field(examples=[400])  # strict: no coercion from bool, str or float
    user_id: uuid.UUID = Field(examples=["60601fee-2bf1-4721-ae6f-7636e79a0cba"])
    start_date: str = Field(examples=["07-2025"])  # MM-YYYY
    end_date: str | None = Field(default=None, examples=["12-2025"])


class UpdateSubscriptionRequest(BaseModel):
    service_name: str | None = None
    price: StrictInt | None = None
    start_date: str | None = None
    end_date: str | None = None


class SubscriptionResponse(BaseModel):
    id: uuid.UUID
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: str
    end_date: str | None = None
    created_at: datetime
    updated_at: datetime


class TotalCostResponse(BaseModel):
    total_cost: int


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="subscription not found")


# === Endpoints ===

@router.post(
    "",
    response_model=SubscriptionResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_subscription(req: CreateSubscriptionRequest, db: Session = Depends(get_db)):
    """Создать подписку"""
    return CreateSubscriptionUseCase(db).execute(
        service_name=req.service_name,
        price=req.price,
        user_id=req.user_id,
        start_date=req.start_date,
        end_date=req.end_date,
    )


@router.get("", response_model=list[SubscriptionResponse], response_model_exclude_none=True)
def list_subscriptions(
    user_id: uuid.UUID | None = None,
    service_name: str | None = None,
    db: Session = Depends(get_db),
):
    """Список подписок, новые первыми"""
    return ListSubscriptionsUseCase(db).execute(user_id=user_id, service_name=service_name)


# Declared before /{sub_id} so "total-cost" is not taken for an id
@router.get("/total-cost", response_model=TotalCostResponse)
def total_cost(
    period_from: str,
    period_to: str,
    user_id: uuid.UUID | None = None,
    service_name: str | None = None,
    db: Session = Depends(get_db),
):
    """Суммарная стоимость подписок, активных в периоде [period_from, period_to]"""
    total = TotalCostUseCase(db).execute(
        period_from=period_from,
        period_to=period_to,
        user_id=user_id,
        service_name=service_name,
    )
    return TotalCostResponse(total_cost=total)


@router.get("/{sub_id}", response_model=SubscriptionResponse, response_model_exclude_none=True)
def get_subscription(sub_id: uuid.UUID, db: Session = Depends(get_db)):
    sub = GetSubscriptionUseCase(db).execute(sub_id)
    if sub is None:
        raise _not_found()
    return sub


@router.put("/{sub_id}", response_model=SubscriptionResponse, response_model_exclude_none=True)
@router.patch("/{sub_id}", response_model=SubscriptionResponse, response_model_exclude_none=True)
def update_subscription(
    sub_id: uuid.UUID,
    req: UpdateSubscriptionRequest,
    db: Session = Depends(get_db),
):
    """Частичное обновление: меняются только переданные поля"""
    sub = UpdateSubscriptionUseCase(db).execute(sub_id, SubscriptionPatch(**req.model_dump()))
    if sub is None:
        raise _not_found()
    return sub


@router.delete("/{sub_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(sub_id: uuid.UUID, db: Session = Depends(get_db)):
    if not DeleteSubscriptionUseCase(db).execute(sub_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
