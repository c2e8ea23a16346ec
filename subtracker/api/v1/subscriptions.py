"""
Subscription API endpoints
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, StrictInt, field_validator

from subtracker.api.deps import get_subscription_store
from subtracker.application.subscriptions import (
    CalculateTotalCostUseCase,
    CreateSubscriptionUseCase,
    DeleteSubscriptionUseCase,
    GetSubscriptionUseCase,
    ListSubscriptionsUseCase,
    UpdateSubscriptionUseCase,
)
from subtracker.config import get_settings
from subtracker.domain.subscription import MAX_PRICE, Subscription
from subtracker.infrastructure.subscriptions.base import SubscriptionStore


router = APIRouter(prefix="/api/v1/subscriptions", tags=["subscriptions"])


# === Request/Response models ===

class SubscriptionRequest(BaseModel):
    """Create / full-replace payload; dates are MM-YYYY"""
    service_name: str = Field(..., min_length=1, examples=["Yandex Plus"])
    price: StrictInt = Field(..., gt=0, le=MAX_PRICE, examples=[400])
    user_id: UUID = Field(..., examples=["60601fee-2bf1-4721-ae6f-7636e79a0cba"])
    start_date: str = Field(..., min_length=1, examples=["07-2025"])
    end_date: Optional[str] = Field(None, examples=["12-2025"])

    @field_validator("service_name")
    @classmethod
    def strip_service_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("service_name must not be blank")
        return v


class SubscriptionResponse(BaseModel):
    id: int
    service_name: str
    price: int
    user_id: UUID
    start_date: datetime
    end_date: Optional[datetime] = None

    @classmethod
    def from_entity(cls, sub: Subscription) -> "SubscriptionResponse":
        return cls(
            id=sub.id,
            service_name=sub.service_name,
            price=sub.price,
            user_id=sub.user_id,
            start_date=sub.start_date,
            end_date=sub.end_date,
        )


class TotalCostRequest(BaseModel):
    start_date: str = Field(..., min_length=1, examples=["01-2025"])
    end_date: str = Field(..., min_length=1, examples=["12-2025"])
    user_id: Optional[UUID] = None
    service_name: Optional[str] = Field(None, examples=["Yandex Plus"])

    @field_validator("service_name")
    @classmethod
    def strip_service_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class TotalCostResponse(BaseModel):
    total_cost: int


# === Helper function ===

def _page_param(raw: Optional[str], default: int) -> int:
    """Lenient int query param: garbage or negative values fall back to default"""
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


# === Endpoints ===

@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
def create_subscription(
    req: SubscriptionRequest,
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """Создать новую подписку"""
    sub = CreateSubscriptionUseCase(store).execute(
        service_name=req.service_name,
        price=req.price,
        user_id=req.user_id,
        start_date=req.start_date,
        end_date=req.end_date,
    )
    return SubscriptionResponse.from_entity(sub)


@router.get("", response_model=list[SubscriptionResponse])
def list_subscriptions(
    limit: Optional[str] = Query(None, description="Page size (default 10)"),
    offset: Optional[str] = Query(None, description="Rows to skip (default 0)"),
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """Список подписок, по возрастанию ID"""
    subs = ListSubscriptionsUseCase(store).execute(
        limit=_page_param(limit, get_settings().DEFAULT_PAGE_LIMIT),
        offset=_page_param(offset, 0),
    )
    return [SubscriptionResponse.from_entity(s) for s in subs]


@router.post("/total-cost", response_model=TotalCostResponse)
def calculate_total_cost(
    req: TotalCostRequest,
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """Суммарная стоимость подписок за период с фильтрами user_id / service_name"""
    total = CalculateTotalCostUseCase(store).execute(
        start_date=req.start_date,
        end_date=req.end_date,
        user_id=req.user_id,
        service_name=req.service_name,
    )
    return TotalCostResponse(total_cost=total)


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
def get_subscription(
    subscription_id: int,
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """Получить подписку по ID"""
    sub = GetSubscriptionUseCase(store).execute(subscription_id)
    return SubscriptionResponse.from_entity(sub)


@router.put("/{subscription_id}", response_model=SubscriptionResponse)
def update_subscription(
    subscription_id: int,
    req: SubscriptionRequest,
    store: SubscriptionStore = Depends(get_subscription_store),
):
    """Обновить подписку (полная замена полей)"""
    sub = UpdateSubscriptionUseCase(store).execute(
        subscription_id=subscription_id,
        service_name=req.service_name,
        price=req.price,
        user_id=req.user_id,
        start_date=req.start_date,
        end_date=req.end_date,
    )
    return SubscriptionResponse.from_entity(sub)


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(
    subscription_id: int,
    store: SubscriptionStore = Depends(get_subscription_store),
) -> None:
    """Удалить подписку"""
    DeleteSubscriptionUseCase(store).execute(subscription_id)
