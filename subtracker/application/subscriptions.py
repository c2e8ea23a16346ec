"""
Subscription use cases: CRUD подписок + расчёт суммарной стоимости за период.

Use cases work against the SubscriptionStore contract, so they can be
exercised with any storage implementation. The logger is injected;
by default the module logger is used.
"""
import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from subtracker.domain.errors import SubscriptionError, SubscriptionValidationError
from subtracker.domain.period import parse_month_year, parse_period
from subtracker.domain.subscription import MAX_PRICE, Subscription
from subtracker.infrastructure.subscriptions.base import SubscriptionStore

logger = logging.getLogger(__name__)


def _validate_fields(service_name: str, price: int, user_id: UUID, start_date: str) -> str:
    """Check required fields, return the stripped service name"""
    name = (service_name or "").strip()
    if not name:
        raise SubscriptionValidationError("service_name is required")
    if isinstance(price, bool) or not isinstance(price, int) or not 0 < price <= MAX_PRICE:
        raise SubscriptionValidationError(f"price must be an integer between 1 and {MAX_PRICE}")
    if user_id is None:
        raise SubscriptionValidationError("user_id is required")
    if not start_date:
        raise SubscriptionValidationError("start_date is required")
    return name


def _parse_dates(start_date: str, end_date: Optional[str]) -> tuple[datetime, Optional[datetime]]:
    start = parse_month_year(start_date)
    end = parse_month_year(end_date) if end_date is not None else None
    if end is not None and end < start:
        raise SubscriptionValidationError(
            f"end_date {end_date} is before start_date {start_date}"
        )
    return start, end


class _SubscriptionUseCase:
    def __init__(self, store: SubscriptionStore, log: Optional[logging.Logger] = None):
        self.store = store
        self.log = log or logger


class CreateSubscriptionUseCase(_SubscriptionUseCase):
    def execute(
        self,
        service_name: str,
        price: int,
        user_id: UUID,
        start_date: str,
        end_date: Optional[str] = None,
    ) -> Subscription:
        self.log.info("Creating subscription for user %s to service %s", user_id, service_name)

        name = _validate_fields(service_name, price, user_id, start_date)
        start, end = _parse_dates(start_date, end_date)

        subscription = Subscription(
            service_name=name,
            price=price,
            user_id=user_id,
            start_date=start,
            end_date=end,
        )
        try:
            subscription = self.store.create(subscription)
        except SubscriptionError:
            self.log.exception("Error creating subscription for user %s", user_id)
            raise

        self.log.info("Subscription created with ID: %d", subscription.id)
        return subscription


class GetSubscriptionUseCase(_SubscriptionUseCase):
    def execute(self, subscription_id: int) -> Subscription:
        self.log.info("Getting subscription with ID: %d", subscription_id)
        try:
            return self.store.get_by_id(subscription_id)
        except SubscriptionError as exc:
            self.log.warning("Error getting subscription %d: %s", subscription_id, exc)
            raise


class UpdateSubscriptionUseCase(_SubscriptionUseCase):
    """Full replace of all mutable fields; never creates a row."""

    def execute(
        self,
        subscription_id: int,
        service_name: str,
        price: int,
        user_id: UUID,
        start_date: str,
        end_date: Optional[str] = None,
    ) -> Subscription:
        self.log.info("Updating subscription with ID: %d", subscription_id)

        existing = self.store.get_by_id(subscription_id)

        name = _validate_fields(service_name, price, user_id, start_date)
        start, end = _parse_dates(start_date, end_date)

        existing.service_name = name
        existing.price = price
        existing.user_id = user_id
        existing.start_date = start
        existing.end_date = end

        try:
            updated = self.store.update(existing)
        except SubscriptionError as exc:
            self.log.warning("Error updating subscription %d: %s", subscription_id, exc)
            raise

        self.log.info("Subscription %d updated", subscription_id)
        return updated


class DeleteSubscriptionUseCase(_SubscriptionUseCase):
    def execute(self, subscription_id: int) -> None:
        self.log.info("Deleting subscription with ID: %d", subscription_id)
        try:
            self.store.delete(subscription_id)
        except SubscriptionError as exc:
            self.log.warning("Error deleting subscription %d: %s", subscription_id, exc)
            raise
        self.log.info("Subscription %d deleted", subscription_id)


class ListSubscriptionsUseCase(_SubscriptionUseCase):
    def execute(self, limit: int, offset: int) -> List[Subscription]:
        self.log.info("Listing subscriptions, limit=%d offset=%d", limit, offset)
        try:
            subscriptions = self.store.list(limit, offset)
        except SubscriptionError:
            self.log.exception("Error listing subscriptions")
            raise
        self.log.info("Retrieved %d subscriptions", len(subscriptions))
        return subscriptions


class CalculateTotalCostUseCase(_SubscriptionUseCase):
    """
    Суммарная стоимость подписок, активных хотя бы часть периода

    Подписка попадает в расчёт, если её интервал [start_date, end_date]
    пересекается с периодом [start, end]; end_date=None считается
    бесконечностью. Фильтры user_id и service_name объединяются через AND.
    """

    def execute(
        self,
        start_date: str,
        end_date: str,
        user_id: Optional[UUID] = None,
        service_name: Optional[str] = None,
    ) -> int:
        self.log.info("Calculating total cost for period %s to %s", start_date, end_date)

        period_start, period_end = parse_period(start_date, end_date)
        if service_name is not None:
            service_name = service_name.strip() or None

        try:
            total = self.store.total_cost(
                period_start,
                period_end,
                user_id=user_id,
                service_name=service_name,
            )
        except SubscriptionError:
            self.log.exception("Error calculating total cost")
            raise

        self.log.info("Total cost calculated: %d", total)
        return total
