"""
SubscriptionStore - storage contract used by the subscription use cases

The SQL implementation lives in ``repository.py``; tests run the use
cases against an in-memory implementation of the same contract.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from subtracker.domain.subscription import Subscription


class SubscriptionStore(ABC):
    """
    Persistence operations for subscriptions

    Implementations raise SubscriptionNotFound when a row is missing
    (or no rows were affected) and StorageError for everything else.
    """

    @abstractmethod
    def create(self, subscription: Subscription) -> Subscription:
        """Insert and return the entity with its assigned id"""

    @abstractmethod
    def get_by_id(self, subscription_id: int) -> Subscription:
        pass

    @abstractmethod
    def update(self, subscription: Subscription) -> Subscription:
        """Overwrite all mutable columns of the row with subscription.id"""

    @abstractmethod
    def delete(self, subscription_id: int) -> None:
        pass

    @abstractmethod
    def list(self, limit: int, offset: int) -> List[Subscription]:
        """Page of subscriptions ordered by id ascending"""

    @abstractmethod
    def total_cost(
        self,
        period_start: datetime,
        period_end: datetime,
        user_id: Optional[UUID] = None,
        service_name: Optional[str] = None,
    ) -> int:
        """
        Sum of prices of subscriptions active at any point of the period

        Args:
            period_start: first day of the first month
            period_end: last day of the last month
            user_id: only this user's subscriptions (optional)
            service_name: only this service (optional)

        Returns:
            Sum of price, 0 when nothing matches
        """
