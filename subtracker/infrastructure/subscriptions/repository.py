"""
Subscription Repository - SQL storage for subscriptions
"""
from datetime import date, datetime, time, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from subtracker.domain.errors import StorageError, SubscriptionNotFound
from subtracker.domain.subscription import Subscription
from subtracker.infrastructure.db.models import SubscriptionModel
from subtracker.infrastructure.subscriptions.base import SubscriptionStore


def _to_date(moment: Optional[datetime]) -> Optional[date]:
    return moment.date() if moment is not None else None


def _to_datetime(day: Optional[date]) -> Optional[datetime]:
    if day is None:
        return None
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def _to_entity(row: SubscriptionModel) -> Subscription:
    return Subscription(
        id=row.id,
        service_name=row.service_name,
        price=row.price,
        user_id=row.user_id,
        start_date=_to_datetime(row.start_date),
        end_date=_to_datetime(row.end_date),
    )


class SqlSubscriptionRepository(SubscriptionStore):
    """
    Repository для таблицы subscriptions

    Каждая операция - один запрос + commit. Ошибки SQLAlchemy
    откатывают транзакцию и превращаются в StorageError.
    """

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, operation: str, exc: SQLAlchemyError) -> StorageError:
        self.db.rollback()
        return StorageError(operation, str(getattr(exc, "orig", None) or exc))

    def create(self, subscription: Subscription) -> Subscription:
        row = SubscriptionModel(
            service_name=subscription.service_name,
            price=subscription.price,
            user_id=subscription.user_id,
            start_date=_to_date(subscription.start_date),
            end_date=_to_date(subscription.end_date),
        )
        try:
            self.db.add(row)
            self.db.flush()  # Получить ID до commit
            subscription.id = row.id
            self.db.commit()
        except SQLAlchemyError as exc:
            subscription.id = None
            raise self._fail("create subscription", exc) from exc

        return subscription

    def get_by_id(self, subscription_id: int) -> Subscription:
        try:
            row = self.db.execute(
                select(SubscriptionModel).where(SubscriptionModel.id == subscription_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise self._fail("get subscription", exc) from exc

        if row is None:
            raise SubscriptionNotFound(subscription_id)
        return _to_entity(row)

    def update(self, subscription: Subscription) -> Subscription:
        stmt = (
            update(SubscriptionModel)
            .where(SubscriptionModel.id == subscription.id)
            .values(
                service_name=subscription.service_name,
                price=subscription.price,
                user_id=subscription.user_id,
                start_date=_to_date(subscription.start_date),
                end_date=_to_date(subscription.end_date),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            if result.rowcount == 0:
                self.db.rollback()
                raise SubscriptionNotFound(subscription.id)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("update subscription", exc) from exc

        return subscription

    def delete(self, subscription_id: int) -> None:
        stmt = delete(SubscriptionModel).where(SubscriptionModel.id == subscription_id)
        try:
            result = self.db.execute(stmt)
            if result.rowcount == 0:
                self.db.rollback()
                raise SubscriptionNotFound(subscription_id)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete subscription", exc) from exc

    def list(self, limit: int, offset: int) -> List[Subscription]:
        stmt = (
            select(SubscriptionModel)
            .order_by(SubscriptionModel.id.asc())
            .limit(limit)
            .offset(offset)
        )
        try:
            rows = self.db.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            raise self._fail("list subscriptions", exc) from exc

        return [_to_entity(row) for row in rows]

    def total_cost(
        self,
        period_start: datetime,
        period_end: datetime,
        user_id: Optional[UUID] = None,
        service_name: Optional[str] = None,
    ) -> int:
        # Overlap: started before the period ends and not finished before it starts
        query = select(func.coalesce(func.sum(SubscriptionModel.price), 0)).where(
            SubscriptionModel.start_date <= _to_date(period_end),
            or_(
                SubscriptionModel.end_date.is_(None),
                SubscriptionModel.end_date >= _to_date(period_start),
            ),
        )

        if user_id is not None:
            query = query.where(SubscriptionModel.user_id == user_id)
        if service_name is not None:
            query = query.where(SubscriptionModel.service_name == service_name)

        try:
            total = self.db.execute(query).scalar_one()
        except SQLAlchemyError as exc:
            raise self._fail("calculate total cost", exc) from exc

        return int(total)
