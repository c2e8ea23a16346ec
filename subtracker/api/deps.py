"""
FastAPI dependencies (DB session, subscription store)
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from subtracker.infrastructure.db.session import get_db as _get_db
from subtracker.infrastructure.subscriptions.base import SubscriptionStore
from subtracker.infrastructure.subscriptions.repository import SqlSubscriptionRepository


# Re-export get_db для удобства
get_db = _get_db


def get_subscription_store(db: Session = Depends(get_db)) -> SubscriptionStore:
    """
    SQL-backed store bound to the request's session

    Usage:
        @router.get("/subscriptions/{subscription_id}")
        def get_subscription(store: SubscriptionStore = Depends(get_subscription_store)):
            ...
    """
    return SqlSubscriptionRepository(db)
