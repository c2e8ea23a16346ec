"""
Pytest fixtures for testing
"""
import os

# Schema is created by fixtures, never by the app lifespan
os.environ.setdefault("DB_AUTO_CREATE", "false")

import copy
from datetime import datetime
from typing import List, Optional
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from subtracker.domain.errors import SubscriptionNotFound
from subtracker.domain.subscription import Subscription
from subtracker.infrastructure.db import models  # noqa: F401  (registers tables)
from subtracker.infrastructure.db.session import Base
from subtracker.infrastructure.subscriptions.base import SubscriptionStore


class InMemorySubscriptionStore(SubscriptionStore):
    """Dict-backed store with the same NotFound semantics as the SQL repository"""

    def __init__(self):
        self.rows: dict[int, Subscription] = {}
        self._next_id = 1

    def create(self, subscription: Subscription) -> Subscription:
        subscription.id = self._next_id
        self._next_id += 1
        self.rows[subscription.id] = copy.deepcopy(subscription)
        return subscription

    def get_by_id(self, subscription_id: int) -> Subscription:
        if subscription_id not in self.rows:
            raise SubscriptionNotFound(subscription_id)
        return copy.deepcopy(self.rows[subscription_id])

    def update(self, subscription: Subscription) -> Subscription:
        if subscription.id not in self.rows:
            raise SubscriptionNotFound(subscription.id)
        self.rows[subscription.id] = copy.deepcopy(subscription)
        return subscription

    def delete(self, subscription_id: int) -> None:
        if self.rows.pop(subscription_id, None) is None:
            raise SubscriptionNotFound(subscription_id)

    def list(self, limit: int, offset: int) -> List[Subscription]:
        ordered = [self.rows[k] for k in sorted(self.rows)]
        return copy.deepcopy(ordered[offset:offset + limit])

    def total_cost(
        self,
        period_start: datetime,
        period_end: datetime,
        user_id: Optional[UUID] = None,
        service_name: Optional[str] = None,
    ) -> int:
        return sum(
            s.price for s in self.rows.values()
            if s.overlaps(period_start, period_end)
            and (user_id is None or s.user_id == user_id)
            and (service_name is None or s.service_name == service_name)
        )


@pytest.fixture
def memory_store():
    return InMemorySubscriptionStore()


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared across threads (TestClient runs sync routes in a threadpool)"""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """Test client для FastAPI поверх SQLite-сессии"""
    from subtracker.api.deps import get_db
    from subtracker.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
