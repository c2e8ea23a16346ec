"""
SQLAlchemy ORM models
"""
import uuid
from datetime import date as date_type
from sqlalchemy import String, Integer, Date, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from subtracker.infrastructure.db.session import Base


class SubscriptionModel(Base):
    """User subscription to a paid service, month granularity"""
    __tablename__ = "subscriptions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    service_name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)  # minor currency units
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    # Always the 1st day of a month; NULL end_date = still active
    start_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    end_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        Index("ix_subscriptions_period", "start_date", "end_date"),
    )
