"""
Subscription domain entity
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

# price column is a 32-bit INTEGER
MAX_PRICE = 2**31 - 1


@dataclass
class Subscription:
    """
    Subscription record (one paid service of one user)

    Даты хранятся с точностью до месяца: start_date и end_date всегда
    первое число месяца, 00:00 UTC. end_date=None означает, что
    подписка всё ещё активна.
    """
    service_name: str
    price: int  # minor currency units
    user_id: UUID
    start_date: datetime
    end_date: Optional[datetime] = None
    id: Optional[int] = None

    def is_open_ended(self) -> bool:
        return self.end_date is None

    def overlaps(self, period_start: datetime, period_end: datetime) -> bool:
        """True if the active interval intersects [period_start, period_end]."""
        if self.start_date > period_end:
            return False
        return self.is_open_ended() or self.end_date >= period_start
