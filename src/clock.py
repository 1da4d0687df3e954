"""Wall-clock access for due dates and timestamps.

Everything that needs "now" takes an optional clock; passing none means
the local system time. Tests pin time with FixedClock.
"""
from __future__ import annotations
from datetime import date, datetime
from typing import Optional


class Clock:
    def now(self) -> datetime:
        """Local wall-clock time (naive)."""
        return datetime.now()

    def today(self) -> date:
        return self.now().date()


class FixedClock(Clock):
    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"FixedClock({self.moment.isoformat()})"


default_clock = Clock()


def resolve(clock: Optional[Clock]) -> Clock:
    return clock if clock is not None else default_clock
