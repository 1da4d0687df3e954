"""Deadlines ("due dates") attached to a todo.

A Deadline is one of:
    never    - never due (default)
    always   - always due
    day      - due from the start of a calendar day
    daily    - due every day once the local time reaches a time of day
    instant  - due from an exact local timestamp

Due checks are non-strict: a deadline equal to "now" is due.

Encoded tokens carry exactly one ':' so they survive the metadata scanner:
    due:0000-00-00         always
    due:YYYY-MM-DD         day
    due:daily-HHMM         daily
    due:YYYY-MM-DDTHHMM    instant
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from clock import Clock, resolve as resolve_clock
from errors import TodoParseError

logger = logging.getLogger(__name__)

NEVER_KIND = "never"
ALWAYS_KIND = "always"
DAY_KIND = "day"
DAILY_KIND = "daily"
INSTANT_KIND = "instant"

DUE_KEY = "due"
ALWAYS_SENTINEL = "0000-00-00"
TODAY_WORD = "today"

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
OFFSET_RE = re.compile(r"^(\d+)d$")
# a signed or fractional day count is a malformed offset, not free text
OFFSET_LIKE_RE = re.compile(r"^[+-]?\d+(\.\d+)?d$")
DAILY_RE = re.compile(r"^daily-(\d{2})(\d{2})$")
INSTANT_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})T(\d{2})(\d{2})$")

DeadlineValue = Union[date, time, datetime, None]


@dataclass(frozen=True)
class Deadline:
    kind: str = NEVER_KIND
    value: DeadlineValue = None

    # -------------------- constructors --------------------
    @classmethod
    def never(cls) -> "Deadline":
        return cls(NEVER_KIND)

    @classmethod
    def always(cls) -> "Deadline":
        return cls(ALWAYS_KIND)

    @classmethod
    def day(cls, day: date) -> "Deadline":
        if isinstance(day, datetime):
            day = day.date()
        return cls(DAY_KIND, day)

    @classmethod
    def daily(cls, at: time) -> "Deadline":
        return cls(DAILY_KIND, at.replace(second=0, microsecond=0))

    @classmethod
    def instant(cls, moment: datetime) -> "Deadline":
        return cls(INSTANT_KIND, moment)

    # -------------------- queries --------------------
    def is_some(self) -> bool:
        """Convenience for `!= Deadline.never()`."""
        return self.kind != NEVER_KIND

    def is_none(self) -> bool:
        return not self.is_some()

    def due(self, clock: Optional[Clock] = None) -> bool:
        """True if it is currently on or past the deadline."""
        if self.kind == NEVER_KIND:
            return False
        if self.kind == ALWAYS_KIND:
            return True
        now = resolve_clock(clock).now()
        if self.kind == DAY_KIND:
            return self.value <= now.date()
        if self.kind == DAILY_KIND:
            return self.value <= now.time().replace(second=0, microsecond=0)
        if self.kind == INSTANT_KIND:
            return self.value <= now
        raise ValueError(f"Unknown deadline kind: {self.kind}")

    # -------------------- text form --------------------
    def encode(self) -> str:
        if self.kind == NEVER_KIND:
            return ""
        if self.kind == ALWAYS_KIND:
            return f"{DUE_KEY}:{ALWAYS_SENTINEL}"
        if self.kind == DAY_KIND:
            return f"{DUE_KEY}:{_iso_day(self.value)}"
        if self.kind == DAILY_KIND:
            return f"{DUE_KEY}:daily-{self.value.hour:02d}{self.value.minute:02d}"
        if self.kind == INSTANT_KIND:
            v = self.value
            return f"{DUE_KEY}:{_iso_day(v)}T{v.hour:02d}{v.minute:02d}"
        raise ValueError(f"Unknown deadline kind: {self.kind}")

    def __str__(self) -> str:
        return self.encode()

    @classmethod
    def resolve(
        cls,
        text: str,
        base: Optional[date] = None,
        clock: Optional[Clock] = None,
    ) -> Optional["Deadline"]:
        """Decode the value of a `due:` pair.

        `today` and `<N>d` are relative to `base` (the todo's creation day)
        or to the clock's current day when there is no base. Returns None for
        values that are not a recognised deadline; the caller keeps those as
        plain metadata. A malformed day offset raises TodoParseError.
        """
        if text == TODAY_WORD:
            return cls.day(base or resolve_clock(clock).today())

        m = OFFSET_RE.match(text)
        if m:
            start = base or resolve_clock(clock).today()
            try:
                return cls.day(start + timedelta(days=int(m.group(1))))
            except OverflowError as e:
                raise TodoParseError(TodoParseError.BAD_DATE, text, "offset out of range") from e
        if OFFSET_LIKE_RE.match(text):
            raise TodoParseError(TodoParseError.BAD_DATE, text, "malformed day offset")

        if text == ALWAYS_SENTINEL:
            return cls.always()

        m = DAILY_RE.match(text)
        if m:
            try:
                return cls.daily(time(int(m.group(1)), int(m.group(2))))
            except ValueError:
                logger.debug("unrecognised daily deadline %r kept as metadata", text)
                return None

        m = INSTANT_RE.match(text)
        if m:
            try:
                day = date.fromisoformat(m.group(1))
                return cls.instant(datetime.combine(day, time(int(m.group(2)), int(m.group(3)))))
            except ValueError:
                logger.debug("unrecognised instant deadline %r kept as metadata", text)
                return None

        if ISO_DATE_RE.match(text):
            try:
                return cls.day(date.fromisoformat(text))
            except ValueError:
                logger.debug("invalid calendar day %r kept as metadata", text)
                return None
        return None


def _iso_day(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


NEVER = Deadline.never()
ALWAYS = Deadline.always()
