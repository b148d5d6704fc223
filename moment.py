# moment.py
"""Time grains, the resolution context and a few calendar helpers.

All arithmetic is done on pendulum DateTimes in the context time zone so
that day boundaries ("today", "tomorrow") follow the caller's local clock.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Optional

import pendulum

from errors import ConfigurationError

logger = logging.getLogger(__name__)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class Grain(IntEnum):
    SECOND = 0
    MINUTE = 1
    HOUR = 2
    DAY = 3
    WEEK = 4
    MONTH = 5
    YEAR = 6

    @property
    def unit(self) -> str:
        """Keyword used by pendulum `add` / `subtract` (``days``, ``weeks``...)."""
        return self.name.lower() + "s"

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_str(cls, name: str) -> "Grain":
        key = name.strip().upper()
        if key.endswith("S"):
            key = key[:-1]
        try:
            return cls[key]
        except KeyError as e:
            raise ConfigurationError(f"Unknown grain {name!r}") from e


def _coerce_reference(value, tz: str) -> pendulum.DateTime:
    if isinstance(value, pendulum.DateTime):
        dt = value
    elif isinstance(value, datetime):
        # naive datetimes are read as wall-clock time in `tz`
        dt = pendulum.instance(value, tz=tz)
    elif isinstance(value, str):
        dt = pendulum.parse(value, tz=tz)
    else:
        raise ConfigurationError(f"Unsupported reference time {value!r}")
    return dt.in_timezone(tz)


@dataclass(frozen=True)
class ResolverContext:
    """Reference data needed to ground relative expressions.

    reference_time: the "now" used by relative expressions.
    timezone: IANA zone name; the reference is converted into it.
    default_grain: grain reported for expressions with no intrinsic grain ("now").
    week_start: first day of the week, 0 = Monday.
    """
    reference_time: pendulum.DateTime = field(default_factory=lambda: pendulum.now("UTC"))
    timezone: str = "UTC"
    default_grain: Grain = Grain.SECOND
    week_start: int = 0

    def __post_init__(self):
        try:
            pendulum.timezone(self.timezone)
        except (ValueError, KeyError) as e:
            raise ConfigurationError(f"Unknown timezone {self.timezone!r}") from e
        if not 0 <= int(self.week_start) <= 6:
            raise ConfigurationError(f"week_start must be in 0..6, got {self.week_start!r}")
        object.__setattr__(self, "reference_time", _coerce_reference(self.reference_time, self.timezone))
        object.__setattr__(self, "default_grain", Grain(self.default_grain))

    @property
    def now(self) -> pendulum.DateTime:
        return self.reference_time

    def to_dict(self):
        return {
            "reference_time": self.reference_time.isoformat(),
            "timezone": self.timezone,
            "default_grain": self.default_grain.label,
            "week_start": WEEKDAYS[self.week_start],
        }


def start_of(dt: pendulum.DateTime, grain: Grain, week_start: int = 0) -> pendulum.DateTime:
    """Truncate `dt` to the beginning of its `grain` bucket."""
    if grain == Grain.WEEK:
        day = dt.start_of("day")
        return day.subtract(days=(day.weekday() - week_start) % 7)
    return dt.start_of(grain.label)


def add_grain(dt: pendulum.DateTime, grain: Grain, n: int) -> pendulum.DateTime:
    if n >= 0:
        return dt.add(**{grain.unit: n})
    return dt.subtract(**{grain.unit: -n})


def make_date(tz: str, year: int, month: int, day: int) -> Optional[pendulum.DateTime]:
    """Midnight of the given day in `tz`, or None for impossible dates (Feb 30)."""
    try:
        return pendulum.datetime(year, month, day, tz=tz)
    except ValueError:
        return None
