# corpus.py
"""Example corpus types used to train and evaluate a language's scorer.

An `Example` lists surface forms that all mean the same thing and a check
that recognises the expected resolved output. Checks are plain callables on
an `Output`, evaluated under `TRAINING_CONTEXT`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Tuple

import pendulum

from moment import Grain, ResolverContext
from output import (
    AmountOfMoneyOutput,
    DatetimeIntervalOutput,
    DatetimeOutput,
    DurationOutput,
    FloatOutput,
    IntegerOutput,
    OrdinalOutput,
    Output,
    PercentageOutput,
    TemperatureOutput,
)

# Tuesday, 2013-02-12 04:30 UTC
TRAINING_CONTEXT = ResolverContext(
    reference_time=pendulum.datetime(2013, 2, 12, 4, 30, tz="UTC"),
    timezone="UTC",
)

_FIELDS = ("year", "month", "day", "hour", "minute", "second")


def _close(a: float, b: float, tol: float = 1e-6) -> bool:
    return abs(float(a) - float(b)) <= tol


def _prefix_matches(dt, prefix: Sequence[int]) -> bool:
    return all(getattr(dt, f) == v for f, v in zip(_FIELDS, prefix))


@dataclass(frozen=True)
class CheckInteger:
    value: int

    def __call__(self, out: Output) -> bool:
        return isinstance(out, IntegerOutput) and out.value == self.value


@dataclass(frozen=True)
class CheckFloat:
    value: float

    def __call__(self, out: Output) -> bool:
        return isinstance(out, FloatOutput) and _close(out.value, self.value)


@dataclass(frozen=True)
class CheckOrdinal:
    value: int

    def __call__(self, out: Output) -> bool:
        return isinstance(out, OrdinalOutput) and out.value == self.value


@dataclass(frozen=True)
class CheckPercentage:
    value: float

    def __call__(self, out: Output) -> bool:
        return isinstance(out, PercentageOutput) and _close(out.value, self.value)


@dataclass(frozen=True)
class CheckTemperature:
    value: float
    unit: Optional[str] = None

    def __call__(self, out: Output) -> bool:
        return (isinstance(out, TemperatureOutput) and _close(out.value, self.value)
                and out.unit == self.unit)


@dataclass(frozen=True)
class CheckMoney:
    value: float
    unit: Optional[str] = None
    precision: str = "exact"

    def __call__(self, out: Output) -> bool:
        return (isinstance(out, AmountOfMoneyOutput) and _close(out.value, self.value)
                and out.unit == self.unit and out.precision == self.precision)


@dataclass(frozen=True)
class CheckDuration:
    period: Dict[Grain, int] = field(default_factory=dict)
    precision: str = "exact"

    def __call__(self, out: Output) -> bool:
        return (isinstance(out, DurationOutput) and dict(out.period) == self.period
                and out.precision == self.precision)

    def __hash__(self):
        return hash(tuple(sorted(self.period.items())))


@dataclass(frozen=True)
class CheckMoment:
    """Datetime whose leading fields equal `prefix` (year, month, day, hour...)."""
    prefix: Tuple[int, ...]
    grain: Grain

    def __call__(self, out: Output) -> bool:
        return (isinstance(out, DatetimeOutput) and out.grain == self.grain
                and _prefix_matches(out.moment, self.prefix))


@dataclass(frozen=True)
class CheckInterval:
    start: Tuple[int, ...]
    end: Tuple[int, ...]
    grain: Grain

    def __call__(self, out: Output) -> bool:
        return (isinstance(out, DatetimeIntervalOutput) and out.grain == self.grain
                and _prefix_matches(out.start, self.start)
                and _prefix_matches(out.end, self.end))


@dataclass(frozen=True)
class Example:
    texts: Tuple[str, ...]
    check: Callable[[Output], bool]


def example(check: Callable[[Output], bool], *texts: str) -> Example:
    return Example(texts=tuple(texts), check=check)
