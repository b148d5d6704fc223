# dimension.py
"""Intermediate values carried by parse nodes.

Every value has a `dim` tag. Most dims map to exactly one output kind (see
`output.OutputKind.for_dimension`); `TIME_GRAIN` and `MONEY_UNIT` are
building blocks for larger rules and never surface on their own.
Datetime values hold an unresolved *time form* that the resolver grounds
against a `ResolverContext`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

from moment import Grain

EXACT = "exact"
APPROXIMATE = "approximate"


class DimensionKind(Enum):
    NUMBER = "number"
    ORDINAL = "ordinal"
    PERCENTAGE = "percentage"
    TEMPERATURE = "temperature"
    AMOUNT_OF_MONEY = "amount_of_money"
    DURATION = "duration"
    DATETIME = "datetime"
    TIME_GRAIN = "time_grain"
    MONEY_UNIT = "money_unit"


@dataclass(frozen=True)
class NumberValue:
    """A cardinal number.

    grain: power of ten of the last word-level component (``twenty`` -> 1,
    ``thousand`` -> 3); None for digit strings. Used by the composition rules
    to only add smaller components to larger ones.
    multipliable: a bare power word (hundred, thousand...) that can scale a
    preceding number.
    """
    dim: ClassVar[DimensionKind] = DimensionKind.NUMBER
    value: Union[int, float]
    grain: Optional[int] = None
    multipliable: bool = False
    from_words: bool = False
    latent: bool = False

    @property
    def is_int(self) -> bool:
        return isinstance(self.value, int)


@dataclass(frozen=True)
class OrdinalValue:
    dim: ClassVar[DimensionKind] = DimensionKind.ORDINAL
    value: int
    latent: bool = False


@dataclass(frozen=True)
class PercentageValue:
    dim: ClassVar[DimensionKind] = DimensionKind.PERCENTAGE
    value: float
    latent: bool = False


@dataclass(frozen=True)
class TemperatureValue:
    dim: ClassVar[DimensionKind] = DimensionKind.TEMPERATURE
    value: float
    unit: Optional[str] = None      # "degree", "celsius", "fahrenheit", "kelvin"
    latent: bool = False


@dataclass(frozen=True)
class AmountOfMoneyValue:
    dim: ClassVar[DimensionKind] = DimensionKind.AMOUNT_OF_MONEY
    value: float
    unit: Optional[str] = None      # ISO code, or "$" when the dollar is ambiguous
    precision: str = EXACT
    latent: bool = False


@dataclass(frozen=True)
class DurationValue:
    dim: ClassVar[DimensionKind] = DimensionKind.DURATION
    period: Tuple[Tuple[Grain, int], ...]
    precision: str = EXACT
    latent: bool = False

    @property
    def finest(self) -> Grain:
        return min(g for g, _ in self.period)

    @property
    def coarsest(self) -> Grain:
        return max(g for g, _ in self.period)


@dataclass(frozen=True)
class TimeGrainValue:
    dim: ClassVar[DimensionKind] = DimensionKind.TIME_GRAIN
    grain: Grain
    latent: bool = False


@dataclass(frozen=True)
class MoneyUnitValue:
    dim: ClassVar[DimensionKind] = DimensionKind.MONEY_UNIT
    code: str
    latent: bool = False


# ---- datetime forms ---------------------------------------------------------

@dataclass(frozen=True)
class Now:
    pass


@dataclass(frozen=True)
class RelativeGrain:
    """`offset` whole `grain` buckets away from the current one (today, next month)."""
    grain: Grain
    offset: int


@dataclass(frozen=True)
class DayOfWeek:
    weekday: int                    # 0 = Monday
    direction: Optional[str] = None  # None, "this", "next", "last"


@dataclass(frozen=True)
class Calendar:
    """Any subset of year / month / day, optionally pinned to a weekday."""
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    weekday: Optional[int] = None

    @property
    def grain(self) -> Grain:
        if self.day is not None:
            return Grain.DAY
        if self.month is not None:
            return Grain.MONTH
        return Grain.YEAR


@dataclass(frozen=True)
class TimeOfDay:
    hour: int
    minute: int = 0
    ambiguous: bool = False         # 12-hour clock reading, am/pm unknown

    @property
    def grain(self) -> Grain:
        return Grain.HOUR if self.minute == 0 else Grain.MINUTE


@dataclass(frozen=True)
class At:
    date: "TimeForm"
    time: TimeOfDay


@dataclass(frozen=True)
class Shift:
    period: Tuple[Tuple[Grain, int], ...]
    sign: int                       # +1 future, -1 past


@dataclass(frozen=True)
class Interval:
    start: "TimeForm"
    end: "TimeForm"


TimeForm = Union[Now, RelativeGrain, DayOfWeek, Calendar, TimeOfDay, At, Shift, Interval]


@dataclass(frozen=True)
class DatetimeValue:
    dim: ClassVar[DimensionKind] = DimensionKind.DATETIME
    form: TimeForm
    latent: bool = False
    precision: str = EXACT


Dimension = Union[
    NumberValue, OrdinalValue, PercentageValue, TemperatureValue, AmountOfMoneyValue,
    DurationValue, DatetimeValue, TimeGrainValue, MoneyUnitValue,
]
