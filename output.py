# output.py
"""Typed outputs returned by the parser and the closed set of output kinds."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Optional, Tuple, Type, TypeVar, Union

import pendulum

from dimension import DimensionKind
from errors import CoercionError
from moment import Grain


class OutputKind(Enum):
    NUMBER = "Number"
    ORDINAL = "Ordinal"
    PERCENTAGE = "Percentage"
    TEMPERATURE = "Temperature"
    AMOUNT_OF_MONEY = "AmountOfMoney"
    DURATION = "Duration"
    DATETIME = "Datetime"

    @classmethod
    def all(cls) -> List["OutputKind"]:
        """Default priority: kinds with explicit markers first, bare numbers last."""
        return [
            cls.AMOUNT_OF_MONEY,
            cls.PERCENTAGE,
            cls.TEMPERATURE,
            cls.DATETIME,
            cls.DURATION,
            cls.ORDINAL,
            cls.NUMBER,
        ]

    @classmethod
    def from_str(cls, name: str) -> "OutputKind":
        key = name.strip().replace("-", "").replace("_", "").lower()
        for kind in cls:
            if kind.value.lower() == key:
                return kind
        # `Time` is accepted as an alias of `Datetime`
        if key in ("time", "date", "temporal"):
            return cls.DATETIME
        raise ValueError(f"Unknown output kind {name!r}")

    @property
    def dimension(self) -> DimensionKind:
        return _KIND_TO_DIM[self]

    def match_dim(self, dim: DimensionKind) -> bool:
        return _KIND_TO_DIM[self] is dim

    @classmethod
    def for_dimension(cls, dim: DimensionKind) -> Optional["OutputKind"]:
        return _DIM_TO_KIND.get(dim)


_KIND_TO_DIM = {
    OutputKind.NUMBER: DimensionKind.NUMBER,
    OutputKind.ORDINAL: DimensionKind.ORDINAL,
    OutputKind.PERCENTAGE: DimensionKind.PERCENTAGE,
    OutputKind.TEMPERATURE: DimensionKind.TEMPERATURE,
    OutputKind.AMOUNT_OF_MONEY: DimensionKind.AMOUNT_OF_MONEY,
    OutputKind.DURATION: DimensionKind.DURATION,
    OutputKind.DATETIME: DimensionKind.DATETIME,
}
_DIM_TO_KIND = {d: k for k, d in _KIND_TO_DIM.items()}


@dataclass(frozen=True)
class IntegerOutput:
    kind: ClassVar[OutputKind] = OutputKind.NUMBER
    value: int


@dataclass(frozen=True)
class FloatOutput:
    kind: ClassVar[OutputKind] = OutputKind.NUMBER
    value: float


@dataclass(frozen=True)
class OrdinalOutput:
    kind: ClassVar[OutputKind] = OutputKind.ORDINAL
    value: int


@dataclass(frozen=True)
class PercentageOutput:
    kind: ClassVar[OutputKind] = OutputKind.PERCENTAGE
    value: float


@dataclass(frozen=True)
class TemperatureOutput:
    kind: ClassVar[OutputKind] = OutputKind.TEMPERATURE
    value: float
    unit: Optional[str] = None


@dataclass(frozen=True)
class AmountOfMoneyOutput:
    kind: ClassVar[OutputKind] = OutputKind.AMOUNT_OF_MONEY
    value: float
    precision: str
    unit: Optional[str] = None


@dataclass(frozen=True)
class DurationOutput:
    kind: ClassVar[OutputKind] = OutputKind.DURATION
    period: Tuple[Tuple[Grain, int], ...]
    precision: str

    def to_dict(self):
        return {g.unit: n for g, n in self.period}


@dataclass(frozen=True)
class DatetimeOutput:
    kind: ClassVar[OutputKind] = OutputKind.DATETIME
    moment: pendulum.DateTime
    grain: Grain
    precision: str
    latent: bool = False


@dataclass(frozen=True)
class DatetimeIntervalOutput:
    kind: ClassVar[OutputKind] = OutputKind.DATETIME
    start: pendulum.DateTime
    end: pendulum.DateTime
    grain: Grain
    precision: str
    latent: bool = False


Output = Union[
    IntegerOutput, FloatOutput, OrdinalOutput, PercentageOutput, TemperatureOutput,
    AmountOfMoneyOutput, DurationOutput, DatetimeOutput, DatetimeIntervalOutput,
]

T = TypeVar("T")


def attempt_into(output: Output, cls: Type[T]) -> T:
    """Return `output` as `cls` or raise CoercionError; never converts between types."""
    if isinstance(output, cls):
        return output
    raise CoercionError(f"Cannot convert {type(output).__name__} into {cls.__name__}")


def output_to_dict(output: Output) -> dict:
    """JSON-friendly rendering used by the CLI and analysis reports."""
    d = {"kind": output.kind.value, "type": type(output).__name__}
    if isinstance(output, DatetimeOutput):
        d.update(value=output.moment.isoformat(), grain=output.grain.label,
                 precision=output.precision, latent=output.latent)
    elif isinstance(output, DatetimeIntervalOutput):
        d.update(start=output.start.isoformat(), end=output.end.isoformat(),
                 grain=output.grain.label, precision=output.precision, latent=output.latent)
    elif isinstance(output, DurationOutput):
        d.update(period=output.to_dict(), precision=output.precision)
    elif isinstance(output, AmountOfMoneyOutput):
        d.update(value=output.value, unit=output.unit, precision=output.precision)
    elif isinstance(output, TemperatureOutput):
        d.update(value=output.value, unit=output.unit)
    else:
        d["value"] = output.value
    return d
