# resolver.py
"""Turn a tagged candidate's intermediate value into a typed output.

Context-free dimensions are coerced structurally. Datetime forms are grounded
against the `ResolverContext`: the reference instant in the context time zone
anchors every relative expression, and the result carries the grain implied
by the expression (or the context default for "now").
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

import pendulum

from dimension import (
    AmountOfMoneyValue,
    At,
    Calendar,
    DatetimeValue,
    DayOfWeek,
    DurationValue,
    Interval,
    Now,
    NumberValue,
    OrdinalValue,
    PercentageValue,
    RelativeGrain,
    Shift,
    TemperatureValue,
    TimeOfDay,
)
from errors import CoercionError, ResolutionError
from moment import Grain, ResolverContext, add_grain, make_date, start_of
from output import (
    AmountOfMoneyOutput,
    DatetimeIntervalOutput,
    DatetimeOutput,
    DurationOutput,
    FloatOutput,
    IntegerOutput,
    OrdinalOutput,
    Output,
    OutputKind,
    PercentageOutput,
    TemperatureOutput,
)

logger = logging.getLogger(__name__)

# years scanned when a date omits its year; weekday/date combinations repeat within 28 years
_YEAR_SEARCH = 28
_MONTH_SEARCH = 12 * _YEAR_SEARCH

Grounded = Tuple[pendulum.DateTime, Grain]


def resolve(candidate, context: ResolverContext) -> Output:
    """Resolve a tagged `Candidate` under `context`."""
    return resolve_value(candidate.kind, candidate.node.value, context)


def resolve_value(kind: OutputKind, value, context: ResolverContext) -> Output:
    dim = getattr(value, "dim", None)
    if dim is None or not kind.match_dim(dim):
        raise CoercionError(f"{type(value).__name__} cannot be resolved as {kind.value}")

    if isinstance(value, NumberValue):
        if isinstance(value.value, bool):
            raise CoercionError("boolean is not a number")
        if isinstance(value.value, int):
            return IntegerOutput(value.value)
        return FloatOutput(float(value.value))
    if isinstance(value, OrdinalValue):
        return OrdinalOutput(int(value.value))
    if isinstance(value, PercentageValue):
        return PercentageOutput(float(value.value))
    if isinstance(value, TemperatureValue):
        return TemperatureOutput(float(value.value), unit=value.unit)
    if isinstance(value, AmountOfMoneyValue):
        return AmountOfMoneyOutput(float(value.value), precision=value.precision, unit=value.unit)
    if isinstance(value, DurationValue):
        if not value.period:
            raise CoercionError("empty duration")
        return DurationOutput(tuple(value.period), precision=value.precision)
    if isinstance(value, DatetimeValue):
        return _resolve_datetime(value, context)
    raise CoercionError(f"no resolver for {type(value).__name__}")


def _resolve_datetime(value: DatetimeValue, ctx: ResolverContext) -> Output:
    form = value.form
    if isinstance(form, Interval):
        start, start_grain = ground(form.start, ctx)
        anchor = start if _anchored(form.end) else None
        end, end_grain = ground(form.end, ctx, anchor)
        if end < start:
            raise ResolutionError(f"interval ends before it starts: {start} > {end}")
        return DatetimeIntervalOutput(start, end, grain=min(start_grain, end_grain),
                                      precision=value.precision, latent=value.latent)
    moment, grain = ground(form, ctx)
    return DatetimeOutput(moment, grain=grain, precision=value.precision, latent=value.latent)


def _anchored(form) -> bool:
    """Forms read relative to the interval start rather than to "now"."""
    return isinstance(form, (DayOfWeek, Calendar, TimeOfDay, At))


def ground(form, ctx: ResolverContext, ref: Optional[pendulum.DateTime] = None) -> Grounded:
    """Ground a single (non-interval) time form to an instant and its grain."""
    ref = ref if ref is not None else ctx.reference_time
    if isinstance(form, Now):
        return start_of(ref, ctx.default_grain, ctx.week_start), ctx.default_grain
    if isinstance(form, RelativeGrain):
        base = start_of(ref, form.grain, ctx.week_start)
        return add_grain(base, form.grain, form.offset), form.grain
    if isinstance(form, DayOfWeek):
        return _day_of_week(form, ref), Grain.DAY
    if isinstance(form, Calendar):
        return _calendar(form, ctx, ref), form.grain
    if isinstance(form, TimeOfDay):
        return _time_of_day(form, ref), form.grain
    if isinstance(form, At):
        day, grain = ground(form.date, ctx, ref)
        if grain != Grain.DAY:
            raise ResolutionError(f"cannot put a time on a {grain.label}")
        t = form.time
        return day.set(hour=t.hour, minute=t.minute, second=0, microsecond=0), t.grain
    if isinstance(form, Shift):
        return _shift(form, ref)
    if isinstance(form, Interval):
        raise ResolutionError("nested intervals are not supported")
    raise ResolutionError(f"unknown time form {type(form).__name__}")


def _day_of_week(form: DayOfWeek, ref: pendulum.DateTime) -> pendulum.DateTime:
    today = ref.start_of("day")
    if form.direction == "last":
        back = (today.weekday() - form.weekday) % 7 or 7
        return today.subtract(days=back)
    ahead = (form.weekday - today.weekday()) % 7
    if ahead == 0 and form.direction != "this":
        ahead = 7
    return today.add(days=ahead)


def _calendar(c: Calendar, ctx: ResolverContext, ref: pendulum.DateTime) -> pendulum.DateTime:
    tz = ctx.timezone
    today = ref.start_of("day")

    if c.year is not None and c.month is not None and c.day is not None:
        dt = make_date(tz, c.year, c.month, c.day)
        if dt is None:
            raise ResolutionError(f"invalid date {c.year}-{c.month}-{c.day}")
        if c.weekday is not None and dt.weekday() != c.weekday:
            raise ResolutionError(f"{dt.to_date_string()} is not weekday {c.weekday}")
        return dt
    if c.year is not None:
        return pendulum.datetime(c.year, c.month or 1, 1, tz=tz)

    if c.month is not None and c.day is not None:
        for year in range(today.year, today.year + _YEAR_SEARCH + 1):
            dt = make_date(tz, year, c.month, c.day)
            if dt is not None and dt >= today and (c.weekday is None or dt.weekday() == c.weekday):
                return dt
        raise ResolutionError(f"no upcoming {c.month}/{c.day} matching weekday {c.weekday}")

    if c.month is not None:
        year = today.year if c.month >= today.month else today.year + 1
        return pendulum.datetime(year, c.month, 1, tz=tz)

    if c.day is not None:
        month_start = today.start_of("month")
        for i in range(_MONTH_SEARCH):
            m = month_start.add(months=i)
            dt = make_date(tz, m.year, m.month, c.day)
            if dt is not None and dt >= today and (c.weekday is None or dt.weekday() == c.weekday):
                return dt
        raise ResolutionError(f"no upcoming day {c.day} matching weekday {c.weekday}")

    raise ResolutionError("empty calendar expression")


def _time_of_day(t: TimeOfDay, ref: pendulum.DateTime) -> pendulum.DateTime:
    hours = {t.hour}
    if t.ambiguous:
        hours.add((t.hour + 12) % 24)
    floor = ref.start_of("minute")
    day = ref.start_of("day")
    for offset in (0, 1):
        base = day.add(days=offset)
        options = [base.set(hour=h, minute=t.minute) for h in sorted(hours)]
        upcoming = [o for o in options if o >= floor]
        if upcoming:
            return min(upcoming)
    raise ResolutionError(f"cannot place {t.hour}:{t.minute:02d}")


def _shift(s: Shift, ref: pendulum.DateTime) -> Grounded:
    dt = ref
    for grain, n in s.period:
        dt = add_grain(dt, grain, s.sign * n)
    finest = min(g for g, _ in s.period)
    if finest >= Grain.DAY:
        return dt.start_of("day"), Grain.DAY
    return dt.start_of("second"), finest
