# grammar_en.py
"""English rules and example corpus.

Rules are grouped by dimension. Word numbers go through `number_parser`,
currency amounts with a leading symbol through `price_parser`, and numeric
slash dates through `dateparser`; everything else is composed from smaller
nodes by the rule engine in `rules.py`.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

import dateparser
from number_parser import parse_number, parse_ordinal
from price_parser import Price

from corpus import (
    CheckDuration,
    CheckFloat,
    CheckInteger,
    CheckInterval,
    CheckMoment,
    CheckMoney,
    CheckOrdinal,
    CheckPercentage,
    CheckTemperature,
    Example,
    example,
)
from dimension import (
    APPROXIMATE,
    AmountOfMoneyValue,
    At,
    Calendar,
    DatetimeValue,
    DayOfWeek,
    DurationValue,
    Interval,
    MoneyUnitValue,
    Now,
    NumberValue,
    OrdinalValue,
    PercentageValue,
    RelativeGrain,
    Shift,
    TemperatureValue,
    TimeGrainValue,
    TimeOfDay,
)
from moment import Grain, WEEKDAYS
from output import OutputKind
from rules import Rule, RuleSet, dim, pattern

# ---- vocabulary ---------------------------------------------------------------

_UNITS = ("one|two|three|four|five|six|seven|eight|nine|ten|eleven|twelve|thirteen|"
          "fourteen|fifteen|sixteen|seventeen|eighteen|nineteen")
_TENS = "twenty|thirty|forty|fourty|fifty|sixty|seventy|eighty|ninety"
_POWERS = {"hundred": 2, "thousand": 3, "million": 6, "billion": 9}

_ORDINAL_WORDS = ("first|second|third|fourth|fifth|sixth|seventh|eighth|ninth|tenth|"
                  "eleventh|twelfth|thirteenth|fourteenth|fifteenth|sixteenth|seventeenth|"
                  "eighteenth|nineteenth|twentieth|thirtieth|fortieth|fiftieth|sixtieth|"
                  "seventieth|eightieth|ninetieth|hundredth")

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
_MONTH_RE = (r"\b(january|jan|february|feb|march|mar|april|apr|may|june|jun|july|jul|"
             r"august|aug|september|sept|sep|october|oct|november|nov|december|dec)\b\.?")

_WEEKDAY_RE = r"\b(monday|tuesday|tues|wednesday|thursday|thurs|friday|saturday|sunday)\b"

_GRAIN_PREFIX = {
    "se": Grain.SECOND, "mi": Grain.MINUTE, "ho": Grain.HOUR, "hr": Grain.HOUR,
    "da": Grain.DAY, "we": Grain.WEEK, "mo": Grain.MONTH, "ye": Grain.YEAR, "yr": Grain.YEAR,
}

_CURRENCIES = {
    "$": "$", "dollar": "$", "buck": "$", "usd": "USD",
    "€": "EUR", "euro": "EUR", "eur": "EUR",
    "£": "GBP", "pound": "GBP", "gbp": "GBP",
    "¥": "JPY", "yen": "JPY", "jpy": "JPY",
    "cent": "cent",
}

_APPROX = r"~|\b(?:about|around|approximately|roughly|nearly|almost)\b"

_DIRECTIONS = {
    "this": "this", "current": "this", "next": "next", "coming": "next", "upcoming": "next",
    "last": "last", "past": "last", "previous": "last",
}


def _currency_code(token: str) -> Optional[str]:
    t = token.strip().lower()
    if t in _CURRENCIES:
        return _CURRENCIES[t]
    if t.endswith("s") and t[:-1] in _CURRENCIES:
        return _CURRENCIES[t[:-1]]
    return None


# ---- predicates -----------------------------------------------------------------

def _is_int(v) -> bool:
    return isinstance(v, NumberValue) and v.is_int


def _int_between(lo: int, hi: int):
    return dim(NumberValue, lambda v: v.is_int and lo <= v.value <= hi, f"int {lo}..{hi}")


def _year_number(v) -> bool:
    return _is_int(v) and not v.from_words and 1000 <= v.value <= 2100


def _day_of(v) -> Optional[int]:
    if isinstance(v, OrdinalValue) and 1 <= v.value <= 31:
        return v.value
    if _is_int(v) and 1 <= v.value <= 31:
        return v.value
    if isinstance(v, DatetimeValue) and isinstance(v.form, Calendar):
        c = v.form
        if c.day is not None and c.month is None and c.year is None and c.weekday is None:
            return c.day
    return None


def _form(cls, test=None):
    """Datetime node whose form is an instance of `cls`."""
    return dim(DatetimeValue,
               lambda v: isinstance(v.form, cls) and (test is None or test(v.form, v)),
               f"datetime {getattr(cls, '__name__', 'form')}")


def _month_only(c: Calendar, v) -> bool:
    return c.month is not None and c.day is None and c.year is None and c.weekday is None


def _month_day(c: Calendar, v) -> bool:
    return c.month is not None and c.day is not None and c.year is None


def _is_day_form(form) -> bool:
    if isinstance(form, DayOfWeek):
        return True
    if isinstance(form, RelativeGrain):
        return form.grain == Grain.DAY
    if isinstance(form, Calendar):
        return form.day is not None
    return False


def _is_point_form(form) -> bool:
    return not isinstance(form, Interval)


# ---- numbers --------------------------------------------------------------------

def _word_number(m):
    word = m.group(0).lower()
    if word == "zero":
        return NumberValue(0, grain=0, from_words=True)
    n = parse_number(word, language="en")
    if n is None:
        return None
    return NumberValue(int(n), grain=1 if n >= 10 else 0, from_words=True)


def _tens(m):
    n = parse_number(m.group(0).lower().replace("fourty", "forty"), language="en")
    if n is None:
        return None
    return NumberValue(int(n), grain=1, from_words=True)


def _power(m):
    g = _POWERS[m.group(0).lower()]
    return NumberValue(10 ** g, grain=g, multipliable=True, from_words=True)


def _digits(m):
    return NumberValue(int(m.group(0).replace(",", "")))


def _decimal(m):
    return NumberValue(float(m.group(0)))


def _negate(_m, n):
    if n.value <= 0:
        return None
    return NumberValue(-n.value)


def _multiply(a, p):
    # "five hundred thousand" but not "thousand hundred"
    if not 1 <= a.value < 1000 or a.grain >= p.grain:
        return None
    return NumberValue(a.value * p.value, grain=p.grain, from_words=True)


def _sum(left, _m, right):
    g = left.grain
    if g is None or g < 1 or left.value % (10 ** g) != 0:
        return None
    if not (0 < right.value < 10 ** g):
        return None
    return NumberValue(left.value + right.value, grain=right.grain, from_words=True)


_word_num = dim(NumberValue, lambda v: v.from_words and v.is_int and v.value >= 0, "word number")
_positive = dim(NumberValue, lambda v: v.value > 0, "positive number")


def _number_rules() -> List[Rule]:
    return [
        Rule("number: zero..nineteen", (pattern(rf"\b(?:zero|{_UNITS})\b"),), _word_number),
        Rule("number: tens", (pattern(rf"\b(?:{_TENS})\b"),), _tens),
        Rule("number: powers of ten", (pattern(r"\b(?:hundred|thousand|million|billion)\b"),), _power),
        Rule("number: comma grouped digits",
             (pattern(r"(?<!\d)(?<!\d[.,])\d{1,3}(?:,\d{3})+(?!\d|,\d|\.\d)"),), _digits),
        Rule("number: digits",
             (pattern(r"(?<!\d)(?<!\d[.,])\d+(?!\d|,\d{3}(?!\d)|\.\d)(?!st\b|nd\b|rd\b|th\b)"),), _digits),
        Rule("number: decimal", (pattern(r"(?<!\d)(?<!\d[.,])\d*\.\d+(?!\d|\.\d)"),), _decimal),
        Rule("number: negative",
             (pattern(r"(?<!\w)-|\bminus\b|\bnegative\b"), _positive), _negate),
        Rule("number: multiply",
             (_word_num, dim(NumberValue, lambda v: v.multipliable, "power of ten")), _multiply),
        Rule("number: sum", (_word_num, pattern(r"(?:-|\band\b)?"), _word_num), _sum),
    ]


# ---- ordinals -------------------------------------------------------------------

def _ordinal_word(m):
    n = parse_ordinal(m.group(0).lower())
    if n is None:
        return None
    return OrdinalValue(int(n))


def _ordinal_digits(m):
    return OrdinalValue(int(m.group(1)))


def _ordinal_compound(tens, _m, unit):
    if not 1 <= unit.value <= 9:
        return None
    return OrdinalValue(tens.value + unit.value)


def _ordinal_rules() -> List[Rule]:
    return [
        Rule("ordinal: words", (pattern(rf"\b(?:{_ORDINAL_WORDS})\b"),), _ordinal_word),
        Rule("ordinal: digits", (pattern(r"(?<!\d)(\d+)\s?(?:st|nd|rd|th)\b"),), _ordinal_digits),
        Rule("ordinal: tens and unit",
             (dim(NumberValue, lambda v: v.from_words and v.grain == 1 and v.value % 10 == 0
                  and 20 <= v.value <= 90, "tens"),
              pattern(r"-?"),
              dim(OrdinalValue)),
             _ordinal_compound),
    ]


# ---- temperature / percentage -----------------------------------------------------

_TEMP_UNITS = {"c": "celsius", "f": "fahrenheit", "k": "kelvin", "centigrade": "celsius"}


def _temp_unit(t, m):
    word = m.group(0).lower()
    return TemperatureValue(t.value, unit=_TEMP_UNITS.get(word, word))


def _temperature_rules() -> List[Rule]:
    return [
        Rule("temperature: bare number", (dim(NumberValue),),
             lambda n: TemperatureValue(float(n.value), latent=True)),
        Rule("temperature: degrees",
             (dim(TemperatureValue, lambda t: t.unit is None), pattern(r"°|\bdeg(?:rees?)?\b")),
             lambda t, _m: TemperatureValue(t.value, unit="degree")),
        Rule("temperature: named scale",
             (dim(TemperatureValue, lambda t: t.unit in (None, "degree")),
              pattern(r"\b(?:celsius|centigrade|fahrenheit|kelvin)\b")),
             _temp_unit),
        Rule("temperature: scale letter",
             (dim(TemperatureValue, lambda t: t.unit == "degree"), pattern(r"[cfk]\b")),
             _temp_unit),
    ]


def _percentage_rules() -> List[Rule]:
    return [
        Rule("percentage: number percent",
             (dim(NumberValue), pattern(r"%|\bper\s?cent\b")),
             lambda n, _m: PercentageValue(float(n.value))),
    ]


# ---- money ----------------------------------------------------------------------

def _money_unit(m):
    code = _currency_code(m.group(0))
    return MoneyUnitValue(code) if code else None


def _price(m):
    price = Price.fromstring(m.group(0))
    if price.amount is None:
        return None
    return AmountOfMoneyValue(price.amount_float, unit=_currency_code(price.currency or "") or price.currency)


def _money_rules() -> List[Rule]:
    non_negative = dim(NumberValue, lambda v: v.value >= 0, "non-negative number")
    return [
        Rule("money: currency",
             (pattern(r"[$€£¥]|\b(?:dollars?|bucks?|euros?|pounds?|cents?|yen|usd|eur|gbp|jpy)\b"),),
             _money_unit),
        Rule("money: symbol amount",
             (pattern(r"[$€£¥]\s?\d{1,3}(?:,\d{3})*(?:\.\d+)?(?![\d,])|[$€£¥]\s?\d+(?:\.\d+)?(?!\d)"),),
             _price),
        Rule("money: amount currency", (non_negative, dim(MoneyUnitValue)),
             lambda n, u: AmountOfMoneyValue(float(n.value), unit=u.code)),
        Rule("money: code amount",
             (pattern(r"\b(?:usd|eur|gbp|jpy)\b"), non_negative),
             lambda m, n: AmountOfMoneyValue(float(n.value), unit=_currency_code(m.group(0)))),
        Rule("money: approximately",
             (pattern(_APPROX), dim(AmountOfMoneyValue, lambda a: a.precision != APPROXIMATE)),
             lambda _m, a: AmountOfMoneyValue(a.value, unit=a.unit, precision=APPROXIMATE)),
    ]


# ---- durations ------------------------------------------------------------------

def _grain(m):
    return TimeGrainValue(_GRAIN_PREFIX[m.group(0).lower()[:2]])


def _merge_durations(a, _m, b):
    if b.coarsest >= a.finest:
        return None
    return DurationValue(a.period + b.period, precision=a.precision)


def _duration_rules() -> List[Rule]:
    return [
        Rule("duration: unit",
             (pattern(r"\b(?:sec(?:ond)?s?|min(?:ute)?s?|hours?|hrs?|days?|weeks?|months?|years?|yrs?)\b"),),
             _grain),
        Rule("duration: count unit",
             (dim(NumberValue, lambda v: v.is_int and v.value >= 0, "count"), dim(TimeGrainValue)),
             lambda n, g: DurationValue(((g.grain, n.value),))),
        Rule("duration: a unit", (pattern(r"\ban?\b"), dim(TimeGrainValue)),
             lambda _m, g: DurationValue(((g.grain, 1),))),
        Rule("duration: half an hour", (pattern(r"\bhalf an? hour\b"),),
             lambda _m: DurationValue(((Grain.MINUTE, 30),))),
        Rule("duration: composite",
             (dim(DurationValue), pattern(r"(?:\band\b)?"), dim(DurationValue)),
             _merge_durations),
        Rule("duration: approximately",
             (pattern(_APPROX), dim(DurationValue, lambda d: d.precision != APPROXIMATE)),
             lambda _m, d: DurationValue(d.period, precision=APPROXIMATE)),
    ]


# ---- datetimes ------------------------------------------------------------------

def _dt(form, latent: bool = False, precision: str = "exact") -> DatetimeValue:
    return DatetimeValue(form, latent=latent, precision=precision)


_RELATIVE_DAYS = {
    "today": 0, "tomorrow": 1, "yesterday": -1,
    "day after tomorrow": 2, "day before yesterday": -2,
}


def _relative_day(m):
    key = " ".join(m.group(1).lower().split())
    if key.startswith("the "):
        key = key[4:]
    return _dt(RelativeGrain(Grain.DAY, _RELATIVE_DAYS[key]))


def _relative_grain(m):
    direction = _DIRECTIONS[m.group(1).lower()]
    offset = {"this": 0, "next": 1, "last": -1}[direction]
    return _dt(RelativeGrain(Grain.from_str(m.group(2)), offset))


def _weekday(m):
    word = m.group(1).lower()
    idx = next(i for i, name in enumerate(WEEKDAYS) if name.startswith(word[:3]))
    return _dt(DayOfWeek(idx))


def _weekday_direction(m, v):
    return _dt(DayOfWeek(v.form.weekday, _DIRECTIONS[m.group(0).lower()]))


def _month(m):
    word = m.group(1).lower()
    return _dt(Calendar(month=_MONTHS[word[:3]]), latent=(word == "may"))


def _iso_date(m):
    y, mo, d = int(m.group(1)), int(m.group(2)), int(m.group(3))
    if not (1 <= mo <= 12 and 1 <= d <= 31):
        return None
    return _dt(Calendar(year=y, month=mo, day=d))


def _slash_date(m):
    if m.group(3) is None:
        mo, d = int(m.group(1)), int(m.group(2))
        if not (1 <= mo <= 12 and 1 <= d <= 31):
            return None
        return _dt(Calendar(month=mo, day=d))
    parsed = dateparser.parse(m.group(0), languages=["en"], settings={"DATE_ORDER": "MDY"})
    if parsed is None:
        return None
    return _dt(Calendar(year=parsed.year, month=parsed.month, day=parsed.day))


def _with_year(v, n):
    c = v.form
    return _dt(Calendar(year=n.value, month=c.month, day=c.day, weekday=c.weekday))


def _clock(m):
    h, mi = int(m.group(1)), int(m.group(2))
    return _dt(TimeOfDay(h, mi, ambiguous=1 <= h <= 12))


def _am_pm(v, m):
    t = v.form
    if not 1 <= t.hour <= 12:
        return None
    hour = t.hour % 12 + (12 if m.group(1).lower() == "p" else 0)
    return _dt(TimeOfDay(hour, t.minute))


def _hour(n, latent: bool) -> Optional[DatetimeValue]:
    h = int(n.value)
    return _dt(TimeOfDay(h, 0, ambiguous=1 <= h <= 12), latent=latent)


def _interval(a, b):
    return _dt(Interval(a.form, b.form), latent=a.latent and b.latent)


_time_form = _form(TimeOfDay, lambda t, v: not v.latent)
_day_form = dim(DatetimeValue, lambda v: _is_day_form(v.form), "datetime day")
_point = dim(DatetimeValue, lambda v: _is_point_form(v.form), "datetime point")
_duration = dim(DurationValue)
_year = dim(NumberValue, _year_number, "year")


def _datetime_rules() -> List[Rule]:
    return [
        Rule("datetime: now", (pattern(r"\b(?:right |just )?now\b"),), lambda _m: _dt(Now())),
        Rule("datetime: relative day",
             (pattern(r"\b((?:the\s+)?day\s+after\s+tomorrow|(?:the\s+)?day\s+before\s+yesterday|"
                      r"today|tomorrow|yesterday)\b"),),
             _relative_day),
        Rule("datetime: this/next/last grain",
             (pattern(r"\b(this|current|next|coming|upcoming|last|past|previous)\s+(week|month|year)\b"),),
             _relative_grain),
        Rule("datetime: day of week", (pattern(_WEEKDAY_RE),), _weekday),
        Rule("datetime: this/next/last day of week",
             (pattern(r"\b(?:this|next|coming|upcoming|last|past|previous)\b"),
              _form(DayOfWeek, lambda d, v: d.direction is None)),
             _weekday_direction),
        Rule("datetime: month", (pattern(_MONTH_RE),), _month),
        Rule("datetime: the ordinal day", (pattern(r"\bthe\b"), dim(OrdinalValue, lambda o: 1 <= o.value <= 31)),
             lambda _m, o: _dt(Calendar(day=o.value), latent=True)),
        Rule("datetime: month day",
             (_form(Calendar, _month_only), dim(object, lambda v: _day_of(v) is not None, "day of month")),
             lambda c, d: _dt(Calendar(month=c.form.month, day=_day_of(d)))),
        Rule("datetime: day of month",
             (dim(object, lambda v: _day_of(v) is not None, "day of month"),
              pattern(r"(?:\bof\b)?"),
              _form(Calendar, _month_only)),
             lambda d, _m, c: _dt(Calendar(month=c.form.month, day=_day_of(d)))),
        Rule("datetime: date year", (_form(Calendar, _month_day), _year), _with_year),
        Rule("datetime: month year", (_form(Calendar, _month_only), _year), _with_year),
        Rule("datetime: in year", (pattern(r"\bin\b"), _year),
             lambda _m, n: _dt(Calendar(year=n.value))),
        Rule("datetime: bare year", (_year,), lambda n: _dt(Calendar(year=n.value), latent=True)),
        Rule("datetime: iso date", (pattern(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b"),), _iso_date),
        Rule("datetime: slash date", (pattern(r"\b(\d{1,2})/(\d{1,2})(?:/(\d{2}|\d{4}))?\b"),), _slash_date),
        Rule("datetime: weekday date",
             (_form(DayOfWeek, lambda d, v: d.direction is None),
              _form(Calendar, lambda c, v: c.day is not None and c.weekday is None)),
             lambda w, c: _dt(Calendar(c.form.year, c.form.month, c.form.day, w.form.weekday))),
        Rule("datetime: clock time", (pattern(r"(?<!\d)([01]?\d|2[0-3]):([0-5]\d)(?!\d)"),), _clock),
        Rule("datetime: am pm",
             (_form(TimeOfDay, lambda t, v: t.ambiguous), pattern(r"([ap])\.?m\.?(?!\w)")),
             _am_pm),
        Rule("datetime: noon", (pattern(r"\b(?:noon|midday)\b"),), lambda _m: _dt(TimeOfDay(12, 0))),
        Rule("datetime: midnight", (pattern(r"\bmidnight\b"),), lambda _m: _dt(TimeOfDay(0, 0))),
        Rule("datetime: at time", (pattern(r"\bat\b|@"), _form(TimeOfDay)),
             lambda _m, v: _dt(v.form)),
        Rule("datetime: o'clock", (_int_between(0, 23), pattern(r"o'?\s?clock\b")),
             lambda n, _m: _hour(n, latent=False)),
        Rule("datetime: bare hour", (_int_between(0, 23),), lambda n: _hour(n, latent=True)),
        Rule("datetime: date at time", (_day_form, _time_form),
             lambda d, t: _dt(At(d.form, t.form))),
        Rule("datetime: time on date", (_time_form, pattern(r"(?:\bon\b)?"), _day_form),
             lambda t, _m, d: _dt(At(d.form, t.form))),
        Rule("datetime: in duration", (pattern(r"\b(?:in|within)\b"), _duration),
             lambda _m, d: _dt(Shift(d.period, 1), precision=d.precision)),
        Rule("datetime: duration ago", (_duration, pattern(r"\bago\b")),
             lambda d, _m: _dt(Shift(d.period, -1), precision=d.precision)),
        Rule("datetime: duration from now", (_duration, pattern(r"\b(?:from now|later|hence)\b")),
             lambda d, _m: _dt(Shift(d.period, 1), precision=d.precision)),
        Rule("datetime: from to",
             (pattern(r"\bfrom\b"), _point, pattern(r"\b(?:to|until|till|through)\b|-"), _point),
             lambda _a, x, _b, y: _interval(x, y)),
        Rule("datetime: between and",
             (pattern(r"\bbetween\b"), _point, pattern(r"\band\b"), _point),
             lambda _a, x, _b, y: _interval(x, y)),
    ]


# ---- registry hooks ---------------------------------------------------------------

@lru_cache(maxsize=1)
def rule_set() -> RuleSet:
    return RuleSet(
        _number_rules()
        + _ordinal_rules()
        + _temperature_rules()
        + _percentage_rules()
        + _money_rules()
        + _duration_rules()
        + _datetime_rules()
    )


def dims() -> List[OutputKind]:
    return OutputKind.all()


def examples() -> List[Example]:
    D, H, M = Grain.DAY, Grain.HOUR, Grain.MINUTE
    return [
        # numbers
        example(CheckInteger(0), "0", "zero"),
        example(CheckInteger(1), "1", "one"),
        example(CheckInteger(12), "12", "twelve"),
        example(CheckInteger(21), "21", "twenty-one", "twenty one"),
        example(CheckInteger(33), "33", "thirty three", "thirty-three"),
        example(CheckInteger(100), "100", "one hundred", "hundred"),
        example(CheckInteger(105), "105", "one hundred and five", "one hundred five"),
        example(CheckInteger(1200), "1,200", "1200", "one thousand two hundred", "twelve hundred"),
        example(CheckInteger(5000000), "5000000", "five million", "5,000,000"),
        example(CheckInteger(1521082), "1521082", "1,521,082",
                "one million five hundred twenty-one thousand eighty-two"),
        example(CheckInteger(-5), "-5", "minus five", "negative 5"),
        example(CheckFloat(3.5), "3.5"),
        example(CheckFloat(0.25), "0.25", ".25"),
        # ordinals
        example(CheckOrdinal(1), "first", "1st"),
        example(CheckOrdinal(3), "third", "3rd"),
        example(CheckOrdinal(12), "twelfth", "12th"),
        example(CheckOrdinal(21), "twenty-first", "twenty first", "21st"),
        # percentages
        example(CheckPercentage(12.0), "12%", "12 percent", "twelve per cent"),
        example(CheckPercentage(3.5), "3.5%", "3.5 percent"),
        # temperatures
        example(CheckTemperature(20.0, "degree"), "20 degrees", "20°", "twenty degrees"),
        example(CheckTemperature(20.0, "celsius"), "20 degrees celsius", "20°C", "20 celsius"),
        example(CheckTemperature(-5.0, "fahrenheit"), "-5 degrees fahrenheit", "minus five °F"),
        # money
        example(CheckMoney(20.0, "$"), "$20", "20 dollars", "20$", "twenty bucks"),
        example(CheckMoney(5.2, "$"), "$5.20"),
        example(CheckMoney(10.0, "EUR"), "€10", "10 euros", "EUR 10", "10 eur"),
        example(CheckMoney(3.0, "GBP"), "£3", "3 pounds"),
        example(CheckMoney(50.0, "cent"), "50 cents", "fifty cents"),
        example(CheckMoney(20.0, "$", "approximate"), "about $20", "around 20 dollars"),
        # durations
        example(CheckDuration({D: 3}), "3 days", "three days"),
        example(CheckDuration({H: 1}), "an hour", "1 hour", "one hour"),
        example(CheckDuration({M: 30}), "half an hour", "30 minutes", "30 mins"),
        example(CheckDuration({H: 2, M: 15}), "2 hours and 15 minutes", "2 hours 15 minutes"),
        example(CheckDuration({Grain.WEEK: 1}), "a week", "one week"),
        example(CheckDuration({D: 2}, "approximate"), "about 2 days", "around two days"),
        # datetimes, reference is Tuesday 2013-02-12 04:30 UTC
        example(CheckMoment((2013, 2, 12, 4, 30), Grain.SECOND), "now", "right now"),
        example(CheckMoment((2013, 2, 12), D), "today", "this tuesday"),
        example(CheckMoment((2013, 2, 13), D), "tomorrow"),
        example(CheckMoment((2013, 2, 11), D), "yesterday", "last monday"),
        example(CheckMoment((2013, 2, 14), D), "the day after tomorrow"),
        example(CheckMoment((2013, 2, 18), Grain.WEEK), "next week"),
        example(CheckMoment((2013, 3, 1), Grain.MONTH), "next month"),
        example(CheckMoment((2013, 1, 1), Grain.MONTH), "last month"),
        example(CheckMoment((2013, 1, 1), Grain.YEAR), "this year"),
        example(CheckMoment((2013, 2, 15), D), "friday", "next friday", "this friday"),
        example(CheckMoment((2013, 2, 18), D), "monday", "next monday"),
        example(CheckMoment((2013, 2, 19), D), "tuesday", "next tuesday"),
        example(CheckMoment((2013, 5, 12), D), "may 12", "12th of may", "the 12th of may", "may 12th"),
        example(CheckMoment((2017, 5, 12), D), "friday the 12th of may", "friday, may 12"),
        example(CheckMoment((2024, 5, 12), D), "may 12 2024", "may 12, 2024", "2024-05-12",
                "5/12/2024", "12th may 2024"),
        example(CheckMoment((2015, 3, 1), Grain.MONTH), "march 2015"),
        example(CheckMoment((2015, 1, 1), Grain.YEAR), "in 2015"),
        example(CheckMoment((2013, 2, 12, 15, 0), H), "3pm", "3 pm", "15:00", "at 3pm", "at 15:00"),
        example(CheckMoment((2013, 2, 12, 15, 30), M), "3:30pm", "15:30", "at 3:30 pm"),
        example(CheckMoment((2013, 2, 12, 12, 0), H), "noon", "at noon"),
        example(CheckMoment((2013, 2, 13, 0, 0), H), "midnight"),
        example(CheckMoment((2013, 2, 13, 15, 0), H), "tomorrow at 3pm", "tomorrow 3pm", "3pm tomorrow"),
        example(CheckMoment((2013, 2, 13, 5, 0), H), "tomorrow at 5"),
        example(CheckMoment((2013, 2, 15, 0, 0), D), "in three days", "in 3 days", "3 days from now"),
        example(CheckMoment((2013, 2, 12, 2, 30), H), "2 hours ago", "two hours ago"),
        example(CheckMoment((2013, 2, 12, 5, 0), M), "in 30 minutes", "in half an hour"),
        example(CheckMoment((2013, 2, 5), D), "a week ago", "one week ago"),
        example(CheckInterval((2013, 2, 18), (2013, 2, 22), D), "from monday to friday",
                "between monday and friday"),
        example(CheckInterval((2013, 2, 12, 15), (2013, 2, 12, 17), H), "from 3pm to 5pm",
                "between 3pm and 5pm"),
    ]
