"""Smoke tests that ensure the parsing libraries the grammar leans on load correctly."""


def test_dateparser_roundtrip():
    import dateparser

    dt = dateparser.parse("5/12/2024", settings={"DATE_ORDER": "MDY", "TIMEZONE": "UTC"})
    assert dt is not None and (dt.year, dt.month, dt.day) == (2024, 5, 12)


def test_number_parser_words():
    from number_parser import parse_number, parse_ordinal

    assert parse_number("seventeen") == 17
    assert parse_ordinal("third") == 3


def test_price_parser_symbol():
    from price_parser import Price

    p = Price.fromstring("$20")
    assert p.currency == "$"
    assert float(p.amount) == 20.0


def test_pendulum_week_math():
    import pendulum

    dt = pendulum.datetime(2013, 2, 12, 4, 30, tz="UTC")
    assert dt.day_of_week == pendulum.TUESDAY
    assert dt.start_of("day").hour == 0
