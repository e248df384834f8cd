import time
from datetime import datetime

import pytest

from miniscript.dateformat import format_date, parse_date


@pytest.fixture
def moment():
    dt = datetime(2021, 3, 4, 5, 6, 7)
    return dt, dt.timestamp()


def test_default_format_round_trip():
    t = parse_date("2023-02-01 13:45:30")
    assert format_date(t) == "2023-02-01 13:45:30"
    assert parse_date(format_date(t)) == t


def test_sortable_format(moment):
    _, t = moment
    assert format_date(t, "s") == "2021-03-04T05:06:07"


def test_short_and_long_time(moment):
    _, t = moment
    assert format_date(t, "t") == format_date(t, "HH:mm")
    assert format_date(t, "T") == format_date(t, "HH:mm:ss")
    assert format_date(t, "T").startswith(format_date(t, "t"))


def test_twelve_hour_clock():
    midnight = datetime(2021, 3, 4, 0, 15).timestamp()
    afternoon = datetime(2021, 3, 4, 13, 15).timestamp()
    assert format_date(midnight, "hh") == "12"
    assert format_date(afternoon, "%h") == "1"
    assert format_date(afternoon, "HH") == "13"


def test_invalid_single_character_spec(moment):
    _, t = moment
    assert format_date(t, "q") == ""


def test_quoted_literals(moment):
    dt, t = moment
    assert format_date(t, "'yyyy'") == "yyyy"
    assert format_date(t, 'x"MM"yyyy') == "xMM" + str(dt.year)


def test_backslash_escape(moment):
    dt, t = moment
    assert format_date(t, "\\yyyyy") == "y" + str(dt.year)


def test_fractional_seconds(moment):
    _, t = moment
    assert format_date(t + 0.25, "ss.ff") == format_date(t, "ss") + ".25"
    assert format_date(t, "FF") == ""
    assert format_date(t + 0.5, "%F") == "5"


def test_long_date_contains_year_and_names(moment):
    dt, t = moment
    result = format_date(t, "D")
    tm = time.localtime(t)
    assert result.endswith(str(dt.year))
    assert result.startswith(time.strftime("%A", tm) + ", ")
    assert time.strftime("%B", tm) in result


def test_era_and_am_pm(moment):
    _, t = moment
    tm = time.localtime(t)
    assert format_date(t, "gg") == "A.D."
    assert format_date(t, "tt") == time.strftime("%p", tm)
    assert format_date(t, "%t") == time.strftime("%p", tm)[:1]


def test_out_of_range_time_gives_empty():
    assert format_date(1e300, "yyyy") == ""


def test_parse_pm_time():
    expected = int(datetime(2021, 3, 4, 13, 30).timestamp())
    assert parse_date("2021-03-04 01:30 PM") == expected
    assert parse_date("2021-03-04 1:30 p") == expected


def test_parse_time_only_uses_today():
    t = parse_date("10:20:30")
    parsed = datetime.fromtimestamp(t)
    today = datetime.now().date()
    assert parsed.date() == today
    assert (parsed.hour, parsed.minute, parsed.second) == (10, 20, 30)


def test_parse_missing_day_normalises():
    assert parse_date("2021-03") == int(datetime(2021, 2, 28).timestamp())


def test_parse_unrepresentable_raises():
    with pytest.raises(ValueError):
        parse_date("99999999-01-01")