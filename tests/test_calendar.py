from datetime import date, datetime

import pytest

from bells import Day, FormatError, Letter, build_calendar, calendar_to_json, day_for
from bells.specials import FAST_DAY, FRIDAY_SPECIAL, WINTER_FRIDAY_SPECIAL

NOW = datetime(2026, 10, 19, 9, 0)


def test_single_entry():
    days = build_calendar({"15": {"letter": "M"}}, NOW)
    assert days == {date(2026, 10, 15): Day(Letter.M)}


def test_accepts_date():
    days = build_calendar({"15": {"letter": "M"}}, date(2026, 10, 1))
    assert list(days) == [date(2026, 10, 15)]


def test_full_month():
    data = {
        "19": {"letter": "M"},
        "20": {"letter": "A", "special": "Tzom"},
        "21": {"letter": None},
        "23": {"letter": "E"},
    }
    days = build_calendar(data, NOW)
    assert len(days) == 4
    assert days[date(2026, 10, 20)] == Day(Letter.A, FAST_DAY)
    assert not days[date(2026, 10, 21)].school
    assert days[date(2026, 10, 23)].special is FRIDAY_SPECIAL


def test_fridays_follow_now():
    days = build_calendar({"4": {"letter": "F"}}, date(2026, 12, 1))
    assert days[date(2026, 12, 4)].special is WINTER_FRIDAY_SPECIAL


def test_empty_month():
    assert build_calendar({}, NOW) == {}


@pytest.mark.parametrize("key", ["abc", "", "0", "32", "1.5", "1_5", "\u0661\u0665", "+15", " 15 ", "015"])
def test_invalid_day_of_month(key):
    with pytest.raises(FormatError):
        build_calendar({key: {"letter": "M"}}, NOW)


def test_day_must_exist_in_month():
    with pytest.raises(FormatError):
        build_calendar({"31": {"letter": "M"}}, date(2026, 11, 3))


def test_one_bad_day_fails_the_month():
    with pytest.raises(FormatError):
        build_calendar({"1": {"letter": "A"}, "2": {"letter": "Z"}}, NOW)


def test_calendar_must_be_a_mapping():
    with pytest.raises(FormatError):
        build_calendar([{"letter": "A"}], NOW)


def test_calendar_to_json_round_trip():
    data = {"2": {"letter": "B"}, "1": {"letter": "A", "special": "Tzom"}, "3": {"letter": None}}
    days = build_calendar(data, NOW)
    json = calendar_to_json(days)
    assert list(json) == ["1", "2", "3"]
    assert json["1"] == {"letter": "A", "special": FAST_DAY.to_json()}
    assert build_calendar(json, NOW) == days


def test_calendar_to_json_single_month_only():
    days = {date(2026, 10, 30): Day(Letter.M), date(2026, 11, 2): Day(Letter.M)}
    with pytest.raises(ValueError):
        calendar_to_json(days)


def test_day_for():
    days = build_calendar({"19": {"letter": "M"}}, NOW)
    assert day_for(days, NOW) == Day(Letter.M)
    assert day_for(days, date(2026, 10, 19)) == Day(Letter.M)
    assert day_for(days, date(2026, 10, 20)) is None


def test_same_day_twice():
    with pytest.raises(FormatError):
        build_calendar({"5": {"letter": "M"}, "05": {"letter": "A"}}, NOW)
