from datetime import date

import pytest

from bells import DEFAULT_CATALOG, FormatError, Letter, Range, SchoolYear, Special, SpecialCatalog, resolve_friday
from bells.specials import (
    BUILTIN_SPECIALS,
    FAST_DAY,
    FRIDAY_SPECIAL,
    REGULAR_SPECIAL,
    ROSH_CHODESH,
    ROTATE_SPECIAL,
    WINTER_FRIDAY_SPECIAL,
)


def test_catalog_holds_every_builtin():
    assert len(DEFAULT_CATALOG) == 11
    assert set(DEFAULT_CATALOG.names) == {
        "M or R day",
        "A, B, or C day",
        "Rosh Chodesh",
        "Tzom",
        "Friday",
        "Friday Rosh Chodesh",
        "Winter Friday",
        "Winter Friday Rosh Chodesh",
        "AM Assembly",
        "PM Assembly",
        "Early Dismissal",
    }
    for special in BUILTIN_SPECIALS:
        assert DEFAULT_CATALOG[special.name] is special
        assert special.name in DEFAULT_CATALOG


def test_builtin_tables():
    assert len(REGULAR_SPECIAL.periods) == 13
    assert REGULAR_SPECIAL.homeroom == 3
    assert REGULAR_SPECIAL.mincha == 10
    assert REGULAR_SPECIAL.periods[7] == Range.nums(12, 50, 1, 30)
    assert len(FRIDAY_SPECIAL.periods) == 8
    assert FRIDAY_SPECIAL.mincha is None
    assert FAST_DAY.skip == (6, 7, 8)
    assert FAST_DAY.homeroom is None


def test_unknown_name_is_an_error():
    with pytest.raises(FormatError):
        DEFAULT_CATALOG["Snow Day"]
    assert DEFAULT_CATALOG.get("Snow Day") is None


def test_duplicate_names_rejected():
    with pytest.raises(ValueError):
        SpecialCatalog([REGULAR_SPECIAL, REGULAR_SPECIAL])


@pytest.mark.parametrize("special", BUILTIN_SPECIALS, ids=lambda special: special.name)
def test_json_round_trip(special):
    parsed = Special.from_json(special.to_json())
    assert parsed == special
    assert parsed.periods == special.periods
    assert parsed.homeroom == special.homeroom
    assert parsed.mincha == special.mincha
    assert parsed.skip == special.skip


def test_from_json_by_name():
    assert Special.from_json("Tzom") is FAST_DAY
    assert Special.from_json(None) is None


def test_from_json_uses_given_catalog():
    catalog = SpecialCatalog([ROSH_CHODESH])
    assert Special.from_json("Rosh Chodesh", catalog) is ROSH_CHODESH
    with pytest.raises(FormatError):
        Special.from_json("Tzom", catalog)


def test_from_json_optional_markers():
    special = Special.from_json(
        {
            "name": "Snow Delay",
            "periods": [
                {"start": {"hour": 10, "minutes": 0}, "end": {"hour": 10, "minutes": 40}},
                {"start": {"hour": 10, "minutes": 45}, "end": {"hour": 11, "minutes": 25}},
            ],
        }
    )
    assert special.name == "Snow Delay"
    assert special.homeroom is None
    assert special.mincha is None
    assert special.skip == ()
    assert special.to_json().keys() == {"name", "periods"}


@pytest.mark.parametrize(
    "value",
    [
        42,
        ["Tzom"],
        {"periods": []},
        {"name": "Empty"},
        {"name": "Empty", "periods": []},
        {"name": "Bad", "periods": [{"start": {"hour": 8, "minutes": 0}, "end": {"hour": 8, "minutes": 45}}], "homeroom": "3"},
        {"name": "Bad", "periods": [{"start": {"hour": 8, "minutes": 0}, "end": {"hour": 8, "minutes": 45}}], "skip": "0"},
        {"name": "Bad", "periods": [{"start": {"hour": 8, "minutes": 0}, "end": {"hour": 8, "minutes": 45}}], "skip": ""},
        {"name": "Bad", "periods": [{"start": {"hour": 8, "minutes": 0}, "end": {"hour": 8, "minutes": 45}}], "skip": 0},
        {"name": "Bad", "periods": [{"start": {"hour": 8, "minutes": 0}, "end": {"hour": 8, "minutes": 45}}], "mincha": 1},
    ],
)
def test_from_json_invalid(value):
    with pytest.raises(FormatError):
        Special.from_json(value)


def test_periods_must_be_in_order():
    with pytest.raises(FormatError):
        Special("Backwards", (Range.nums(9, 0, 9, 40), Range.nums(8, 0, 8, 45)))
    with pytest.raises(FormatError):
        Special("Overlap", (Range.nums(8, 0, 8, 50), Range.nums(8, 45, 9, 30)))


def test_markers_must_point_at_periods():
    with pytest.raises(FormatError):
        Special("Short", (Range.nums(8, 0, 8, 45),), homeroom=1)
    with pytest.raises(FormatError):
        Special("Short", (Range.nums(8, 0, 8, 45),), skip=(-1,))


def test_specials_compare_by_name():
    impostor = Special("Rosh Chodesh", (Range.nums(8, 0, 8, 45),))
    assert impostor == ROSH_CHODESH
    assert hash(impostor) == hash(ROSH_CHODESH)
    assert FAST_DAY != ROSH_CHODESH
    assert str(FAST_DAY) == "Tzom"


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2026, 9, 4), FRIDAY_SPECIAL),
        (date(2026, 10, 15), FRIDAY_SPECIAL),
        (date(2026, 10, 31), FRIDAY_SPECIAL),
        (date(2026, 11, 1), WINTER_FRIDAY_SPECIAL),
        (date(2026, 11, 20), WINTER_FRIDAY_SPECIAL),
        (date(2026, 12, 15), WINTER_FRIDAY_SPECIAL),
        (date(2027, 1, 8), WINTER_FRIDAY_SPECIAL),
        (date(2027, 2, 26), WINTER_FRIDAY_SPECIAL),
        (date(2027, 3, 1), FRIDAY_SPECIAL),
        (date(2027, 3, 19), FRIDAY_SPECIAL),
        (date(2027, 4, 16), FRIDAY_SPECIAL),
        (date(2027, 7, 2), FRIDAY_SPECIAL),
        (date(2027, 8, 13), FRIDAY_SPECIAL),
    ],
)
def test_resolve_friday(today, expected):
    result = resolve_friday(today)
    assert result is expected


def test_resolve_friday_with_custom_school_year():
    year = SchoolYear(winter_friday_day_start=15, winter_friday_day_end=20)
    assert resolve_friday(date(2026, 11, 14), school_year=year) is FRIDAY_SPECIAL
    assert resolve_friday(date(2026, 11, 15), school_year=year) is WINTER_FRIDAY_SPECIAL
    assert resolve_friday(date(2027, 3, 19), school_year=year) is WINTER_FRIDAY_SPECIAL
    assert resolve_friday(date(2027, 3, 20), school_year=year) is FRIDAY_SPECIAL


def test_school_year_validates_months():
    with pytest.raises(ValueError):
        SchoolYear(school_start=13)
    with pytest.raises(ValueError):
        SchoolYear(winter_friday_day_end=0)


@pytest.mark.parametrize(
    "letter, expected",
    [
        (Letter.A, ROTATE_SPECIAL),
        (Letter.B, ROTATE_SPECIAL),
        (Letter.C, ROTATE_SPECIAL),
        (Letter.M, REGULAR_SPECIAL),
        (Letter.R, REGULAR_SPECIAL),
    ],
)
def test_default_for_weekdays(letter, expected):
    assert DEFAULT_CATALOG.default_for(letter, date(2026, 12, 15)) is expected


def test_default_for_fridays_depends_on_date():
    for letter in (Letter.E, Letter.F):
        assert DEFAULT_CATALOG.default_for(letter, date(2026, 10, 16)) is FRIDAY_SPECIAL
        assert DEFAULT_CATALOG.default_for(letter, date(2026, 12, 18)) is WINTER_FRIDAY_SPECIAL


def test_catalog_without_friday_cannot_default_fridays():
    catalog = SpecialCatalog([REGULAR_SPECIAL, ROTATE_SPECIAL])
    assert catalog.default_for(Letter.M, date(2026, 10, 16)) is REGULAR_SPECIAL
    with pytest.raises(FormatError):
        catalog.default_for(Letter.E, date(2026, 10, 16))
