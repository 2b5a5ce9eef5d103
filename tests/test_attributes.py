import pytest

import worldcal
from worldcal import CalendarDate
from worldcal.attributes.registry import compute_attributes, list_attributes
from worldcal.engines.definition import CalendarDefinition, MonthSpec, SeasonSpec, WeekdaySpec
from worldcal.engines.factory import make_engine


def _attrs(date, calendar="gregorian", names=()):
    return worldcal.date_info(date, calendar=calendar, attributes=names).attributes


def test_standard_attributes_are_registered():
    for name in ("weekday", "season", "sun", "moons", "year_label", "day_of_year"):
        assert name in list_attributes()


def test_weekday_attribute():
    a = _attrs(CalendarDate(2024, 1, 1), names=("weekday",))
    assert a == {"weekday": 1, "weekday_name": "Monday", "weekday_abbreviation": "Mo"}
    a = _attrs(CalendarDate(1372, 7, 1, intercalary="Midsummer"), "harptos", ("weekday",))
    assert a["weekday"] is None


@pytest.mark.parametrize("ymd, season", [
    ((2024, 1, 15), "Winter"),
    ((2024, 3, 20), "Spring"),
    ((2024, 7, 4), "Summer"),
    ((2024, 12, 25), "Winter"),
])
def test_season(ymd, season):
    assert _attrs(CalendarDate(*ymd), names=("season",))["season"] == season


def test_season_of_festival_follows_its_month():
    a = _attrs(CalendarDate(1372, 7, 1, intercalary="Midsummer"), "harptos", ("season",))
    assert a["season"] == "Summer"


def test_season_absent():
    assert _attrs(CalendarDate(1420, 3, 3), "shire", ("season",)) == {"season": None}


def _sun(engine, date):
    return compute_attributes(engine, engine.date_info(date), ["sun"])


def test_sun_blends_between_seasons():
    eng = make_engine(CalendarDefinition(
        id="twilight",
        months=(MonthSpec("Light", 10), MonthSpec("Dark", 10)),
        weekdays=(WeekdaySpec("Day"),),
        seasons=(SeasonSpec("High", 1, sunrise=4.0, sunset=20.0), SeasonSpec("Low", 2, sunrise=8.0, sunset=16.0)),
    ))
    assert _sun(eng, CalendarDate(0, 1, 1))["sunrise"] == 4.0
    mid = _sun(eng, CalendarDate(0, 1, 6))
    assert (mid["sunrise"], mid["sunset"]) == (6.0, 18.0)
    assert _sun(eng, CalendarDate(0, 2, 1))["sunset"] == 16.0
    # the last season blends back towards the first across the new year
    late = _sun(eng, CalendarDate(0, 2, 6))
    assert (late["sunrise_time"], late["sunset_time"]) == ("06:00", "18:00")


def test_sun_uses_named_season_defaults():
    a = _attrs(CalendarDate(2024, 3, 20), names=("sun",))
    assert (a["sunrise"], a["sunset"]) == (6.5, 17.75)
    assert (a["sunrise_time"], a["sunset_time"]) == ("06:30", "17:45")
    summer = _attrs(CalendarDate(2024, 8, 1), names=("sun",))
    assert 5.75 < summer["sunrise"] < 6.5


def test_sun_without_seasons_splits_the_day():
    assert _attrs(CalendarDate(1420, 3, 3), "shire", ("sun",)) == {
        "sunrise": 6.0, "sunset": 18.0, "sunrise_time": "06:00", "sunset_time": "18:00",
    }


@pytest.mark.parametrize("ymd, phase", [
    ((2000, 1, 6), "New Moon"),
    ((2000, 1, 21), "Full Moon"),
    ((1999, 12, 31), "Waning Crescent"),
])
def test_moon_phase(ymd, phase):
    (moon,) = _attrs(CalendarDate(*ymd), names=("moons",))["moons"]
    assert moon["name"] == "Luna"
    assert moon["phase"] == phase
    assert 0 <= moon["age"] < 29.530589


def test_year_label_and_day_of_year():
    a = _attrs(CalendarDate(4725, 2, 1), "golarion", ("year_label", "day_of_year"))
    assert a == {"year_label": "4725 AR", "day_of_year": 32}
    assert _attrs(CalendarDate(1420, 1, 1), "shire", ("year_label",))["year_label"] == "S.R. 1420"


def test_unknown_attribute():
    with pytest.raises(KeyError):
        _attrs(CalendarDate(2024, 1, 1), names=("tides",))
