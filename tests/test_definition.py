import logging

import pytest

from worldcal.core.errors import ConfigurationError
from worldcal.engines.definition import (
    CalendarDefinition,
    IntercalarySpec,
    MonthSpec,
    SeasonSpec,
    WeekdaySpec,
    YearSettings,
)
from worldcal.engines.leap import CustomLeap, GregorianLeap
from worldcal.engines.specs import ALL_SPECS

MONTHS = (MonthSpec("A", 30), MonthSpec("B", 30))
WEEK = (WeekdaySpec("X"), WeekdaySpec("Y"), WeekdaySpec("Z"))


def test_minimal_definition_defaults():
    d = CalendarDefinition(id="min", months=MONTHS, weekdays=WEEK)
    assert d.epoch == 0
    assert d.leap_month is None
    assert d.time.seconds_per_day == 86400
    assert d.month_index("B") == 2


def test_lists_are_frozen_to_tuples():
    d = CalendarDefinition(id="l", months=list(MONTHS), weekdays=list(WEEK))
    assert isinstance(d.months, tuple)
    assert isinstance(d.weekdays, tuple)


@pytest.mark.parametrize("kwargs", [
    {"months": ()},
    {"weekdays": ()},
    {"months": (MonthSpec("A", 30), MonthSpec("A", 31))},
    {"weekdays": (WeekdaySpec("X"), WeekdaySpec("X"))},
    {"intercalary": (IntercalarySpec("F", after="Nope"),)},
    {"intercalary": (IntercalarySpec("F", after="A"), IntercalarySpec("F", before="B"))},
    {"leap_rule": CustomLeap(interval=4, month="Nope")},
    {"year": YearSettings(start_day=3)},
    {"world_time": "sometimes"},
    {"world_time": "real-time-based"},
    {"seasons": (SeasonSpec("S", 1, 31),)},
    {"seasons": (SeasonSpec("S", 3),)},
    {"seasons": (SeasonSpec("S", 1, sunrise=6.0, sunset=25.0),)},
])
def test_invalid_definitions(kwargs):
    base = {"id": "bad", "months": MONTHS, "weekdays": WEEK}
    base.update(kwargs)
    with pytest.raises(ConfigurationError):
        CalendarDefinition(**base)


def test_invalid_parts():
    with pytest.raises(ConfigurationError):
        MonthSpec("A", 0)
    with pytest.raises(ConfigurationError):
        MonthSpec("", 10)
    with pytest.raises(ConfigurationError):
        IntercalarySpec("F")
    with pytest.raises(ConfigurationError):
        IntercalarySpec("F", after="A", before="B")
    with pytest.raises(ConfigurationError):
        IntercalarySpec("F", after="A", days=0)
    with pytest.raises(ConfigurationError):
        YearSettings(epoch=1.5)
    with pytest.raises(ConfigurationError):
        YearSettings(current_year="1492")
    with pytest.raises(ConfigurationError):
        SeasonSpec("S", 1, sunrise=6.0)
    with pytest.raises(ConfigurationError):
        SeasonSpec("S", 1, sunrise=19.0, sunset=7.0)
    with pytest.raises(ConfigurationError):
        SeasonSpec("S", "1")


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        CalendarDefinition(id="bad", months=(), weekdays=WEEK)


def test_leap_target_resolution():
    on_default = CalendarDefinition(id="a", months=MONTHS, weekdays=WEEK, leap_rule=GregorianLeap())
    assert on_default.leap_month == 2

    own_days = CalendarDefinition(
        id="b", months=(MonthSpec("A", 30, leap_days=1), MonthSpec("B", 30)), weekdays=WEEK,
        leap_rule=GregorianLeap(),
    )
    assert own_days.leap_month is None

    named = CalendarDefinition(id="c", months=MONTHS, weekdays=WEEK, leap_rule=GregorianLeap(month="A"))
    assert named.leap_month == 1

    festival = CalendarDefinition(
        id="d", months=MONTHS, weekdays=WEEK,
        intercalary=(IntercalarySpec("Fest", after="A"),),
        leap_rule=GregorianLeap(month="Fest"),
    )
    assert festival.leap_month is None
    assert festival.leap_intercalary == "Fest"


def test_tweak_revalidates():
    d = CalendarDefinition(id="t", months=MONTHS, weekdays=WEEK)
    assert d.tweak(year=YearSettings(epoch=100)).epoch == 100
    with pytest.raises(ConfigurationError):
        d.tweak(weekdays=())


def test_from_dict_full():
    d = CalendarDefinition.from_dict({
        "id": "realm",
        "name": "Realm",
        "months": [{"name": "Frost", "days": 30}, {"name": "Thaw", "days": 29, "leapDays": 1}],
        "weekdays": [{"name": "Sun"}, {"name": "Moon", "abbreviation": "Mo"}],
        "year": {"epoch": 100, "suffix": " R", "startDay": 1},
        "leapYear": {"rule": "custom", "interval": 3},
        "time": {"hoursInDay": 20, "minutesInHour": 50, "secondsInMinute": 40},
        "intercalary": [{"name": "Eve", "before": "Frost", "countsForWeekdays": False, "leapYearOnly": True}],
    })
    assert d.name == "Realm"
    assert d.epoch == 100
    assert d.weekdays[1].abbreviation == "Mo"
    assert d.months[1].leap_days == 1
    assert d.time.seconds_per_day == 20 * 50 * 40
    assert d.intercalary[0].leap_only
    assert not d.intercalary[0].counts_for_weekdays
    assert d.intercalary[0].placement == "before"


def test_from_dict_missing_sections_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="worldcal.engines.definition"):
        d = CalendarDefinition.from_dict({
            "id": "bare",
            "months": [{"name": "Only", "days": 100}],
            "weekdays": [{"name": "Day"}],
        })
    assert d.epoch == 0
    assert d.time.hours_per_day == 24
    assert "missing year data" in caplog.text
    assert "missing leapYear data" in caplog.text
    assert "missing time data" in caplog.text


@pytest.mark.parametrize("data", [
    {"id": "x", "weekdays": [{"name": "D"}]},
    {"id": "x", "months": [{"name": "M", "days": 1}]},
    {"id": "x", "months": [{"days": 1}], "weekdays": [{"name": "D"}]},
    {"id": "x", "months": [{"name": "M", "days": "ten"}], "weekdays": [{"name": "D"}]},
    ["not", "a", "mapping"],
    {"id": "x", "months": [{"name": "M", "days": 1}], "weekdays": [{"name": "D"}], "year": 5},
    {"id": "x", "months": [{"name": "M", "days": 1}], "weekdays": [{"name": "D"}], "time": "24h"},
    {"id": "x", "months": [{"name": "M", "days": 1}], "weekdays": [{"name": "D"}], "leapYear": [1]},
    {"id": "x", "months": [{"name": "M", "days": 1}], "weekdays": [{"name": "D"}], "worldTime": "real"},
    {"id": "x", "months": ["Jan"], "weekdays": [{"name": "D"}]},
    {"id": "x", "months": [{"name": "M", "days": 1}], "weekdays": [{"name": "D"}], "intercalary": ["Feast"]},
    {"id": "x", "months": [{"name": "M", "days": 1}], "weekdays": [{"name": "D"}], "year": {"currentYear": "1492"}},
])
def test_from_dict_rejects_malformed(data):
    with pytest.raises(ConfigurationError):
        CalendarDefinition.from_dict(data)


def test_real_time_based_world_time_from_dict():
    d = CalendarDefinition.from_dict({
        "months": [{"name": "M", "days": 10}],
        "weekdays": [{"name": "D"}],
        "year": {"epoch": 0},
        "leapYear": {"rule": "none"},
        "time": {"hoursInDay": 24, "minutesInHour": 60, "secondsInMinute": 60},
        "worldTime": {"interpretation": "real-time-based", "currentYear": 1492},
    })
    assert d.world_time == "real-time-based"
    assert d.year.current_year == 1492


@pytest.mark.parametrize("name", sorted(ALL_SPECS))
def test_builtin_definitions_survive_schema(name):
    d = ALL_SPECS[name]
    assert CalendarDefinition.from_dict(d.to_dict()) == d


def test_season_may_start_on_the_leap_day():
    months = (MonthSpec("Jan", 31), MonthSpec("Feb", 28), MonthSpec("Mar", 31))
    d = CalendarDefinition(
        id="leapday", months=months, weekdays=WEEK,
        leap_rule=GregorianLeap(month="Feb"),
        seasons=(SeasonSpec("S", 2, 29),),
    )
    assert d.seasons[0].start_day == 29
    with pytest.raises(ConfigurationError):
        CalendarDefinition(id="noleap", months=months, weekdays=WEEK, seasons=(SeasonSpec("S", 2, 29),))


def test_season_fields_from_dict():
    d = CalendarDefinition.from_dict({
        "id": "sunny",
        "months": [{"name": "A", "days": 10}, {"name": "B", "days": 10}],
        "weekdays": [{"name": "D"}],
        "year": {"epoch": 0},
        "leapYear": {"rule": "none"},
        "time": {"hoursInDay": 20, "minutesInHour": 50, "secondsInMinute": 50},
        "seasons": [
            {"name": "Bright", "startMonth": 1, "endMonth": 1, "endDay": 10, "sunrise": "04:25", "sunset": "16:00"},
            {"name": "Dim", "startMonth": 2, "startDay": 1, "sunrise": 7, "sunset": 13.5},
        ],
    })
    bright, dim = d.seasons
    assert (bright.end_month, bright.end_day) == (1, 10)
    assert bright.sunrise == 4.5
    assert bright.sunset == 16.0
    assert dim.sun_hours(20) == (7.0, 13.5)
    assert CalendarDefinition.from_dict(d.to_dict()) == d

    with pytest.raises(ConfigurationError):
        CalendarDefinition.from_dict({
            "months": [{"name": "A", "days": 10}], "weekdays": [{"name": "D"}],
            "seasons": [{"name": "S", "startMonth": 1, "sunrise": "dawn", "sunset": "18:00"}],
        })


def test_season_sun_defaults():
    assert SeasonSpec("Summer", 6).sun_hours(24) == (5.75, 20.25)
    assert SeasonSpec("Fall", 9).sun_hours(24) == (6.5, 19.5)
    assert SeasonSpec("Monsoon", 6).sun_hours(20) == (5.0, 15.0)
