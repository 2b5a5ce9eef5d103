import math
import random
from datetime import datetime, timezone

import pytest

import worldcal
from worldcal.core.errors import InvalidInputError, InvalidInputWarning
from worldcal.core.types import CalendarDate, TimeOfDay
from worldcal.engines.definition import CalendarDefinition, MonthSpec, TimeUnits, WeekdaySpec, YearSettings
from worldcal.engines.factory import make_engine

ANCHOR_2025 = datetime(2025, 1, 1, tzinfo=timezone.utc).timestamp()
DAY = 86400


def _ymd(d):
    return (d.year, d.month, d.day)


# ---------------------------------------------------------
# Golarion-style scenario
# ---------------------------------------------------------

def test_golarion_anchor_scenario(golarion):
    d0 = golarion.world_time_to_date(0, ANCHOR_2025)
    assert _ymd(d0) == (4725, 1, 1)
    assert d0.time == TimeOfDay(0, 0, 0)

    assert _ymd(golarion.world_time_to_date(31 * DAY, ANCHOR_2025)) == (4725, 2, 1)

    two_years = golarion.get_year_length(4725) + golarion.get_year_length(4726)
    assert _ymd(golarion.world_time_to_date(two_years * DAY, ANCHOR_2025)) == (4727, 1, 1)


def test_golarion_leap_year_lengthens_calistril(golarion):
    assert golarion.is_leap_year(4724)
    assert golarion.month_length(4724, 2) == 29
    assert golarion.month_length(4725, 2) == 28


def test_scenario_through_module_api():
    d = worldcal.world_time_to_date(31 * DAY, calendar="golarion", anchor_timestamp=ANCHOR_2025)
    assert _ymd(d) == (4725, 2, 1)
    assert worldcal.date_to_world_time(d, calendar="golarion", anchor_timestamp=ANCHOR_2025) == 31 * DAY


# ---------------------------------------------------------
# Anchors
# ---------------------------------------------------------

def test_without_anchor_world_time_zero_is_the_epoch_year(golarion, gregorian):
    assert _ymd(golarion.world_time_to_date(0)) == (2700, 1, 1)
    assert _ymd(gregorian.world_time_to_date(0)) == (0, 1, 1)


def test_anchor_day_of_year_is_ignored(gregorian):
    mid_june = datetime(2025, 6, 15, 13, 30, tzinfo=timezone.utc).timestamp()
    assert _ymd(gregorian.world_time_to_date(0, mid_june)) == (2025, 1, 1)
    assert gregorian.start_year(mid_june) == 2025


def test_real_time_based_calendar_starts_at_current_year():
    eng = make_engine(CalendarDefinition(
        id="rt",
        months=(MonthSpec("M", 100),),
        weekdays=(WeekdaySpec("D"),),
        year=YearSettings(epoch=0, current_year=1492),
        world_time="real-time-based",
    ))
    assert _ymd(eng.world_time_to_date(0)) == (1492, 1, 1)
    assert eng.date_to_world_time(CalendarDate(1492, 1, 2)) == DAY


# ---------------------------------------------------------
# Round trip and ordering
# ---------------------------------------------------------

@pytest.mark.parametrize("name", ["gregorian", "golarion", "harptos", "shire"])
def test_round_trip(name):
    eng = worldcal.get_calendar(name)
    rng = random.Random(2024)
    for _ in range(1500):
        wt = rng.randint(-10**11, 10**11)
        d = eng.world_time_to_date(wt, ANCHOR_2025)
        assert eng.date_to_world_time(d, ANCHOR_2025) == wt


def test_round_trip_custom_time_units():
    eng = make_engine(CalendarDefinition(
        id="decimal",
        months=(MonthSpec("M", 10), MonthSpec("N", 10)),
        weekdays=(WeekdaySpec("D"), WeekdaySpec("E")),
        time=TimeUnits(hours_per_day=10, minutes_per_hour=100, seconds_per_minute=100),
    ))
    wt = 100000 + 3 * 10000 + 5 * 100 + 7
    d = eng.world_time_to_date(wt)
    assert _ymd(d) == (0, 1, 2)
    assert d.time == TimeOfDay(3, 5, 7)
    assert eng.date_to_world_time(d) == wt


def test_fractional_world_time_floors(gregorian):
    d = gregorian.world_time_to_date(1.7)
    assert d.time == TimeOfDay(0, 0, 1)
    assert gregorian.date_to_world_time(d) == 1


def test_negative_world_time(gregorian):
    d = gregorian.world_time_to_date(-1)
    assert _ymd(d) == (-1, 12, 31)
    assert d.time == TimeOfDay(23, 59, 59)
    assert d.weekday == 5  # Friday


def test_monotonic(harptos, shire):
    rng = random.Random(9)
    for eng in (harptos, shire):
        for _ in range(500):
            a = rng.randint(-10**10, 10**10)
            b = a + rng.randint(0, 400 * DAY)
            assert eng.compare(eng.world_time_to_date(a), eng.world_time_to_date(b)) <= 0


def test_intercalary_dates_come_out_of_conversion(harptos):
    start = harptos.date_to_world_time(CalendarDate(1372, 7, 30))
    mid = harptos.world_time_to_date(start + DAY)
    assert mid == CalendarDate(1372, 7, 1, None, TimeOfDay(), "Midsummer")
    shield = harptos.world_time_to_date(start + 2 * DAY)
    assert shield.intercalary == "Shieldmeet"
    assert _ymd(harptos.world_time_to_date(start + 3 * DAY)) == (1372, 8, 1)

    common = harptos.date_to_world_time(CalendarDate(1373, 7, 30))
    assert harptos.world_time_to_date(common + 2 * DAY).intercalary is None


# ---------------------------------------------------------
# Invalid input
# ---------------------------------------------------------

@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_world_time_is_contained(golarion, bad):
    with pytest.warns(InvalidInputWarning):
        d = golarion.world_time_to_date(bad, ANCHOR_2025)
    assert _ymd(d) == (4725, 1, 1)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_anchor_falls_back_to_epoch(golarion, bad):
    with pytest.warns(InvalidInputWarning):
        d = golarion.world_time_to_date(0, bad)
    assert _ymd(d) == (2700, 1, 1)


def test_non_finite_warnings_point_at_the_caller(golarion):
    with pytest.warns(InvalidInputWarning) as rec:
        golarion.world_time_to_date(math.nan, math.inf)
        golarion.date_to_world_time(CalendarDate(4725, 1, 1), -math.inf)
        golarion.start_year(math.nan)
    assert len(rec) == 4
    assert all(w.filename == __file__ for w in rec)


def test_huge_integer_world_time_stays_exact(tiny):
    wt = 10**400 * DAY + 12345
    d = tiny.world_time_to_date(wt)
    assert d.time == TimeOfDay(3, 25, 45)
    assert tiny.date_to_world_time(d) == wt
    assert tiny.start_year(10**400 * DAY) > 10**390


@pytest.mark.parametrize("date", [
    CalendarDate(2023, 2, 29),
    CalendarDate(2023, 13, 1),
    CalendarDate(2023, 0, 1),
    CalendarDate(2023, 1, 0),
    CalendarDate(2023, 1, 1, time=TimeOfDay(24, 0, 0)),
    CalendarDate(2023, 1, 1, time=TimeOfDay(0, 60, 0)),
    CalendarDate(2023, 1, 1, time=TimeOfDay(0, 0, -1)),
])
def test_out_of_range_dates_raise(gregorian, date):
    with pytest.raises(InvalidInputError):
        gregorian.date_to_world_time(date)


def test_clamp_policy(gregorian):
    clamped = gregorian.date_to_world_time(CalendarDate(2023, 2, 30, time=TimeOfDay(25, 61, 99)), policy="clamp")
    assert clamped == gregorian.date_to_world_time(CalendarDate(2023, 2, 28, time=TimeOfDay(23, 59, 59)))
    assert gregorian.date_to_world_time(CalendarDate(2023, 14, 40), policy="clamp") == \
        gregorian.date_to_world_time(CalendarDate(2023, 12, 31))


def test_unknown_policy(gregorian):
    with pytest.raises(ValueError):
        gregorian.date_to_world_time(CalendarDate(2023, 1, 1), policy="wrap")


def test_inactive_intercalary(harptos):
    date = CalendarDate(1373, 7, 1, intercalary="Shieldmeet")
    with pytest.raises(InvalidInputError):
        harptos.date_to_world_time(date)
    assert harptos.date_to_world_time(date, policy="clamp") == \
        harptos.date_to_world_time(CalendarDate(1373, 7, 30))


def test_intercalary_on_wrong_month(harptos):
    with pytest.raises(InvalidInputError):
        harptos.date_to_world_time(CalendarDate(1372, 6, 1, intercalary="Midsummer"))
    with pytest.raises(InvalidInputError):
        harptos.date_to_world_time(CalendarDate(1372, 7, 1, intercalary="Nonesuch"))
