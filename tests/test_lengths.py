import random

import pytest

from worldcal.core.errors import InvalidInputError


def test_plan_layout(tiny):
    plan = tiny.year_plan(0)
    assert [(s.name, s.offset, s.weekday_offset) for s in plan.segments] == [
        ("Dawn", 0, 0),
        ("One", 2, 2),
        ("Two", 12, 12),
        ("Still", 22, 22),
        ("Three", 23, 22),
    ]
    assert plan.length == 33
    assert plan.weekday_length == 32


def test_exactly_two_plans_are_shared(gregorian):
    assert gregorian.year_plan(2023) is gregorian.year_plan(1999)
    assert gregorian.year_plan(2024) is gregorian.year_plan(2000)
    assert gregorian.year_plan(2023) is not gregorian.year_plan(2024)


def test_gregorian_lengths(gregorian):
    assert gregorian.get_year_length(2023) == 365
    assert gregorian.get_year_length(2024) == 366
    assert gregorian.get_year_length(1900) == 365
    assert gregorian.month_length(2024, 2) == 29
    assert gregorian.month_length(2023, 2) == 28
    assert gregorian.month_lengths(2023)[0] == 31


def test_month_out_of_range(tiny):
    with pytest.raises(InvalidInputError):
        tiny.month_length(0, 4)
    with pytest.raises(InvalidInputError):
        tiny.month_length(0, 0)


@pytest.mark.parametrize("year", [1372, 1373])
def test_year_length_is_months_plus_active_intercalary(harptos, year):
    active = sum(s.length for s in harptos.year_plan(year).segments if s.is_intercalary)
    assert harptos.get_year_length(year) == sum(harptos.month_lengths(year)) + active
    assert harptos.get_year_length(year) == (366 if year % 4 == 0 else 365)


def test_month_leap_days_apply_only_in_leap_years():
    from worldcal.engines.definition import CalendarDefinition, MonthSpec, WeekdaySpec
    from worldcal.engines.factory import make_engine
    from worldcal.engines.leap import CustomLeap

    eng = make_engine(CalendarDefinition(
        id="ld",
        months=(MonthSpec("A", 20, leap_days=2), MonthSpec("B", 20)),
        weekdays=(WeekdaySpec("W"),),
        leap_rule=CustomLeap(interval=3),
    ))
    assert eng.month_lengths(3) == (22, 20)
    assert eng.month_lengths(4) == (20, 20)


def test_days_before_accumulates_year_lengths(golarion):
    L = golarion.lengths
    for y in range(2600, 2800):
        assert L.days_before(y + 1) - L.days_before(y) == L.year_length(y)
    assert L.days_before(golarion.definition.epoch) == 0


def test_locate_inverts_days_before(tiny, harptos, gregorian):
    random.seed(11)
    for eng in (tiny, harptos, gregorian):
        L = eng.lengths
        for _ in range(2000):
            n = random.randint(-10**12, 10**12)
            year, doy = L.locate(n)
            assert 0 <= doy < L.year_length(year)
            assert L.days_before(year) + doy == n


def test_locate_near_year_boundaries(tiny):
    L = tiny.lengths
    assert L.days_before(5) == 165
    assert L.locate(165) == (5, 0)
    assert L.locate(164) == (4, 32)
    assert L.locate(-1) == (-1, 32)
    assert L.locate(0) == (0, 0)
