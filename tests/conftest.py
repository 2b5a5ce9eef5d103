import pytest

import worldcal
from worldcal.engines.definition import CalendarDefinition, IntercalarySpec, MonthSpec, WeekdaySpec
from worldcal.engines.factory import make_engine


@pytest.fixture
def gregorian():
    return worldcal.get_calendar("gregorian")


@pytest.fixture
def golarion():
    return worldcal.get_calendar("golarion")


@pytest.fixture
def harptos():
    return worldcal.get_calendar("harptos")


@pytest.fixture
def shire():
    return worldcal.get_calendar("shire")


@pytest.fixture
def tiny():
    """Three short months, a five-day week and one counting and one non-counting festival."""
    return make_engine(CalendarDefinition(
        id="tiny",
        months=(MonthSpec("One", 10), MonthSpec("Two", 10), MonthSpec("Three", 10)),
        weekdays=tuple(WeekdaySpec(n) for n in ("A", "B", "C", "D", "E")),
        intercalary=(
            IntercalarySpec("Dawn", before="One", days=2),
            IntercalarySpec("Still", after="Two", counts_for_weekdays=False),
        ),
    ))
