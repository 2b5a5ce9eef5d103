from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .definition import (
    CalendarDefinition,
    IntercalarySpec,
    MonthSpec,
    MoonPhaseSpec,
    MoonSpec,
    SeasonSpec,
    WeekdaySpec,
    YearSettings,
)
from .leap import CustomLeap, GregorianLeap


def _months(pairs: Sequence[Tuple[str, int]]) -> Tuple[MonthSpec, ...]:
    return tuple(MonthSpec(name=n, days=d, abbreviation=n[:3]) for n, d in pairs)


def _weekdays(names: Sequence[str]) -> Tuple[WeekdaySpec, ...]:
    return tuple(WeekdaySpec(name=n, abbreviation=n[:2]) for n in names)


def _eight_phases(cycle: float) -> Tuple[MoonPhaseSpec, ...]:
    """Four one-day principal phases with the rest of the cycle split between the four intermediate ones."""
    span = (cycle - 4) / 4
    return (
        MoonPhaseSpec("New Moon", 1, single_day=True),
        MoonPhaseSpec("Waxing Crescent", span),
        MoonPhaseSpec("First Quarter", 1, single_day=True),
        MoonPhaseSpec("Waxing Gibbous", span),
        MoonPhaseSpec("Full Moon", 1, single_day=True),
        MoonPhaseSpec("Waning Gibbous", span),
        MoonPhaseSpec("Last Quarter", 1, single_day=True),
        MoonPhaseSpec("Waning Crescent", span),
    )


# ============================================================
# GREGORIAN
# ============================================================

# Proleptic Gregorian, years as written (no year-zero gap). Day 1 of year 0 was a Saturday.
GREGORIAN = CalendarDefinition(
    id="gregorian",
    name="Gregorian",
    months=_months((
        ("January", 31), ("February", 28), ("March", 31), ("April", 30),
        ("May", 31), ("June", 30), ("July", 31), ("August", 31),
        ("September", 30), ("October", 31), ("November", 30), ("December", 31),
    )),
    weekdays=_weekdays(("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")),
    leap_rule=GregorianLeap(month="February"),
    year=YearSettings(epoch=0, suffix=" CE", start_day=6),
    seasons=(
        SeasonSpec("Winter", 12, 21),
        SeasonSpec("Spring", 3, 20),
        SeasonSpec("Summer", 6, 21),
        SeasonSpec("Autumn", 9, 22),
    ),
    moons=(
        MoonSpec("Luna", 29.530589, (2000, 1, 6), _eight_phases(29.530589)),
    ),
)

# ============================================================
# GOLARION (Absalom Reckoning)
# ============================================================

GOLARION = CalendarDefinition(
    id="golarion",
    name="Golarion (Absalom Reckoning)",
    months=_months((
        ("Abadius", 31), ("Calistril", 28), ("Pharast", 31), ("Gozran", 30),
        ("Desnus", 31), ("Sarenith", 30), ("Erastus", 31), ("Arodus", 31),
        ("Rova", 30), ("Lamashan", 31), ("Neth", 30), ("Kuthona", 31),
    )),
    weekdays=_weekdays(("Moonday", "Toilday", "Wealday", "Oathday", "Fireday", "Starday", "Sunday")),
    leap_rule=CustomLeap(interval=4, month="Calistril"),
    year=YearSettings(epoch=2700, suffix=" AR", start_day=5),
    seasons=(
        SeasonSpec("Winter", 12, 21),
        SeasonSpec("Spring", 3, 20),
        SeasonSpec("Summer", 6, 21),
        SeasonSpec("Autumn", 9, 22),
    ),
    moons=(
        MoonSpec("Somal", 29.5, (4700, 1, 8), _eight_phases(29.5)),
    ),
)

# ============================================================
# HARPTOS (Forgotten Realms, Dalereckoning)
# ============================================================

HARPTOS = CalendarDefinition(
    id="harptos",
    name="Calendar of Harptos",
    months=_months((
        ("Hammer", 30), ("Alturiak", 30), ("Ches", 30), ("Tarsakh", 30),
        ("Mirtul", 30), ("Kythorn", 30), ("Flamerule", 30), ("Eleasis", 30),
        ("Eleint", 30), ("Marpenoth", 30), ("Uktar", 30), ("Nightal", 30),
    )),
    weekdays=_weekdays((
        "First Day", "Second Day", "Third Day", "Fourth Day", "Fifth Day",
        "Sixth Day", "Seventh Day", "Eighth Day", "Ninth Day", "Tenth Day",
    )),
    # Festivals sit outside the tenday.
    intercalary=(
        IntercalarySpec("Midwinter", after="Hammer", counts_for_weekdays=False),
        IntercalarySpec("Greengrass", after="Tarsakh", counts_for_weekdays=False),
        IntercalarySpec("Midsummer", after="Flamerule", counts_for_weekdays=False),
        IntercalarySpec("Shieldmeet", after="Flamerule", counts_for_weekdays=False),
        IntercalarySpec("Highharvestide", after="Eleint", counts_for_weekdays=False),
        IntercalarySpec("Feast of the Moon", after="Uktar", counts_for_weekdays=False),
    ),
    leap_rule=CustomLeap(interval=4, month="Shieldmeet"),
    year=YearSettings(epoch=0, suffix=" DR"),
    seasons=(
        SeasonSpec("Winter", 1, 1),
        SeasonSpec("Spring", 3, 19),
        SeasonSpec("Summer", 6, 20),
        SeasonSpec("Autumn", 9, 21),
        SeasonSpec("Winter", 12, 20),
    ),
    moons=(
        MoonSpec("Selûne", 30.4375, (1372, 1, 1), _eight_phases(30.4375)),
    ),
)

# ============================================================
# SHIRE RECKONING
# ============================================================

SHIRE = CalendarDefinition(
    id="shire",
    name="Shire Reckoning",
    months=_months((
        ("Afteryule", 30), ("Solmath", 30), ("Rethe", 30), ("Astron", 30),
        ("Thrimidge", 30), ("Forelithe", 30), ("Afterlithe", 30), ("Wedmath", 30),
        ("Halimath", 30), ("Winterfilth", 30), ("Blotmath", 30), ("Foreyule", 30),
    )),
    weekdays=_weekdays(("Sterday", "Sunday", "Monday", "Trewsday", "Hevensday", "Mersday", "Highday")),
    # Mid-year's Day and Overlithe belong to no weekday, so every year starts on Sterday.
    intercalary=(
        IntercalarySpec("2 Yule", before="Afteryule"),
        IntercalarySpec("1 Lithe", after="Forelithe"),
        IntercalarySpec("Mid-year's Day", after="Forelithe", counts_for_weekdays=False),
        IntercalarySpec("Overlithe", after="Forelithe", counts_for_weekdays=False),
        IntercalarySpec("2 Lithe", after="Forelithe"),
        IntercalarySpec("1 Yule", after="Foreyule"),
    ),
    leap_rule=GregorianLeap(month="Overlithe"),
    year=YearSettings(epoch=1, prefix="S.R. "),
)


ALL_SPECS: Dict[str, CalendarDefinition] = {
    "gregorian": GREGORIAN,
    "golarion": GOLARION,
    "harptos": HARPTOS,
    "shire": SHIRE,
}
