"""
worldcal.engines.definition
---------------------------
Immutable, validated description of a calendar's shape.

A CalendarDefinition is pure data. All checks run in __post_init__, so an invalid
calendar can never reach an engine and queries never fail for configuration reasons.
from_dict / to_dict implement the external JSON-style schema.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from ..core.errors import ConfigurationError
from .leap import LeapRule, NoLeap, leap_rule_from_dict

logger = logging.getLogger(__name__)

WORLD_TIME_MODES = ("epoch-based", "real-time-based")


def _check_int(value: Any, what: str, minimum: Optional[int] = None) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{what} must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"{what} must be >= {minimum}, got {value}")


def _check_unique(names: Sequence[str], what: str) -> None:
    seen, dupes = set(), set()
    for n in names:
        if n in seen:
            dupes.add(n)
        seen.add(n)
    if dupes:
        raise ConfigurationError(f"Duplicate {what} name(s): {sorted(dupes)}")


def _hours(value: Any, minutes_per_hour: int) -> Optional[float]:
    """Hours of the day from a number or an "HH:MM" string."""
    if value is None or not isinstance(value, str):
        return value
    parts = value.split(":")
    if len(parts) != 2:
        raise ConfigurationError(f"Invalid time {value!r}; expected HH:MM")
    try:
        h, m = int(parts[0]), int(parts[1])
    except ValueError:
        raise ConfigurationError(f"Invalid time {value!r}; expected HH:MM") from None
    return h + m / minutes_per_hour


@dataclass(frozen=True)
class MonthSpec:
    name: str
    days: int
    abbreviation: str = ""
    leap_days: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Month name must be non-empty")
        _check_int(self.days, f"Month '{self.name}' days", 1)
        _check_int(self.leap_days, f"Month '{self.name}' leapDays", 0)


@dataclass(frozen=True)
class WeekdaySpec:
    name: str
    abbreviation: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Weekday name must be non-empty")


@dataclass(frozen=True)
class IntercalarySpec:
    """
    A block of one or more days outside the month sequence, placed right after
    (or right before) a named month.
    """
    name: str
    after: Optional[str] = None
    before: Optional[str] = None
    days: int = 1
    counts_for_weekdays: bool = True
    leap_only: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Intercalary name must be non-empty")
        if (self.after is None) == (self.before is None):
            raise ConfigurationError(
                f"Intercalary '{self.name}' must name exactly one of 'after' or 'before'"
            )
        _check_int(self.days, f"Intercalary '{self.name}' days", 1)

    @property
    def placement(self) -> str:
        return "after" if self.after is not None else "before"

    @property
    def anchor_month(self) -> str:
        return self.after if self.after is not None else self.before  # type: ignore[return-value]


@dataclass(frozen=True)
class TimeUnits:
    hours_per_day: int = 24
    minutes_per_hour: int = 60
    seconds_per_minute: int = 60

    def __post_init__(self) -> None:
        _check_int(self.hours_per_day, "hoursInDay", 1)
        _check_int(self.minutes_per_hour, "minutesInHour", 1)
        _check_int(self.seconds_per_minute, "secondsInMinute", 1)

    @property
    def seconds_per_hour(self) -> int:
        return self.minutes_per_hour * self.seconds_per_minute

    @property
    def seconds_per_day(self) -> int:
        return self.hours_per_day * self.seconds_per_hour


@dataclass(frozen=True)
class YearSettings:
    epoch: int = 0
    current_year: Optional[int] = None
    prefix: str = ""
    suffix: str = ""
    start_day: int = 0  # weekday index of the first day of the epoch year

    def __post_init__(self) -> None:
        _check_int(self.epoch, "year.epoch")
        _check_int(self.start_day, "year.startDay", 0)
        if self.current_year is not None:
            _check_int(self.current_year, "year.currentYear")


# Sunrise and sunset hours used when a season of this name carries none.
SEASON_SUN_DEFAULTS: Dict[str, Tuple[float, float]] = {
    "Winter": (7.0, 16.75),
    "Spring": (6.5, 17.75),
    "Summer": (5.75, 20.25),
    "Autumn": (6.5, 19.5),
    "Fall": (6.5, 19.5),
}


@dataclass(frozen=True)
class SeasonSpec:
    """
    A season begins on (start_month, start_day) and lasts until the next one starts.

    end_month / end_day are informational. sunrise and sunset are hours of the day;
    when absent they come from SEASON_SUN_DEFAULTS by name, else from a 50/50 split.
    """
    name: str
    start_month: int
    start_day: int = 1
    end_month: Optional[int] = None
    end_day: Optional[int] = None
    sunrise: Optional[float] = None
    sunset: Optional[float] = None

    def __post_init__(self) -> None:
        _check_int(self.start_month, f"Season '{self.name}' startMonth", 1)
        _check_int(self.start_day, f"Season '{self.name}' startDay", 1)
        if self.end_month is not None:
            _check_int(self.end_month, f"Season '{self.name}' endMonth", 1)
        if self.end_day is not None:
            _check_int(self.end_day, f"Season '{self.name}' endDay", 1)
        if (self.sunrise is None) != (self.sunset is None):
            raise ConfigurationError(f"Season '{self.name}' needs both sunrise and sunset, or neither")
        if self.sunrise is not None:
            for what, v in (("sunrise", self.sunrise), ("sunset", self.sunset)):
                if isinstance(v, bool) or not isinstance(v, (int, float)) or not 0 <= v:
                    raise ConfigurationError(f"Season '{self.name}' {what} must be a non-negative number of hours")
            if self.sunrise > self.sunset:
                raise ConfigurationError(f"Season '{self.name}' sunrise is after sunset")

    def sun_hours(self, hours_per_day: int) -> Tuple[float, float]:
        if self.sunrise is not None:
            return float(self.sunrise), float(self.sunset)  # type: ignore[arg-type]
        if self.name in SEASON_SUN_DEFAULTS:
            return SEASON_SUN_DEFAULTS[self.name]
        return hours_per_day / 4, hours_per_day * 3 / 4


@dataclass(frozen=True)
class MoonPhaseSpec:
    name: str
    length: float
    single_day: bool = False

    def __post_init__(self) -> None:
        if not self.length > 0:
            raise ConfigurationError(f"Moon phase '{self.name}' length must be positive")


@dataclass(frozen=True)
class MoonSpec:
    name: str
    cycle_length: float
    first_new_moon: Tuple[int, int, int]
    phases: Tuple[MoonPhaseSpec, ...]

    def __post_init__(self) -> None:
        if not self.cycle_length > 0:
            raise ConfigurationError(f"Moon '{self.name}' cycleLength must be positive")
        if not self.phases:
            raise ConfigurationError(f"Moon '{self.name}' needs at least one phase")
        object.__setattr__(self, "phases", tuple(self.phases))
        object.__setattr__(self, "first_new_moon", tuple(self.first_new_moon))


@dataclass(frozen=True)
class CalendarDefinition:
    """Pure data payload for constructing a calendar engine."""
    id: str
    months: Tuple[MonthSpec, ...]
    weekdays: Tuple[WeekdaySpec, ...]
    leap_rule: LeapRule = NoLeap()
    intercalary: Tuple[IntercalarySpec, ...] = ()
    time: TimeUnits = TimeUnits()
    year: YearSettings = YearSettings()
    seasons: Tuple[SeasonSpec, ...] = ()
    moons: Tuple[MoonSpec, ...] = ()
    world_time: str = "epoch-based"
    name: str = ""
    meta: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        for attr in ("months", "weekdays", "intercalary", "seasons", "moons"):
            object.__setattr__(self, attr, tuple(getattr(self, attr)))

        if not self.months:
            raise ConfigurationError(f"Calendar '{self.id}' has no months")
        if not self.weekdays:
            raise ConfigurationError(f"Calendar '{self.id}' has no weekdays")
        _check_unique([m.name for m in self.months], "month")
        _check_unique([w.name for w in self.weekdays], "weekday")
        _check_unique([i.name for i in self.intercalary], "intercalary")

        month_names = {m.name for m in self.months}
        for ic in self.intercalary:
            if ic.anchor_month not in month_names:
                raise ConfigurationError(
                    f"Intercalary '{ic.name}' references non-existent month '{ic.anchor_month}'"
                )

        target = self.leap_rule.month
        if target is not None and target not in month_names:
            if target not in {i.name for i in self.intercalary}:
                raise ConfigurationError(
                    f"Leap year month '{target}' does not exist in months or intercalary days"
                )

        if self.year.start_day >= len(self.weekdays):
            raise ConfigurationError(
                f"year.startDay {self.year.start_day} is out of range for {len(self.weekdays)} weekdays"
            )

        for s in self.seasons:
            if not 1 <= s.start_month <= len(self.months):
                raise ConfigurationError(f"Season '{s.name}' starts in unknown month {s.start_month}")
            m = self.months[s.start_month - 1]
            longest = m.days + m.leap_days
            if self.leap_month == s.start_month:
                longest += self.leap_rule.extra_days
            if not 1 <= s.start_day <= longest:
                raise ConfigurationError(f"Season '{s.name}' start day {s.start_day} is outside '{m.name}'")
            if s.end_month is not None and s.end_month > len(self.months):
                raise ConfigurationError(f"Season '{s.name}' ends in unknown month {s.end_month}")
            if s.sunset is not None and s.sunset > self.time.hours_per_day:
                raise ConfigurationError(f"Season '{s.name}' sunset is past the end of the day")

        for moon in self.moons:
            if not 1 <= moon.first_new_moon[1] <= len(self.months):
                raise ConfigurationError(f"Moon '{moon.name}' reference date has an unknown month")

        if self.world_time not in WORLD_TIME_MODES:
            raise ConfigurationError(f"worldTime interpretation must be one of {WORLD_TIME_MODES}")
        if self.world_time == "real-time-based" and self.year.current_year is None:
            raise ConfigurationError("real-time-based world time requires year.currentYear")

    # ---------------------------------------------------------
    # Derived shape
    # ---------------------------------------------------------

    @property
    def epoch(self) -> int:
        return self.year.epoch

    def month_index(self, name: str) -> int:
        """1-based index of a month by name."""
        for i, m in enumerate(self.months, start=1):
            if m.name == name:
                return i
        raise KeyError(f"Unknown month '{name}'")

    @property
    def leap_month(self) -> Optional[int]:
        """
        1-based month that absorbs the rule's extra_days in leap years, or None.

        Without an explicit target the rule falls on month 2 by convention, unless
        the months carry their own leapDays, which then are the whole adjustment.
        """
        if isinstance(self.leap_rule, NoLeap):
            return None
        target = self.leap_rule.month
        if target is None:
            if any(m.leap_days for m in self.months):
                return None
            return 2 if len(self.months) >= 2 else 1
        if target in {m.name for m in self.months}:
            return self.month_index(target)
        return None

    @property
    def leap_intercalary(self) -> Optional[str]:
        """Intercalary entry the leap rule switches on in leap years, if the rule targets one."""
        target = self.leap_rule.month
        if target is not None and target in {i.name for i in self.intercalary}:
            return target
        return None

    def tweak(self, **kwargs) -> "CalendarDefinition":
        return replace(self, **kwargs)

    # ---------------------------------------------------------
    # Schema
    # ---------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarDefinition":
        if not isinstance(data, dict):
            raise ConfigurationError("Calendar definition must be a mapping")
        cal_id = str(data.get("id", "custom"))

        if not data.get("months"):
            raise ConfigurationError(f"Calendar '{cal_id}' has no months")
        if not data.get("weekdays"):
            raise ConfigurationError(f"Calendar '{cal_id}' has no weekdays")

        for section, fallback in (("year", "epoch 0"), ("leapYear", "no leap years"), ("time", "24/60/60")):
            if section not in data:
                logger.warning("Calendar %s missing %s data; using %s", cal_id, section, fallback)

        try:
            y = data.get("year") or {}
            year = YearSettings(
                epoch=y.get("epoch", 0),
                current_year=y.get("currentYear"),
                prefix=y.get("prefix", ""),
                suffix=y.get("suffix", ""),
                start_day=y.get("startDay", 0),
            )
            leap_rule = leap_rule_from_dict(data.get("leapYear"))
            t = data.get("time") or {}
            time = TimeUnits(
                hours_per_day=t.get("hoursInDay", 24),
                minutes_per_hour=t.get("minutesInHour", 60),
                seconds_per_minute=t.get("secondsInMinute", 60),
            )

            world_time = "epoch-based"
            wt = data.get("worldTime")
            if wt:
                world_time = wt.get("interpretation", "epoch-based")
                if wt.get("currentYear") is not None and year.current_year is None:
                    year = replace(year, current_year=wt["currentYear"])

            months = tuple(
                MonthSpec(
                    name=m["name"],
                    days=m["days"],
                    abbreviation=m.get("abbreviation", ""),
                    leap_days=m.get("leapDays", 0),
                )
                for m in data["months"]
            )
            weekdays = tuple(
                WeekdaySpec(name=w["name"], abbreviation=w.get("abbreviation", ""))
                for w in data["weekdays"]
            )
            intercalary = tuple(
                IntercalarySpec(
                    name=i["name"],
                    after=i.get("after"),
                    before=i.get("before"),
                    days=i.get("days", 1),
                    counts_for_weekdays=bool(i.get("countsForWeekdays", True)),
                    leap_only=bool(i.get("leapOnly", i.get("leapYearOnly", False))),
                )
                for i in data.get("intercalary", ())
            )
            seasons = tuple(
                SeasonSpec(
                    name=s["name"],
                    start_month=s["startMonth"],
                    start_day=s.get("startDay", 1),
                    end_month=s.get("endMonth"),
                    end_day=s.get("endDay"),
                    sunrise=_hours(s.get("sunrise"), time.minutes_per_hour),
                    sunset=_hours(s.get("sunset"), time.minutes_per_hour),
                )
                for s in data.get("seasons", ())
            )
            moons = tuple(
                MoonSpec(
                    name=mn["name"],
                    cycle_length=mn["cycleLength"],
                    first_new_moon=(
                        mn["firstNewMoon"]["year"],
                        mn["firstNewMoon"]["month"],
                        mn["firstNewMoon"]["day"],
                    ),
                    phases=tuple(
                        MoonPhaseSpec(name=p["name"], length=p["length"], single_day=bool(p.get("singleDay", False)))
                        for p in mn["phases"]
                    ),
                )
                for mn in data.get("moons", ())
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigurationError(f"Calendar '{cal_id}' is malformed: {type(e).__name__} {e}") from e

        return cls(
            id=cal_id,
            name=str(data.get("name", data.get("label", ""))),
            months=months,
            weekdays=weekdays,
            leap_rule=leap_rule,
            intercalary=intercalary,
            time=time,
            year=year,
            seasons=seasons,
            moons=moons,
            world_time=world_time,
        )

    def to_dict(self) -> Dict[str, Any]:
        def month(m: MonthSpec) -> Dict[str, Any]:
            out: Dict[str, Any] = {"name": m.name, "days": m.days}
            if m.abbreviation:
                out["abbreviation"] = m.abbreviation
            if m.leap_days:
                out["leapDays"] = m.leap_days
            return out

        def intercalary(i: IntercalarySpec) -> Dict[str, Any]:
            return {
                "name": i.name,
                i.placement: i.anchor_month,
                "days": i.days,
                "countsForWeekdays": i.counts_for_weekdays,
                "leapOnly": i.leap_only,
            }

        year: Dict[str, Any] = {"epoch": self.year.epoch, "startDay": self.year.start_day}
        if self.year.current_year is not None:
            year["currentYear"] = self.year.current_year
        if self.year.prefix:
            year["prefix"] = self.year.prefix
        if self.year.suffix:
            year["suffix"] = self.year.suffix

        out: Dict[str, Any] = {
            "id": self.id,
            "months": [month(m) for m in self.months],
            "weekdays": [
                {"name": w.name, "abbreviation": w.abbreviation} if w.abbreviation else {"name": w.name}
                for w in self.weekdays
            ],
            "year": year,
            "leapYear": self.leap_rule.to_dict(),
            "time": {
                "hoursInDay": self.time.hours_per_day,
                "minutesInHour": self.time.minutes_per_hour,
                "secondsInMinute": self.time.seconds_per_minute,
            },
            "intercalary": [intercalary(i) for i in self.intercalary],
        }
        if self.name:
            out["name"] = self.name
        def season(s: SeasonSpec) -> Dict[str, Any]:
            d: Dict[str, Any] = {"name": s.name, "startMonth": s.start_month, "startDay": s.start_day}
            for key, value in (("endMonth", s.end_month), ("endDay", s.end_day),
                               ("sunrise", s.sunrise), ("sunset", s.sunset)):
                if value is not None:
                    d[key] = value
            return d

        if self.seasons:
            out["seasons"] = [season(s) for s in self.seasons]
        if self.moons:
            out["moons"] = [
                {
                    "name": mn.name,
                    "cycleLength": mn.cycle_length,
                    "firstNewMoon": dict(zip(("year", "month", "day"), mn.first_new_moon)),
                    "phases": [
                        {"name": p.name, "length": p.length, "singleDay": p.single_day} for p in mn.phases
                    ],
                }
                for mn in self.moons
            ]
        if self.world_time != "epoch-based":
            out["worldTime"] = {"interpretation": self.world_time, "currentYear": self.year.current_year}
        return out
