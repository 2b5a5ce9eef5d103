"""
worldcal.engines.calendar
-------------------------
The Orchestrator. Binds the length calculator, the weekday calculator and the
converter to one immutable CalendarDefinition, and adds date arithmetic on top.

All public years are displayed (epoch-shifted) years.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from ..core.types import CalendarDate, CalendarId, DateInfo, TimeOfDay
from .converter import DateConverter
from .definition import CalendarDefinition, IntercalarySpec
from .lengths import LengthCalculator, YearPlan
from .weekday import WeekdayCalculator

logger = logging.getLogger(__name__)


class CalendarEngine:
    """
    Translates world time to calendar dates and back for one calendar definition.
    Holds no mutable state; safe to share between threads.
    """
    def __init__(self, definition: CalendarDefinition, id: Optional[CalendarId] = None):
        self.definition = definition
        self.id = id if id is not None else CalendarId(family="custom", name=definition.id)

        self.lengths = LengthCalculator(definition)
        self.weekdays = WeekdayCalculator(definition, self.lengths)
        self.converter = DateConverter(definition, self.lengths, self.weekdays)
        self._intercalary = {i.name: i for i in definition.intercalary}

        logger.debug(
            "Built calendar %s: %d months, %d weekdays, common year %d days, leap year %d days",
            definition.id,
            len(definition.months),
            len(definition.weekdays),
            self.lengths.common_length,
            self.lengths.common_length + self.lengths.leap_delta,
        )

    # ---------------------------------------------------------
    # Shape
    # ---------------------------------------------------------

    def get_calendar(self) -> CalendarDefinition:
        return self.definition

    def internal_year(self, year: int) -> int:
        """Years elapsed since the epoch year for a displayed year."""
        return year - self.definition.epoch

    def is_leap_year(self, year: int) -> bool:
        return self.lengths.is_leap(year)

    def get_year_length(self, year: int) -> int:
        return self.lengths.year_length(year)

    def month_length(self, year: int, month: int) -> int:
        return self.lengths.month_length(year, month)

    def month_lengths(self, year: int) -> Tuple[int, ...]:
        return self.lengths.month_lengths(year)

    def year_plan(self, year: int) -> YearPlan:
        return self.lengths.plan(year)

    def intercalary_after_month(self, year: int, month: int) -> Tuple[IntercalarySpec, ...]:
        return tuple(self._intercalary[s.name] for s in self.year_plan(year).intercalary_for(month, "after"))

    def intercalary_before_month(self, year: int, month: int) -> Tuple[IntercalarySpec, ...]:
        return tuple(self._intercalary[s.name] for s in self.year_plan(year).intercalary_for(month, "before"))

    # ---------------------------------------------------------
    # Conversion
    # ---------------------------------------------------------

    def start_year(self, anchor_timestamp: Optional[float] = None) -> int:
        return self.converter.start_year(anchor_timestamp)

    def world_time_to_date(self, world_time: float, anchor_timestamp: Optional[float] = None) -> CalendarDate:
        return self.converter.world_time_to_date(world_time, anchor_timestamp)

    def date_to_world_time(
        self,
        date: CalendarDate,
        anchor_timestamp: Optional[float] = None,
        *,
        policy: str = "raise",
    ) -> int:
        """
        Exact inverse of world_time_to_date.

        policy="raise" rejects out-of-range fields with InvalidInputError;
        policy="clamp" pulls each field into range instead. Neither ever rolls a
        day over into the next month.
        """
        return self.converter.date_to_world_time(date, anchor_timestamp, policy=policy)

    def calculate_weekday(self, year: int, month: int, day: int, *, intercalary: Optional[str] = None) -> Optional[int]:
        return self.weekdays.calculate_weekday(year, month, day, intercalary=intercalary)

    def ordinal(self, date: CalendarDate, *, policy: str = "raise") -> int:
        """Days from the first day of the epoch year to the date."""
        return self.converter.to_ordinal(date, policy=policy)[0]

    def from_ordinal(self, ordinal: int, seconds_of_day: int = 0) -> CalendarDate:
        return self.converter.from_ordinal(ordinal, seconds_of_day)

    def normalize(self, date: CalendarDate, *, policy: str = "raise") -> CalendarDate:
        """Validate (or clamp) a hand-built date and fill in its weekday."""
        return self.from_ordinal(*self.converter.to_ordinal(date, policy=policy))

    def compare(self, a: CalendarDate, b: CalendarDate) -> int:
        ka = self.converter.to_ordinal(a)
        kb = self.converter.to_ordinal(b)
        return (ka > kb) - (ka < kb)

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def add_days(self, date: CalendarDate, days: int) -> CalendarDate:
        ordinal, seconds = self.converter.to_ordinal(date)
        return self.from_ordinal(ordinal + days, seconds)

    def add_seconds(self, date: CalendarDate, seconds: int) -> CalendarDate:
        spd = self.definition.time.seconds_per_day
        ordinal, sod = self.converter.to_ordinal(date)
        days, sod = divmod(ordinal * spd + sod + seconds, spd)
        return self.from_ordinal(days, sod)

    def add_minutes(self, date: CalendarDate, minutes: int) -> CalendarDate:
        return self.add_seconds(date, minutes * self.definition.time.seconds_per_minute)

    def add_hours(self, date: CalendarDate, hours: int) -> CalendarDate:
        return self.add_seconds(date, hours * self.definition.time.seconds_per_hour)

    def _month_day(self, date: CalendarDate) -> Tuple[int, int]:
        """Regular (month, day) standing in for a date; intercalary dates map to the adjacent month day."""
        if date.intercalary is None:
            return date.month, date.day
        spec = self._intercalary[date.intercalary]
        month = self.definition.month_index(spec.anchor_month)
        if spec.placement == "after":
            return month, self.month_length(date.year, month)
        return month, 1

    def _make(self, year: int, month: int, day: int, time: TimeOfDay, intercalary: Optional[str] = None) -> CalendarDate:
        seg = self.year_plan(year).segment_for(month, intercalary)
        return CalendarDate(
            year=year,
            month=month,
            day=day,
            weekday=self.weekdays.weekday_for(year, seg, day),
            time=time,
            intercalary=intercalary,
        )

    def add_months(self, date: CalendarDate, months: int) -> CalendarDate:
        """Move by whole months, clamping the day to the target month's length."""
        self.normalize(date)
        month, day = self._month_day(date)
        n = len(self.definition.months)
        index = (month - 1) + months
        year = date.year + index // n
        month = index % n + 1
        return self._make(year, month, min(day, self.month_length(year, month)), date.time)

    def add_years(self, date: CalendarDate, years: int) -> CalendarDate:
        """
        Move by whole years. Days clamp to the target month; an intercalary date
        whose block does not occur in the target year lands on the adjacent month day.
        """
        self.normalize(date)
        year = date.year + years
        if date.intercalary is not None:
            seg = self.year_plan(year).intercalary_segment(date.intercalary)
            if seg is not None:
                return self._make(year, date.month, min(date.day, seg.length), date.time, date.intercalary)
            month, day = self._month_day(date)
            if day != 1:
                day = self.month_length(year, month)
            return self._make(year, month, day, date.time)
        return self._make(year, date.month, min(date.day, self.month_length(year, date.month)), date.time)

    # ---------------------------------------------------------
    # High-level API methods (required by CLI / api.py)
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        d = self.definition
        return {
            "id": self.id.__dict__,
            "name": d.name,
            "months": [m.name for m in d.months],
            "weekdays": [w.name for w in d.weekdays],
            "intercalary": [i.name for i in d.intercalary],
            "epoch": d.epoch,
            "leap_rule": d.leap_rule.to_dict(),
            "common_year_length": self.lengths.common_length,
            "leap_year_length": self.lengths.common_length + self.lengths.leap_delta,
            "seconds_per_day": d.time.seconds_per_day,
            "world_time": d.world_time,
        }

    def date_info(self, date: CalendarDate, *, debug: bool = False) -> DateInfo:
        date = self.normalize(date)
        ordinal, seconds = self.converter.to_ordinal(date)
        weekday_name = self.definition.weekdays[date.weekday].name if date.weekday is not None else None
        month_name = date.intercalary or self.definition.months[date.month - 1].name

        dbg = None
        if debug:
            year, doy = self.lengths.locate(ordinal)
            seg, _ = self.year_plan(year).locate(doy)
            dbg = {
                "internal_year": self.internal_year(date.year),
                "day_of_year": doy,
                "segment": seg.__dict__,
                "seconds_of_day": seconds,
                "weekday_days": self.weekdays.weekday_days(year, seg, date.day),
            }

        return DateInfo(
            date=date,
            calendar=self.id,
            ordinal=ordinal,
            is_leap_year=self.is_leap_year(date.year),
            month_name=month_name,
            weekday_name=weekday_name,
            debug=dbg,
        )

    def explain(self, date: CalendarDate) -> Dict[str, Any]:
        return self.date_info(date, debug=True).__dict__
