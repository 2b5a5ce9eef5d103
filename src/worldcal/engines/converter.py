"""
worldcal.engines.converter
--------------------------
Bidirectional mapping between world time (signed seconds) and calendar dates.

World time 0 is the first instant of the start year. With an anchor timestamp the
start year is the anchor's UTC year shifted by the calendar epoch; without one it
is the epoch year itself (or year.current_year for real-time-based calendars).
The real-world day of year is deliberately ignored: world time 0 is always day 1.
"""

from __future__ import annotations

import math
import warnings
from typing import Optional, Tuple

from ..core.errors import InvalidInputError, InvalidInputWarning
from ..core.time import utc_year
from ..core.types import CalendarDate, TimeOfDay
from .definition import CalendarDefinition
from .interfaces import LengthCalculatorProtocol
from .lengths import Segment
from .weekday import WeekdayCalculator

POLICIES = ("raise", "clamp")


def _is_non_finite(value) -> bool:
    # Python ints are always finite and may be too large to convert to float.
    return not isinstance(value, int) and not math.isfinite(value)


def _warn_non_finite(what: str, value, fallback: str, stacklevel: int) -> None:
    # stacklevel is counted from the function calling this helper.
    warnings.warn(
        f"Non-finite {what} {value!r} replaced by {fallback}",
        InvalidInputWarning,
        stacklevel=stacklevel + 1,
    )


class DateConverter:
    def __init__(self, definition: CalendarDefinition, lengths: LengthCalculatorProtocol, weekdays: WeekdayCalculator):
        self.definition = definition
        self.lengths = lengths
        self.weekdays = weekdays
        self.time = definition.time

    # ---------------------------------------------------------
    # Anchor handling
    # ---------------------------------------------------------

    def start_year(self, anchor_timestamp: Optional[float] = None, *, stacklevel: int = 3) -> int:
        """
        Displayed year whose first day is world time 0.

        stacklevel locates the caller blamed by a non-finite anchor warning; the
        default suits a call through CalendarEngine.start_year.
        """
        epoch = self.definition.epoch
        if anchor_timestamp is None:
            if self.definition.world_time == "real-time-based":
                return self.definition.year.current_year  # type: ignore[return-value]
            return epoch
        if _is_non_finite(anchor_timestamp):
            _warn_non_finite("anchor timestamp", anchor_timestamp, f"epoch year {epoch}", stacklevel)
            return epoch
        return utc_year(anchor_timestamp) + epoch

    # ---------------------------------------------------------
    # Ordinal <-> date
    # ---------------------------------------------------------

    def from_ordinal(self, ordinal: int, seconds_of_day: int = 0) -> CalendarDate:
        year, doy = self.lengths.locate(ordinal)
        seg, day = self.lengths.plan(year).locate(doy)

        hour, rest = divmod(seconds_of_day, self.time.seconds_per_hour)
        minute, second = divmod(rest, self.time.seconds_per_minute)

        return CalendarDate(
            year=year,
            month=seg.month,
            day=day,
            weekday=self.weekdays.weekday_for(year, seg, day),
            time=TimeOfDay(hour, minute, second),
            intercalary=seg.name if seg.is_intercalary else None,
        )

    def _resolve_segment(self, date: CalendarDate, policy: str) -> Tuple[Segment, int]:
        plan = self.lengths.plan(date.year)
        clamp = policy == "clamp"

        if date.intercalary is not None:
            seg = plan.intercalary_segment(date.intercalary)
            if seg is None and clamp:
                spec = next((i for i in self.definition.intercalary if i.name == date.intercalary), None)
                if spec is not None:
                    # Inactive leap-only block: fall onto the neighbouring month day.
                    mseg = plan.month_segment(self.definition.month_index(spec.anchor_month))
                    return mseg, (mseg.length if spec.placement == "after" else 1)
            if seg is None or (seg.month != date.month and not clamp):
                seg = plan.segment_for(date.month, date.intercalary)
        else:
            n_months = len(plan.month_lengths)
            month = date.month
            if not 1 <= month <= n_months:
                if not clamp:
                    raise InvalidInputError(f"Month {month} is out of range 1..{n_months}")
                month = min(max(month, 1), n_months)
            seg = plan.month_segment(month)

        day = date.day
        if not 1 <= day <= seg.length:
            if not clamp:
                raise InvalidInputError(f"Day {day} is out of range 1..{seg.length} for {seg.name} {date.year}")
            day = min(max(day, 1), seg.length)
        return seg, day

    def _seconds_of_day(self, t: TimeOfDay, policy: str) -> int:
        limits = (
            ("hour", t.hour, self.time.hours_per_day),
            ("minute", t.minute, self.time.minutes_per_hour),
            ("second", t.second, self.time.seconds_per_minute),
        )
        values = []
        for what, v, bound in limits:
            if not 0 <= v < bound:
                if policy != "clamp":
                    raise InvalidInputError(f"{what} {v} is out of range 0..{bound - 1}")
                v = min(max(v, 0), bound - 1)
            values.append(v)
        h, m, s = values
        return h * self.time.seconds_per_hour + m * self.time.seconds_per_minute + s

    def to_ordinal(self, date: CalendarDate, *, policy: str = "raise") -> Tuple[int, int]:
        """(ordinal, seconds of day) of a date."""
        if policy not in POLICIES:
            raise ValueError(f"policy must be one of {POLICIES}")
        seg, day = self._resolve_segment(date, policy)
        ordinal = self.lengths.days_before(date.year) + seg.offset + day - 1
        return ordinal, self._seconds_of_day(date.time, policy)

    # ---------------------------------------------------------
    # World time
    # ---------------------------------------------------------

    def world_time_to_date(self, world_time: float, anchor_timestamp: Optional[float] = None) -> CalendarDate:
        # Warnings point past this method and CalendarEngine at the caller.
        if _is_non_finite(world_time):
            _warn_non_finite("world time", world_time, "0", 3)
            world_time = 0
        start = self.start_year(anchor_timestamp, stacklevel=4)

        days, seconds_of_day = divmod(math.floor(world_time), self.time.seconds_per_day)
        return self.from_ordinal(self.lengths.days_before(start) + days, seconds_of_day)

    def date_to_world_time(
        self,
        date: CalendarDate,
        anchor_timestamp: Optional[float] = None,
        *,
        policy: str = "raise",
    ) -> int:
        ordinal, seconds_of_day = self.to_ordinal(date, policy=policy)
        days = ordinal - self.lengths.days_before(self.start_year(anchor_timestamp, stacklevel=4))
        return days * self.time.seconds_per_day + seconds_of_day
