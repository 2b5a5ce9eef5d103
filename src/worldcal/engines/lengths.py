"""
worldcal.engines.lengths
------------------------
Year/month length calculator.

A year's layout depends only on whether it is a leap year, so exactly two YearPlans
(common and leap) are resolved at construction. Each plan lists the year's segments
(months and intercalary blocks) with their day-of-year offset and their offset in
the weekday count, which skips intercalary days that do not advance the week.

Offsets between years are computed in closed form from the leap rule, so mapping
an ordinal to a year never walks the years in between.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..core.errors import InvalidInputError
from .definition import CalendarDefinition
from .intercalary import resolve_placements
from .interfaces import LeapRuleProtocol


@dataclass(frozen=True)
class Segment:
    kind: str                   # "month" | "intercalary"
    month: int                  # 1-based; for intercalary blocks, the attached month
    name: str
    length: int
    counts_for_weekdays: bool
    offset: int                 # 0-based day of year of the segment's first day
    weekday_offset: int         # weekday-counting days before the segment in its year
    placement: Optional[str] = None  # "before" | "after" for intercalary blocks

    @property
    def is_intercalary(self) -> bool:
        return self.kind == "intercalary"


@dataclass(frozen=True)
class YearPlan:
    is_leap: bool
    segments: Tuple[Segment, ...]
    month_lengths: Tuple[int, ...]
    length: int
    weekday_length: int

    def locate(self, day_of_year: int) -> Tuple[Segment, int]:
        """Segment holding the 0-based day_of_year, and the 1-based day inside it."""
        if not 0 <= day_of_year < self.length:
            raise ValueError(f"day_of_year {day_of_year} outside year of {self.length} days")
        offsets = [s.offset for s in self.segments]
        seg = self.segments[bisect_right(offsets, day_of_year) - 1]
        return seg, day_of_year - seg.offset + 1

    def month_segment(self, month: int) -> Segment:
        for s in self.segments:
            if s.kind == "month" and s.month == month:
                return s
        raise InvalidInputError(f"Month {month} is out of range 1..{len(self.month_lengths)}")

    def intercalary_segment(self, name: str) -> Optional[Segment]:
        for s in self.segments:
            if s.is_intercalary and s.name == name:
                return s
        return None

    def segment_for(self, month: int, intercalary: Optional[str] = None) -> Segment:
        """Segment a (month, intercalary) pair of a date refers to in this kind of year."""
        if intercalary is None:
            return self.month_segment(month)
        seg = self.intercalary_segment(intercalary)
        if seg is None:
            kind = "leap" if self.is_leap else "common"
            raise InvalidInputError(f"Intercalary '{intercalary}' does not occur in a {kind} year")
        if seg.month != month:
            raise InvalidInputError(
                f"Intercalary '{intercalary}' is attached to month {seg.month}, not month {month}"
            )
        return seg

    def intercalary_for(self, month: int, placement: str) -> Tuple[Segment, ...]:
        return tuple(
            s for s in self.segments if s.is_intercalary and s.month == month and s.placement == placement
        )


def build_plan(definition: CalendarDefinition, is_leap: bool) -> YearPlan:
    leap_month = definition.leap_month
    month_lengths = []
    for i, m in enumerate(definition.months, start=1):
        n = m.days
        if is_leap:
            n += m.leap_days
            if i == leap_month:
                n += definition.leap_rule.extra_days
        month_lengths.append(n)

    placements = resolve_placements(definition, is_leap)

    segments: List[Segment] = []
    offset = 0
    wk_offset = 0

    def push(kind, month, name, length, counts, placement=None) -> None:
        nonlocal offset, wk_offset
        segments.append(Segment(kind, month, name, length, counts, offset, wk_offset, placement))
        offset += length
        if counts:
            wk_offset += length

    for i, m in enumerate(definition.months, start=1):
        for p in placements:
            if p.month == i and p.placement == "before":
                push("intercalary", i, p.name, p.days, p.counts_for_weekdays, "before")
        push("month", i, m.name, month_lengths[i - 1], True)
        for p in placements:
            if p.month == i and p.placement == "after":
                push("intercalary", i, p.name, p.days, p.counts_for_weekdays, "after")

    return YearPlan(
        is_leap=is_leap,
        segments=tuple(segments),
        month_lengths=tuple(month_lengths),
        length=offset,
        weekday_length=wk_offset,
    )


class LengthCalculator:
    """
    Year and month lengths, and the mapping between ordinals and (year, day of year).
    Ordinal 0 is the first day of the epoch year.
    """
    def __init__(self, definition: CalendarDefinition):
        self.definition = definition
        self.rule: LeapRuleProtocol = definition.leap_rule
        self.epoch = definition.epoch
        self._plans: Dict[bool, YearPlan] = {
            False: build_plan(definition, False),
            True: build_plan(definition, True),
        }
        common, leap = self._plans[False], self._plans[True]
        self.common_length = common.length
        self.leap_delta = leap.length - common.length
        self.common_weekday_length = common.weekday_length
        self.leap_weekday_delta = leap.weekday_length - common.weekday_length

        period = self.rule.period
        self.cycle_years = period
        self.cycle_days = period * self.common_length + self.rule.leaps_between(0, period) * self.leap_delta

    # ---------------------------------------------------------
    # Per-year queries
    # ---------------------------------------------------------

    def is_leap(self, year: int) -> bool:
        return self.rule.is_leap(year)

    def plan(self, year: int) -> YearPlan:
        return self._plans[self.rule.is_leap(year)]

    def year_length(self, year: int) -> int:
        return self.plan(year).length

    def month_lengths(self, year: int) -> Tuple[int, ...]:
        return self.plan(year).month_lengths

    def month_length(self, year: int, month: int) -> int:
        lengths = self.month_lengths(year)
        if not 1 <= month <= len(lengths):
            raise InvalidInputError(f"Month {month} is out of range 1..{len(lengths)}")
        return lengths[month - 1]

    # ---------------------------------------------------------
    # Cross-year offsets
    # ---------------------------------------------------------

    def days_between(self, a: int, b: int) -> int:
        """Signed number of days from the start of year a to the start of year b."""
        return (b - a) * self.common_length + self.rule.leaps_between(a, b) * self.leap_delta

    def weekday_days_between(self, a: int, b: int) -> int:
        return (b - a) * self.common_weekday_length + self.rule.leaps_between(a, b) * self.leap_weekday_delta

    def days_before(self, year: int) -> int:
        return self.days_between(self.epoch, year)

    def weekday_days_before(self, year: int) -> int:
        return self.weekday_days_between(self.epoch, year)

    def locate(self, ordinal: int) -> Tuple[int, int]:
        """(year, 0-based day of year) holding the given ordinal."""
        # Estimate from the mean year length over one leap cycle, then correct.
        year = self.epoch + (ordinal * self.cycle_years) // self.cycle_days
        start = self.days_before(year)
        while start > ordinal:
            year -= 1
            start = self.days_before(year)
        while start + self.year_length(year) <= ordinal:
            start += self.year_length(year)
            year += 1
        return year, ordinal - start
