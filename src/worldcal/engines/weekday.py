"""
worldcal.engines.weekday
------------------------
Weekday of a date from the running count of week-advancing days since the start
of the epoch year. Intercalary days with counts_for_weekdays=False are skipped by
that count and themselves have no weekday (None).
"""

from __future__ import annotations

from typing import Optional

from ..core.errors import InvalidInputError
from .definition import CalendarDefinition
from .interfaces import LengthCalculatorProtocol
from .lengths import Segment


class WeekdayCalculator:
    def __init__(self, definition: CalendarDefinition, lengths: LengthCalculatorProtocol):
        self.lengths = lengths
        self.modulus = len(definition.weekdays)
        self.start_day = definition.year.start_day

    def weekday_days(self, year: int, segment: Segment, day: int) -> int:
        """Week-advancing days from the start of the epoch year to the given day."""
        n = self.lengths.weekday_days_before(year) + segment.weekday_offset
        if segment.counts_for_weekdays:
            n += day - 1
        return n

    def weekday_for(self, year: int, segment: Segment, day: int) -> Optional[int]:
        if not segment.counts_for_weekdays:
            return None
        return (self.weekday_days(year, segment, day) + self.start_day) % self.modulus

    def calculate_weekday(self, year: int, month: int, day: int, *, intercalary: Optional[str] = None) -> Optional[int]:
        seg = self.lengths.plan(year).segment_for(month, intercalary)
        if not 1 <= day <= seg.length:
            raise InvalidInputError(f"Day {day} is out of range 1..{seg.length} for {seg.name} {year}")
        return self.weekday_for(year, seg, day)
