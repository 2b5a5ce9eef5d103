"""
worldcal.engines.interfaces
---------------------------
Boundaries between the leap rule (which years are leap), the length calculator
(how long each year and month is, and where each day of the year falls), and the
orchestrator that turns world time into dates.

Reference frame: an ordinal is a signed count of days since the first day of the
calendar's epoch year. Every component agrees on it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from .lengths import YearPlan


class LeapRuleProtocol(Protocol):
    kind: str
    month: Optional[str]
    extra_days: int

    @property
    def period(self) -> int:
        """Number of years after which the leap pattern repeats."""
        ...

    def is_leap(self, year: int) -> bool:
        ...

    def leaps_between(self, a: int, b: int) -> int:
        """
        Signed number of leap years y with a <= y < b.
        Negative when b < a, so leaps_between(a, b) == -leaps_between(b, a).
        """
        ...

    def to_dict(self) -> Dict[str, Any]:
        ...


class LengthCalculatorProtocol(Protocol):
    """Year and month lengths plus the ordinal <-> (year, day-of-year) mapping."""

    def is_leap(self, year: int) -> bool:
        ...

    def year_length(self, year: int) -> int:
        ...

    def month_length(self, year: int, month: int) -> int:
        ...

    def days_before(self, year: int) -> int:
        """Ordinal of the first day of `year`."""
        ...

    def weekday_days_before(self, year: int) -> int:
        """Like days_before, but counting only days that advance the week."""
        ...

    def plan(self, year: int) -> YearPlan:
        """Segment layout of the year (common or leap)."""
        ...

    def locate(self, ordinal: int) -> Tuple[int, int]:
        """Inverse of days_before: (year, 0-based day of year)."""
        ...
