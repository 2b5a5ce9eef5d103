"""
worldcal.engines.intercalary
----------------------------
Placement resolver for intercalary days.

For a year kind (common or leap) it yields the ordered list of intercalary blocks
active that year, each tagged with the month it is attached to and on which side.
Within the year the sequence for month m is: blocks placed before m, month m,
blocks placed after m, each group in definition order.

The year plan in lengths.py is built from this output only, which is what keeps
the converter and the weekday calculator in agreement.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .definition import CalendarDefinition, IntercalarySpec


@dataclass(frozen=True)
class Placement:
    spec: IntercalarySpec
    month: int       # 1-based index of the month the block is attached to
    placement: str   # "before" | "after"

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def days(self) -> int:
        return self.spec.days

    @property
    def counts_for_weekdays(self) -> bool:
        return self.spec.counts_for_weekdays


def is_leap_only(definition: CalendarDefinition, spec: IntercalarySpec) -> bool:
    """An entry is leap-only if flagged so, or if the leap rule targets it."""
    return spec.leap_only or spec.name == definition.leap_intercalary


def resolve_placements(definition: CalendarDefinition, is_leap: bool) -> Tuple[Placement, ...]:
    """Active intercalary blocks for a common (is_leap=False) or leap year, in year order."""
    before: Dict[int, List[Placement]] = {}
    after: Dict[int, List[Placement]] = {}
    for spec in definition.intercalary:
        if is_leap_only(definition, spec) and not is_leap:
            continue
        m = definition.month_index(spec.anchor_month)
        p = Placement(spec=spec, month=m, placement=spec.placement)
        (before if p.placement == "before" else after).setdefault(m, []).append(p)

    ordered: List[Placement] = []
    for m in range(1, len(definition.months) + 1):
        ordered.extend(before.get(m, ()))
        ordered.extend(after.get(m, ()))
    return tuple(ordered)
