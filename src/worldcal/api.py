from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Union

from .attributes.registry import compute_attributes
from .core.engine import CalendarRegistry
from .core.types import CalendarDate, DateInfo
from .engines.calendar import CalendarEngine
from .engines.definition import CalendarDefinition
from .engines.factory import make_engine as _make_engine

_registry: Optional[CalendarRegistry] = None

def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def list_calendars() -> List[str]:
    return _reg().list()

def calendar_info(calendar: str) -> Dict[str, Any]:
    return _reg().get(calendar).info()

def get_calendar(name: str, **overrides: Any) -> CalendarEngine:
    """
    Build a fresh engine for a built-in calendar, optionally overriding fields of
    its definition (e.g. year=YearSettings(epoch=...)). The registered engine is untouched.
    """
    from .engines.specs import ALL_SPECS
    if name not in ALL_SPECS:
        raise KeyError(f"Unknown calendar '{name}'")
    definition = ALL_SPECS[name]
    if overrides:
        definition = definition.tweak(**overrides)
    return _make_engine(definition, family="builtin" if not overrides else "custom")

def make_engine(definition: Union[CalendarDefinition, Dict[str, Any]]) -> CalendarEngine:
    return _make_engine(definition)

def register_calendar(name: str, engine: Union[CalendarEngine, CalendarDefinition, Dict[str, Any]], *, overwrite: bool = False) -> None:
    if not isinstance(engine, CalendarEngine):
        engine = _make_engine(engine)
    _reg().register(name, engine, overwrite=overwrite)

# ============================================================
# Conversion
# ============================================================

def world_time_to_date(
    world_time: float,
    *,
    calendar: str = "gregorian",
    anchor_timestamp: Optional[float] = None,
) -> CalendarDate:
    return _reg().get(calendar).world_time_to_date(world_time, anchor_timestamp)

def date_to_world_time(
    date: CalendarDate,
    *,
    calendar: str = "gregorian",
    anchor_timestamp: Optional[float] = None,
    policy: str = "raise",
) -> int:
    return _reg().get(calendar).date_to_world_time(date, anchor_timestamp, policy=policy)

def year_length(year: int, *, calendar: str = "gregorian") -> int:
    return _reg().get(calendar).get_year_length(year)

def month_length(year: int, month: int, *, calendar: str = "gregorian") -> int:
    return _reg().get(calendar).month_length(year, month)

def calculate_weekday(
    year: int,
    month: int,
    day: int,
    *,
    calendar: str = "gregorian",
    intercalary: Optional[str] = None,
) -> Optional[int]:
    return _reg().get(calendar).calculate_weekday(year, month, day, intercalary=intercalary)

def add_days(date: CalendarDate, days: int, *, calendar: str = "gregorian") -> CalendarDate:
    return _reg().get(calendar).add_days(date, days)

# ============================================================
# Inspection
# ============================================================

def date_info(
    date: CalendarDate,
    *,
    calendar: str = "gregorian",
    attributes: Sequence[str] = (),
    debug: bool = False,
) -> DateInfo:
    eng = _reg().get(calendar)
    info = eng.date_info(date, debug=debug)
    if attributes:
        attrs = compute_attributes(eng, info, attributes)
        info = replace(info, attributes=attrs)
    return info

def explain(date: CalendarDate, *, calendar: str = "gregorian") -> Dict[str, Any]:
    return _reg().get(calendar).explain(date)

def year_info(year: int, *, calendar: str = "gregorian") -> Dict[str, Any]:
    """Layout of one year: its segments in order with lengths and first-day weekdays."""
    eng = _reg().get(calendar)
    plan = eng.year_plan(year)
    segments = []
    for seg in plan.segments:
        segments.append({
            "name": seg.name,
            "kind": seg.kind,
            "month": seg.month,
            "days": seg.length,
            "first_day_of_year": seg.offset + 1,
            "counts_for_weekdays": seg.counts_for_weekdays,
            "first_weekday": eng.weekdays.weekday_for(year, seg, 1),
        })
    return {
        "year": year,
        "internal_year": eng.internal_year(year),
        "is_leap_year": plan.is_leap,
        "length": plan.length,
        "month_lengths": list(plan.month_lengths),
        "segments": segments,
    }

def month_days(
    year: int,
    month: int,
    *,
    calendar: str = "gregorian",
    include_intercalary: bool = True,
) -> List[CalendarDate]:
    """
    Every date of a month in year order. With include_intercalary the blocks placed
    before and after the month are included around it.
    """
    eng = _reg().get(calendar)
    plan = eng.year_plan(year)
    seg = plan.month_segment(month)
    segs = [seg]
    if include_intercalary:
        segs = list(plan.intercalary_for(month, "before")) + segs + list(plan.intercalary_for(month, "after"))

    first = eng.lengths.days_before(year)
    out = []
    for s in segs:
        for i in range(s.length):
            out.append(eng.from_ordinal(first + s.offset + i))
    return out
