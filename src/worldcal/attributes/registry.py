from __future__ import annotations
from typing import TYPE_CHECKING, Any, Callable, Dict, Sequence

from ..core.types import DateInfo

if TYPE_CHECKING:
    from ..engines.calendar import CalendarEngine

AttrFunc = Callable[["CalendarEngine", DateInfo], Dict[str, Any]]
_REGISTRY: Dict[str, AttrFunc] = {}

def register_attribute(name: str, fn: AttrFunc) -> None:
    _REGISTRY[name] = fn

def list_attributes() -> list:
    return sorted(_REGISTRY)

def compute_attributes(engine: "CalendarEngine", info: DateInfo, names: Sequence[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name in names:
        if name not in _REGISTRY:
            raise KeyError(f"Unknown attribute '{name}'. Available: {sorted(_REGISTRY)}")
        out.update(_REGISTRY[name](engine, info))
    return out

# helper for attribute implementations
def day_of_year(engine: "CalendarEngine", info: DateInfo) -> int:
    """1-based position of the date in its year, intercalary days included."""
    return info.ordinal - engine.lengths.days_before(info.date.year) + 1
