from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from .types import CalendarDate, DateInfo

class CalendarEngine(Protocol):
    def info(self) -> Dict[str, Any]: ...
    def get_year_length(self, year: int) -> int: ...
    def month_length(self, year: int, month: int) -> int: ...
    def world_time_to_date(self, world_time: float, anchor_timestamp: Optional[float] = None) -> CalendarDate: ...
    def date_to_world_time(self, date: CalendarDate, anchor_timestamp: Optional[float] = None, *, policy: str = "raise") -> int: ...
    def calculate_weekday(self, year: int, month: int, day: int, *, intercalary: Optional[str] = None) -> Optional[int]: ...
    def date_info(self, date: CalendarDate, *, debug: bool = False) -> DateInfo: ...

@dataclass
class CalendarRegistry:
    _engines: Dict[str, CalendarEngine]

    def get(self, name: str) -> CalendarEngine:
        if name not in self._engines:
            raise KeyError(f"Unknown calendar '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine
