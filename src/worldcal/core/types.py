from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CalendarId:
    family: str  # "builtin" or "custom"
    name: str
    version: str = "1"


@dataclass(frozen=True)
class TimeOfDay:
    hour: int = 0
    minute: int = 0
    second: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"hour": self.hour, "minute": self.minute, "second": self.second}


@dataclass(frozen=True)
class CalendarDate:
    """
    A calendar date as produced by an engine.

    year is the displayed (epoch-shifted) year. For intercalary dates, month is the
    month the block is attached to, day is the 1-based position inside the block and
    intercalary carries the block's name. weekday is None for days outside the week.
    """
    year: int
    month: int
    day: int
    weekday: Optional[int] = None
    time: TimeOfDay = TimeOfDay()
    intercalary: Optional[str] = None

    @property
    def is_intercalary(self) -> bool:
        return self.intercalary is not None

    def with_time(self, hour: int = 0, minute: int = 0, second: int = 0) -> "CalendarDate":
        return replace(self, time=TimeOfDay(hour, minute, second))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "weekday": self.weekday,
            "time": self.time.to_dict(),
        }
        if self.intercalary is not None:
            out["intercalary"] = self.intercalary
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarDate":
        t = data.get("time") or {}
        return cls(
            year=int(data["year"]),
            month=int(data["month"]),
            day=int(data["day"]),
            weekday=data.get("weekday"),
            time=TimeOfDay(int(t.get("hour", 0)), int(t.get("minute", 0)), int(t.get("second", 0))),
            intercalary=data.get("intercalary"),
        )


@dataclass(frozen=True)
class DateInfo:
    date: CalendarDate
    calendar: CalendarId
    ordinal: int  # days since the start of the epoch year
    is_leap_year: bool
    month_name: str
    weekday_name: Optional[str]
    attributes: Optional[Dict[str, Any]] = None
    debug: Optional[Dict[str, Any]] = None
