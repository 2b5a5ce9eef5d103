"""
worldcal.engines.leap
---------------------
Leap rules as a closed tagged variant: NoLeap | GregorianLeap | CustomLeap.

Every rule is periodic in the year number, so besides the per-year predicate each
rule answers leaps_between(a, b) in closed form. The length calculator relies on
that to jump across any number of years without walking them one by one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Union

from ..core.errors import ConfigurationError


def _ceil_div(a: int, b: int) -> int:
    return -((-a) // b)


def _check_extra_days(value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"leap extraDays must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class NoLeap:
    kind: ClassVar[str] = "none"
    month: ClassVar[Optional[str]] = None
    extra_days: ClassVar[int] = 0

    @property
    def period(self) -> int:
        return 1

    def is_leap(self, year: int) -> bool:
        return False

    def leaps_between(self, a: int, b: int) -> int:
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return {"rule": self.kind}


@dataclass(frozen=True)
class GregorianLeap:
    """Every 4th year, except centuries not divisible by 400."""
    kind: ClassVar[str] = "gregorian"

    month: Optional[str] = None
    extra_days: int = 1

    def __post_init__(self) -> None:
        _check_extra_days(self.extra_days)

    @property
    def period(self) -> int:
        return 400

    def is_leap(self, year: int) -> bool:
        return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)

    @staticmethod
    def _leaps_from_zero(n: int) -> int:
        # Signed count of leap years in [0, n).
        return _ceil_div(n, 4) - _ceil_div(n, 100) + _ceil_div(n, 400)

    def leaps_between(self, a: int, b: int) -> int:
        return self._leaps_from_zero(b) - self._leaps_from_zero(a)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"rule": self.kind, "extraDays": self.extra_days}
        if self.month is not None:
            out["month"] = self.month
        return out


@dataclass(frozen=True)
class CustomLeap:
    """Leap iff (year - offset) is a multiple of interval."""
    kind: ClassVar[str] = "custom"

    interval: int
    month: Optional[str] = None
    extra_days: int = 1
    offset: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.interval, bool) or not isinstance(self.interval, int) or self.interval <= 0:
            raise ConfigurationError(f"custom leap interval must be a positive integer, got {self.interval!r}")
        if isinstance(self.offset, bool) or not isinstance(self.offset, int):
            raise ConfigurationError(f"custom leap offset must be an integer, got {self.offset!r}")
        _check_extra_days(self.extra_days)

    @property
    def period(self) -> int:
        return self.interval

    def is_leap(self, year: int) -> bool:
        return (year - self.offset) % self.interval == 0

    def _multiples_below(self, n: int) -> int:
        return _ceil_div(n - self.offset, self.interval)

    def leaps_between(self, a: int, b: int) -> int:
        return self._multiples_below(b) - self._multiples_below(a)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "rule": self.kind,
            "interval": self.interval,
            "extraDays": self.extra_days,
        }
        if self.offset:
            out["offset"] = self.offset
        if self.month is not None:
            out["month"] = self.month
        return out


LeapRule = Union[NoLeap, GregorianLeap, CustomLeap]


def leap_rule_from_dict(data: Optional[Dict[str, Any]]) -> LeapRule:
    """Parse the `leapYear` block of a calendar definition."""
    if not data:
        return NoLeap()
    if not isinstance(data, dict):
        raise ConfigurationError(f"leapYear must be a mapping, got {data!r}")
    rule = data.get("rule", "none")
    extra = data.get("extraDays", 1)
    month = data.get("month")
    if rule == "none":
        return NoLeap()
    if rule == "gregorian":
        return GregorianLeap(month=month, extra_days=extra)
    if rule == "custom":
        interval = data.get("interval")
        if interval is None:
            raise ConfigurationError("custom leap rule requires an interval")
        return CustomLeap(interval=interval, month=month, extra_days=extra, offset=data.get("offset", 0))
    raise ConfigurationError(f"Unknown leap rule '{rule}'. Expected 'none', 'gregorian' or 'custom'.")
