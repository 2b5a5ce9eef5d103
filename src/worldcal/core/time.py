from __future__ import annotations

import math
from typing import Tuple

# JDN of 1970-01-01, the Unix epoch.
JDN_UNIX_EPOCH = 2440588
SECONDS_PER_REAL_DAY = 86400


def to_jdn(year: int, month: int, day: int) -> int:
    """Convert a proleptic Gregorian (year, month, day) to a Julian Day Number."""
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of to_jdn. Returns a plain tuple so any year is representable."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def timestamp_to_civil(timestamp: float) -> Tuple[int, int, int]:
    """UTC calendar date of a Unix timestamp (seconds). Caller guarantees a finite value."""
    days = math.floor(timestamp) // SECONDS_PER_REAL_DAY
    return from_jdn(days + JDN_UNIX_EPOCH)


def utc_year(timestamp: float) -> int:
    """UTC calendar year of a Unix timestamp. No local timezone is ever consulted."""
    return timestamp_to_civil(timestamp)[0]


def civil_to_timestamp(year: int, month: int, day: int) -> int:
    """Unix timestamp of midnight UTC starting the given Gregorian date."""
    return (to_jdn(year, month, day) - JDN_UNIX_EPOCH) * SECONDS_PER_REAL_DAY
