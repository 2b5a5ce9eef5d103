from __future__ import annotations
import math
from typing import Any, Dict, Tuple

from ..core.types import CalendarDate
from .registry import register_attribute, day_of_year

def weekday(engine, info) -> Dict[str, Any]:
    # None for days outside the week.
    idx = info.date.weekday
    if idx is None:
        return {"weekday": None, "weekday_name": None, "weekday_abbreviation": None}
    w = engine.definition.weekdays[idx]
    return {"weekday": idx, "weekday_name": w.name, "weekday_abbreviation": w.abbreviation}

def _season_key(engine, date: CalendarDate) -> Tuple[int, int]:
    # Intercalary blocks sort just before or after the month they are attached to.
    if date.intercalary is None:
        return date.month, date.day
    spec = next(i for i in engine.definition.intercalary if i.name == date.intercalary)
    return (date.month, 0) if spec.placement == "before" else (date.month, 10 ** 9)

def _current_season(engine, date: CalendarDate):
    """(sorted seasons, index of the season holding date), or None without seasons."""
    seasons = sorted(engine.definition.seasons, key=lambda s: (s.start_month, s.start_day))
    if not seasons:
        return None
    key = _season_key(engine, date)
    index = len(seasons) - 1  # wraps around the new year
    for i, s in enumerate(seasons):
        if (s.start_month, s.start_day) <= key:
            index = i
    return seasons, index

def season(engine, info) -> Dict[str, Any]:
    found = _current_season(engine, info.date)
    if found is None:
        return {"season": None}
    seasons, index = found
    return {"season": seasons[index].name}

def _season_start(engine, s, year: int) -> int:
    # A start day missing from this year (a leap day) clamps to the month's last day.
    ordinal = engine.ordinal(CalendarDate(year, s.start_month, s.start_day), policy="clamp")
    return ordinal - engine.lengths.days_before(year) + 1

def _clock(hours: float, minutes_per_hour: int) -> str:
    h = math.floor(hours)
    m = round((hours - h) * minutes_per_hour)
    if m == minutes_per_hour:
        h, m = h + 1, 0
    return f"{h:02d}:{m:02d}"

def sun(engine, info) -> Dict[str, Any]:
    """
    Sunrise and sunset in hours of the day. Each season's times hold on its first
    day and blend linearly into the next season's by the day of the year.
    """
    units = engine.definition.time
    found = _current_season(engine, info.date)
    if found is None:
        rise, set_ = units.hours_per_day / 4, units.hours_per_day * 3 / 4
    else:
        seasons, index = found
        current, nxt = seasons[index], seasons[(index + 1) % len(seasons)]
        year = info.date.year
        year_len = engine.get_year_length(year)
        start, end = _season_start(engine, current, year), _season_start(engine, nxt, year)
        doy = day_of_year(engine, info)

        total = end - start if end > start else year_len - start + end
        elapsed = doy - start if doy >= start else year_len - start + doy
        progress = min(max(elapsed / total, 0.0), 1.0) if total > 0 else 0.0

        (r0, s0), (r1, s1) = current.sun_hours(units.hours_per_day), nxt.sun_hours(units.hours_per_day)
        rise = r0 + (r1 - r0) * progress
        set_ = s0 + (s1 - s0) * progress
    return {
        "sunrise": rise,
        "sunset": set_,
        "sunrise_time": _clock(rise, units.minutes_per_hour),
        "sunset_time": _clock(set_, units.minutes_per_hour),
    }

def moon_phase(engine, moon, ordinal: int) -> Dict[str, Any]:
    """Phase of one moon on the day with the given ordinal, counted from its reference new moon."""
    y, m, d = moon.first_new_moon
    ref = engine.ordinal(CalendarDate(y, m, d), policy="clamp")
    age = math.fmod(ordinal - ref, moon.cycle_length)
    if age < 0:
        age += moon.cycle_length

    index, end = 0, moon.phases[0].length
    while age >= end and index < len(moon.phases) - 1:
        index += 1
        end += moon.phases[index].length
    return {
        "name": moon.name,
        "phase": moon.phases[index].name,
        "phase_index": index,
        "age": age,
        "illumination": round((1 - math.cos(2 * math.pi * age / moon.cycle_length)) / 2, 4),
    }

def moons(engine, info) -> Dict[str, Any]:
    return {"moons": [moon_phase(engine, moon, info.ordinal) for moon in engine.definition.moons]}

def year_label(engine, info) -> Dict[str, Any]:
    y = engine.definition.year
    return {"year_label": f"{y.prefix}{info.date.year}{y.suffix}"}

def day_of_year_attr(engine, info) -> Dict[str, Any]:
    return {"day_of_year": day_of_year(engine, info)}

register_attribute("weekday", weekday)
register_attribute("season", season)
register_attribute("sun", sun)
register_attribute("moons", moons)
register_attribute("year_label", year_label)
register_attribute("day_of_year", day_of_year_attr)
