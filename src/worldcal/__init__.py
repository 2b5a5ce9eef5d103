"""worldcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401
from .attributes import standard as _standard_attributes  # noqa: F401

from .api import (
    list_calendars,
    calendar_info,
    get_calendar,
    make_engine,
    register_calendar,
    world_time_to_date,
    date_to_world_time,
    year_length,
    month_length,
    calculate_weekday,
    add_days,
    date_info,
    explain,
    year_info,
    month_days,
)
from .core.errors import ConfigurationError, InvalidInputError, InvalidInputWarning, WorldcalError
from .core.types import CalendarDate, DateInfo, TimeOfDay
from .engines.definition import CalendarDefinition

__all__ = [
    "list_calendars",
    "calendar_info",
    "get_calendar",
    "make_engine",
    "register_calendar",
    "world_time_to_date",
    "date_to_world_time",
    "year_length",
    "month_length",
    "calculate_weekday",
    "add_days",
    "date_info",
    "explain",
    "year_info",
    "month_days",
    "CalendarDate",
    "CalendarDefinition",
    "DateInfo",
    "TimeOfDay",
    "WorldcalError",
    "ConfigurationError",
    "InvalidInputError",
    "InvalidInputWarning",
]
