"""
worldcal.engines.factory
------------------------
Transforms pure data definitions into live, executable engine objects.
"""

from __future__ import annotations

from typing import Any, Dict, Union

from ..core.types import CalendarId
from .calendar import CalendarEngine
from .definition import CalendarDefinition


def build_calendar_engine(definition: CalendarDefinition, *, family: str = "custom") -> CalendarEngine:
    """Transforms a CalendarDefinition into a live CalendarEngine."""
    return CalendarEngine(definition, id=CalendarId(family=family, name=definition.id))


def make_engine(
    definition: Union[CalendarDefinition, Dict[str, Any]],
    *,
    family: str = "custom",
) -> CalendarEngine:
    """The universal entry point. Accepts a definition or its schema mapping."""
    if isinstance(definition, dict):
        definition = CalendarDefinition.from_dict(definition)
    elif not isinstance(definition, CalendarDefinition):
        raise TypeError(f"Unknown calendar definition type: {type(definition)}")
    return build_calendar_engine(definition, family=family)
