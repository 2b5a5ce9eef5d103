class WorldcalError(Exception):
    """Base error."""

class ConfigurationError(WorldcalError, ValueError):
    """Raised when a calendar definition is malformed. Only ever raised at construction."""

class InvalidInputError(WorldcalError, ValueError):
    """Raised when a date passed to a query has out-of-range or unknown fields."""

class InvalidInputWarning(UserWarning):
    """Emitted when a non-finite world time or anchor was replaced by a fallback."""
