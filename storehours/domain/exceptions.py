"""
Domain-specific exception hierarchy for the store hours engine.
"""


class StoreHoursError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeFormat(StoreHoursError, ValueError):
    """Raised when a time or date string has non-numeric or missing fields."""


class InvalidTimeRange(StoreHoursError, ValueError):
    """Raised when an hour or minute lies outside its valid range."""


class TimezoneLookupError(StoreHoursError):
    """Raised when a timezone name cannot be resolved to an offset."""


class StoreAPIError(StoreHoursError):
    """Raised when store data cannot be fetched or parsed."""
