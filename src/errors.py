# src/errors.py


class CalendarError(Exception):
    """Base class for calendar generation errors."""


class ConfigurationError(CalendarError):
    """Engine or settings are missing required data."""


class InvalidYearError(CalendarError):
    """No Gregorian calendar can be computed for the given value."""


class YearOutOfRangeError(CalendarError, ValueError):
    """Requested year is outside the configured bound."""
