class CalendarError(ValueError):
    """Base exception for all calendar-related errors."""
