from datekit.calendar._exceptions import CalendarError


class FormatError(CalendarError):
    """Raised for date patterns the formatter cannot compile."""
