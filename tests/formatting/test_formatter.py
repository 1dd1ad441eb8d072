"""
tests/formatting/test_formatter.py

Covers:
  - Pattern tokenising (fields, quoted literals, errors)
  - Numeric and text fields
  - Week-based fields following the formatter's calendar
  - Parsing, including impossible dates
"""

import calendar as stdlib_calendar
from datetime import datetime

import pytest

from datekit.calendar import GregorianCalendar
from datekit.formatting import DateFormatter, FormatError
from datekit.formatting.formatter import Field, Literal, tokenize


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def utc():
    return GregorianCalendar("UTC", first_weekday=1)


@pytest.fixture
def leap_afternoon():
    """Thursday 29 February 2024, 13:05:09."""
    return datetime(2024, 2, 29, 13, 5, 9)


def fmt(pattern, cal):
    return DateFormatter(pattern, calendar=cal)


# ── Tokenising ────────────────────────────────────────────────────────────────

class TestTokenize:

    def test_fields_and_literals(self):
        assert tokenize("yyyy-MM-dd") == [
            Field("y", 4), Literal("-"), Field("M", 2), Literal("-"), Field("d", 2),
        ]

    def test_quoted_text(self):
        assert tokenize("'week' w") == [Literal("week "), Field("w", 1)]

    def test_escaped_quote(self):
        assert tokenize("h 'o''clock'") == [Field("h", 1), Literal(" o'clock")]
        assert tokenize("''") == [Literal("'")]

    def test_unsupported_letter_raises(self):
        with pytest.raises(FormatError):
            tokenize("yyyy-xx")

    def test_unterminated_quote_raises(self):
        with pytest.raises(FormatError):
            tokenize("yyyy 'oops")

    def test_format_error_is_calendar_error(self):
        from datekit.calendar import CalendarError
        assert issubclass(FormatError, CalendarError)


# ── Formatting ────────────────────────────────────────────────────────────────

class TestFormat:

    def test_iso_date_time(self, utc, leap_afternoon):
        assert fmt("yyyy-MM-dd HH:mm:ss", utc).format(leap_afternoon) == "2024-02-29 13:05:09"

    def test_unpadded_fields(self, utc):
        assert fmt("y M d H m s", utc).format(datetime(2024, 3, 4, 5, 6, 7)) == "2024 3 4 5 6 7"

    def test_two_digit_year(self, utc):
        assert fmt("yy", utc).format(datetime(2007, 1, 1)) == "07"

    def test_day_of_year(self, utc, leap_afternoon):
        assert fmt("DDD", utc).format(leap_afternoon) == "060"

    def test_quarter(self, utc):
        d = datetime(2024, 8, 1)
        assert fmt("q", utc).format(d) == "3"
        assert fmt("QQQ", utc).format(d) == "Q3"
        assert fmt("QQQQ", utc).format(d) == "3rd quarter"

    def test_twelve_hour_clock(self, utc, leap_afternoon):
        assert fmt("h:mm a", utc).format(leap_afternoon) == "1:05 PM"
        assert fmt("h a", utc).format(datetime(2024, 1, 1, 0, 30)) == "12 AM"
        assert fmt("K", utc).format(datetime(2024, 1, 1, 12)) == "0"
        assert fmt("k", utc).format(datetime(2024, 1, 1, 0)) == "24"

    def test_month_names(self, utc, leap_afternoon):
        assert fmt("MMMM", utc).format(leap_afternoon) == stdlib_calendar.month_name[2]
        assert fmt("MMM", utc).format(leap_afternoon) == stdlib_calendar.month_abbr[2]

    def test_weekday_names(self, utc, leap_afternoon):
        assert fmt("eeee", utc).format(leap_afternoon) == stdlib_calendar.day_name[3]
        assert fmt("EEE", utc).format(leap_afternoon) == stdlib_calendar.day_abbr[3]

    def test_local_weekday_follows_calendar(self, leap_afternoon):
        assert fmt("e", GregorianCalendar("UTC", first_weekday=1)).format(leap_afternoon) == "5"
        assert fmt("e", GregorianCalendar("UTC", first_weekday=2)).format(leap_afternoon) == "4"

    def test_week_fields(self, utc):
        assert fmt("ww", utc).format(datetime(2022, 1, 1)) == "52"
        assert fmt("W", utc).format(datetime(2024, 2, 1)) == "0"
        assert fmt("F", utc).format(datetime(2024, 2, 29)) == "5"

    def test_week_year(self):
        iso = GregorianCalendar("UTC", first_weekday=2)
        assert fmt("YYYY-'W'ww", iso).format(datetime(2021, 1, 1)) == "2020-W53"

    def test_offset(self):
        cal = GregorianCalendar("Asia/Kolkata")
        d = datetime(2024, 1, 1, 12)
        assert fmt("Z", cal).format(d) == "+0530"
        assert fmt("ZZZZ", cal).format(d) == "GMT+05:30"
        assert fmt("ZZZZZ", GregorianCalendar("UTC")).format(d) == "Z"

    def test_era(self, utc, leap_afternoon):
        assert fmt("G", utc).format(leap_afternoon) == "AD"

    def test_calendar_can_be_swapped(self, utc):
        formatter = fmt("e", utc)
        formatter.calendar = GregorianCalendar("UTC", first_weekday=2)
        assert formatter.format(datetime(2024, 2, 29)) == "4"

    def test_default_calendar_is_not_shared(self):
        from datekit.calendar import shared_calendar
        assert DateFormatter("yyyy").calendar is not shared_calendar()

    def test_repr(self, utc):
        assert "pattern='yyyy'" in repr(fmt("yyyy", utc))


# ── Parsing ───────────────────────────────────────────────────────────────────

class TestParse:

    def test_iso_date(self, utc):
        result = fmt("yyyy-MM-dd", utc).parse("2024-02-29")
        assert (result.year, result.month, result.day, result.hour) == (2024, 2, 29, 0)
        assert result.tzinfo is not None

    def test_iso_date_time(self, utc):
        result = fmt("yyyy-MM-dd HH:mm:ss", utc).parse("2023-07-04 18:30:05")
        assert (result.hour, result.minute, result.second) == (18, 30, 5)

    def test_impossible_date_is_none(self, utc):
        assert fmt("yyyy-MM-dd", utc).parse("2023-02-29") is None
        assert fmt("yyyy-MM-dd", utc).parse("2023-04-31") is None

    def test_mismatch_is_none(self, utc):
        assert fmt("yyyy-MM-dd", utc).parse("not a date") is None
        assert fmt("yyyy-MM-dd", utc).parse("2023-7-04") is None

    def test_month_name(self, utc):
        name = stdlib_calendar.month_name[3]
        result = fmt("d MMMM yyyy", utc).parse(f"9 {name} 2022")
        assert (result.year, result.month, result.day) == (2022, 3, 9)

    def test_twelve_hour_with_marker(self, utc):
        result = fmt("yyyy-MM-dd h:mm a", utc).parse("2024-01-01 12:15 AM")
        assert (result.hour, result.minute) == (0, 15)
        result = fmt("yyyy-MM-dd h:mm a", utc).parse("2024-01-01 3:00 pm")
        assert result.hour == 15

    def test_out_of_range_hour_is_none(self, utc):
        assert fmt("yyyy-MM-dd h", utc).parse("2024-01-01 13") is None
        assert fmt("yyyy-MM-dd HH", utc).parse("2024-01-01 25") is None

    def test_parse_in_formatter_zone(self):
        cal = GregorianCalendar("Asia/Tokyo")
        result = fmt("yyyy-MM-dd", cal).parse("2024-06-01")
        assert result.utcoffset().total_seconds() == 9 * 3600

    def test_week_pattern_cannot_parse(self, utc):
        formatter = fmt("ww", utc)
        assert not formatter.parseable
        with pytest.raises(FormatError):
            formatter.parse("12")
