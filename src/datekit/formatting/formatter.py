from __future__ import annotations

import re
import threading
from calendar import day_abbr as _day_abbr
from calendar import day_name as _day_name
from calendar import month_abbr as _month_abbr
from calendar import month_name as _month_name
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Union

from datekit.calendar import DateComponents, GregorianCalendar, current_calendar
from datekit.calendar.calendar import InstantLike
from ._exceptions import FormatError

# Unicode LDML pattern letters understood by the formatter
# (https://unicode.org/reports/tr35/tr35-dates.html#Date_Field_Symbol_Table).
FORMAT_FIELDS = frozenset("GyYQqMLwWdDFEecaHhKkmsZ")
PARSE_FIELDS = frozenset("yMLdHhKkmsaEec")

_QUARTER_NAMES = ("1st quarter", "2nd quarter", "3rd quarter", "4th quarter")


@dataclass(frozen=True, slots=True)
class Literal:
    text: str


@dataclass(frozen=True, slots=True)
class Field:
    letter: str
    count: int


Token = Union[Literal, Field]


def tokenize(pattern: str) -> list[Token]:
    """Split a pattern into field runs and literal text."""
    tokens: list[Token] = []
    literal: list[str] = []
    i, n = 0, len(pattern)

    def flush() -> None:
        if literal:
            tokens.append(Literal("".join(literal)))
            literal.clear()

    while i < n:
        ch = pattern[i]
        if ch == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            end = pattern.find("'", i + 1)
            while end != -1 and end + 1 < n and pattern[end + 1] == "'":
                end = pattern.find("'", end + 2)
            if end == -1:
                raise FormatError(f"Unterminated quote in pattern {pattern!r}.")
            literal.append(pattern[i + 1:end].replace("''", "'"))
            i = end + 1
        elif ch.isascii() and ch.isalpha():
            if ch not in FORMAT_FIELDS:
                raise FormatError(f"Unsupported pattern letter {ch!r} in {pattern!r}.")
            j = i
            while j < n and pattern[j] == ch:
                j += 1
            flush()
            tokens.append(Field(ch, j - i))
            i = j
        else:
            literal.append(ch)
            i += 1
    flush()
    return tokens


# ── rendering ─────────────────────────────────────────────────────────────────

def _num(value: int, count: int) -> str:
    return f"{value:0{count}d}"


def _month_text(month: int, count: int) -> str:
    if count <= 2:
        return _num(month, count)
    if count == 3:
        return _month_abbr[month]
    if count == 4:
        return _month_name[month]
    return _month_name[month][:1]


def _weekday_text(local: datetime, count: int) -> str:
    if count == 4:
        return _day_name[local.weekday()]
    if count == 5:
        return _day_name[local.weekday()][:1]
    if count == 6:
        return _day_name[local.weekday()][:2]
    return _day_abbr[local.weekday()]


def _year_text(year: int, count: int) -> str:
    if count == 2:
        return _num(year % 100, 2)
    return _num(year, count)


def _offset_text(local: datetime, count: int) -> str:
    offset = local.utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset is not None else 0
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    if count <= 3:
        return f"{sign}{hours:02d}{minutes:02d}"
    if count == 4:
        return f"GMT{sign}{hours:02d}:{minutes:02d}"
    if hours == 0 and minutes == 0:
        return "Z"
    return f"{sign}{hours:02d}:{minutes:02d}"


def _render(field: Field, local: datetime, cal: GregorianCalendar) -> str:
    letter, count = field.letter, field.count
    if letter == "G":
        return "Anno Domini" if count == 4 else "AD"
    if letter == "y":
        return _year_text(local.year, count)
    if letter == "Y":
        return _year_text(cal.year_for_week_of_year(local), count)
    if letter in "Qq":
        quarter = cal.quarter(local)
        if count <= 2:
            return _num(quarter, count)
        return f"Q{quarter}" if count == 3 else _QUARTER_NAMES[quarter - 1]
    if letter in "ML":
        return _month_text(local.month, count)
    if letter == "w":
        return _num(cal.week_of_year(local), count)
    if letter == "W":
        return _num(cal.week_of_month(local), count)
    if letter == "d":
        return _num(local.day, count)
    if letter == "D":
        return _num(cal.day_of_year(local), count)
    if letter == "F":
        return _num(cal.day_of_week_in_month(local), count)
    if letter == "E":
        return _weekday_text(local, count)
    if letter in "ec":
        if count <= 2:
            return _num(cal.local_weekday(local), count)
        return _weekday_text(local, count)
    if letter == "a":
        return "AM" if local.hour < 12 else "PM"
    if letter == "H":
        return _num(local.hour, count)
    if letter == "h":
        return _num(local.hour % 12 or 12, count)
    if letter == "K":
        return _num(local.hour % 12, count)
    if letter == "k":
        return _num(local.hour or 24, count)
    if letter == "m":
        return _num(local.minute, count)
    if letter == "s":
        return _num(local.second, count)
    return _offset_text(local, count)


# ── parsing ───────────────────────────────────────────────────────────────────

_MAX_DIGITS = {"y": 4}


def _names_regex(names: list[str]) -> str:
    ordered = sorted((n for n in names if n), key=len, reverse=True)
    return "(" + "|".join(re.escape(n) for n in ordered) + ")"


def _field_regex(field: Field) -> str:
    letter, count = field.letter, field.count
    if letter in "ML" and count >= 3:
        names = list(_month_abbr) if count == 3 else list(_month_name)
        return _names_regex(names)
    if letter in "Eec" and (letter == "E" or count >= 3):
        return _names_regex(list(_day_name) + list(_day_abbr))
    if letter == "a":
        return "(AM|PM)"
    if count == 1:
        return rf"(\d{{1,{_MAX_DIGITS.get(letter, 2)}}})"
    return rf"(\d{{{count}}})"


def _compile_parser(tokens: list[Token]) -> Optional[re.Pattern[str]]:
    parts: list[str] = []
    for token in tokens:
        if isinstance(token, Literal):
            parts.append(re.escape(token.text))
        elif token.letter in PARSE_FIELDS:
            parts.append(_field_regex(token))
        else:
            return None
    return re.compile("".join(parts), re.IGNORECASE)


def _month_from_name(text: str) -> int:
    lowered = text.lower()
    for table in (_month_name, _month_abbr):
        for month in range(1, 13):
            if table[month].lower() == lowered:
                return month
    return 0


def _two_digit_year(value: int, now: datetime) -> int:
    # Sliding window: 80 years back, 20 years ahead.
    base = now.year - 80
    year = base - base % 100 + value
    return year if year >= base else year + 100


class DateFormatter:
    """
    Reusable formatter for one LDML date pattern.

    Each formatter owns its own calendar (never the shared one).  Callers
    that use a formatter from several threads hold ``formatter.lock`` for
    the duration of a single format or parse call; the methods take it
    themselves as well, so plain calls are also safe.
    """

    def __init__(self, pattern: str, calendar: Optional[GregorianCalendar] = None) -> None:
        self._pattern = pattern
        self._tokens = tokenize(pattern)
        self._parser = _compile_parser(self._tokens)
        self._calendar: GregorianCalendar = calendar or current_calendar()
        self.lock = threading.RLock()

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def calendar(self) -> GregorianCalendar:
        with self.lock:
            return self._calendar

    @calendar.setter
    def calendar(self, calendar: GregorianCalendar) -> None:
        with self.lock:
            self._calendar = calendar

    @property
    def parseable(self) -> bool:
        return self._parser is not None

    def format(self, instant: InstantLike) -> str:
        with self.lock:
            cal = self._calendar
            local = cal.localize(instant)
            return "".join(
                token.text if isinstance(token, Literal) else _render(token, local, cal)
                for token in self._tokens
            )

    def parse(self, text: str) -> Optional[datetime]:
        """Instant described by text, or None if it does not match or names no real date."""
        if self._parser is None:
            raise FormatError(f"Pattern {self._pattern!r} cannot be used for parsing.")
        with self.lock:
            match = self._parser.fullmatch(text.strip())
            if match is None:
                return None
            cal = self._calendar
            info = DateComponents(year=1970, month=1, day=1)
            hour12: Optional[int] = None
            pm: Optional[bool] = None
            fields = [t for t in self._tokens if isinstance(t, Field)]
            for field, raw in zip(fields, match.groups()):
                letter = field.letter
                if letter == "y":
                    value = int(raw)
                    info.year = _two_digit_year(value, cal.now()) if field.count == 2 else value
                elif letter in "ML":
                    info.month = int(raw) if raw.isdigit() else _month_from_name(raw)
                elif letter == "d":
                    info.day = int(raw)
                elif letter == "H":
                    info.hour = int(raw)
                elif letter == "k":
                    value = int(raw)
                    if not 1 <= value <= 24:
                        return None
                    info.hour = value % 24
                elif letter in "hK":
                    value = int(raw)
                    if (letter == "h" and not 1 <= value <= 12) or (letter == "K" and value > 11):
                        return None
                    hour12 = value % 12
                elif letter == "m":
                    info.minute = int(raw)
                elif letter == "s":
                    info.second = int(raw)
                elif letter == "a":
                    pm = raw.upper() == "PM"
            if hour12 is not None:
                info.hour = hour12 + (12 if pm else 0)
            elif pm and info.hour < 12:
                info.hour += 12
            return cal.date_from_components(info, strict=True)

    def __repr__(self) -> str:
        return f"DateFormatter(pattern={self._pattern!r}, calendar={self._calendar!r})"


FormatterFactory = Callable[[str], DateFormatter]

__all__ = [
    "DateFormatter",
    "FormatterFactory",
    "tokenize",
]
