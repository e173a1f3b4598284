"""Date pattern parsing for bank CSV exports.

Banks describe their date columns with pattern strings such as ``MM/dd/uu``,
``dd/MM/uuuu HH:mm`` or ``d MMM uuuu HH:mm``. A pattern is compiled once into a
:class:`DateFormatter` and compiled formatters are shared through a
:class:`DateFormatterCache`.

Supported pattern letters:

- ``u``/``y``: year. Two letters parse a two-digit year in 2000-2099, three or
  more letters a full year.
- ``M``/``L``: month. One or two letters numeric, ``MMM`` English abbreviation,
  ``MMMM`` English full name.
- ``d``: day of month.
- ``E``: day-of-week text (matched, not used for resolution).
- ``H``, ``k``, ``h``, ``K``: hour. ``m``: minute. ``s``: second. ``S``: fraction.
- ``a``: ``AM``/``PM`` marker.

A single letter accepts one or two digits, a doubled letter exactly two. Text in
single quotes is literal and ``''`` is a quote character. Parsing is
case-sensitive and locale-invariant. A day-of-month beyond the end of the month
resolves to the last day of that month.
"""

import calendar
import logging
import re
import threading
from datetime import date
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
DAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_TIME_COMPONENT = re.compile(r"\s*HH(:mm(:ss)?)?")
_RESERVED_CHARS = frozenset("[]{}#")

_FIELD_RANGES = {
    "month": (1, 12),
    "day": (1, 31),
    "hour_of_day": (0, 23),
    "clock_hour_of_day": (1, 24),
    "hour_of_ampm": (0, 11),
    "clock_hour_of_ampm": (1, 12),
    "minute": (0, 59),
    "second": (0, 59),
}

_HOUR_FIELDS = {
    "H": "hour_of_day",
    "k": "clock_hour_of_day",
    "K": "hour_of_ampm",
    "h": "clock_hour_of_ampm",
}


def simplify_pattern(pattern: str) -> str:
    """Strip the time-of-day component from a date pattern.

    Removes ``HH``, ``HH:mm`` or ``HH:mm:ss`` together with any whitespace in
    front of it, then trims the result. ``"dd/MM/uuuu HH:mm"`` becomes
    ``"dd/MM/uuuu"``.
    """
    return _TIME_COMPONENT.sub("", pattern).strip()


def _alternation(words: Iterable[str]) -> str:
    return "|".join(re.escape(word) for word in words)


def _numeric(letter: str, count: int, pattern: str) -> str:
    if count == 1:
        return r"\d{1,2}"
    if count == 2:
        return r"\d{2}"
    raise ValueError(f"Too many pattern letters '{letter * count}' in '{pattern}'")


def _token(letter: str, count: int, pattern: str) -> tuple[str, Optional[str]]:
    """Return the regex and resolved field for a run of one pattern letter."""
    if letter in "uy":
        if count == 2:
            return r"\d{2}", "two_digit_year"
        return rf"\d{{{count},9}}", "year"
    if letter in "ML":
        if count <= 2:
            return _numeric(letter, count, pattern), "month"
        if count == 3:
            return _alternation(MONTH_ABBREVIATIONS), "month_abbreviation"
        if count == 4:
            return _alternation(MONTH_NAMES), "month_name"
    elif letter == "d":
        return _numeric(letter, count, pattern), "day"
    elif letter == "E":
        if count <= 3:
            return _alternation(DAY_ABBREVIATIONS), None
        if count == 4:
            return _alternation(DAY_NAMES), None
    elif letter in _HOUR_FIELDS:
        return _numeric(letter, count, pattern), _HOUR_FIELDS[letter]
    elif letter == "m":
        return _numeric(letter, count, pattern), "minute"
    elif letter == "s":
        return _numeric(letter, count, pattern), "second"
    elif letter == "S":
        return rf"\d{{{count}}}", None
    elif letter == "a" and count == 1:
        return "AM|PM", None

    raise ValueError(f"Unsupported pattern letters '{letter * count}' in '{pattern}'")


def _read_quoted(pattern: str, start: int) -> tuple[str, int]:
    """Read a quoted literal beginning after the opening quote at ``start``."""
    literal = []
    i = start + 1
    while i < len(pattern):
        if pattern[i] == "'":
            if i + 1 < len(pattern) and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            # An empty quoted section ('') is an escaped quote character
            return "".join(literal) or "'", i + 1
        literal.append(pattern[i])
        i += 1
    raise ValueError(f"Unterminated quote in pattern '{pattern}'")


class DateFormatter:
    """A compiled date pattern.

    Raises:
        ValueError: If the pattern string is not a valid date pattern
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._regex, self._fields = self._compile(pattern)

    def __repr__(self) -> str:
        return f"DateFormatter({self.pattern!r})"

    @staticmethod
    def _compile(pattern: str) -> tuple[re.Pattern[str], list[tuple[str, str]]]:
        parts: list[str] = []
        fields: list[tuple[str, str]] = []
        i = 0
        while i < len(pattern):
            char = pattern[i]
            if char == "'":
                literal, i = _read_quoted(pattern, i)
                parts.append(re.escape(literal))
            elif char.isascii() and char.isalpha():
                end = i
                while end < len(pattern) and pattern[end] == char:
                    end += 1
                regex, field = _token(char, end - i, pattern)
                if field is None:
                    parts.append(f"(?:{regex})")
                else:
                    group = f"f{len(fields)}"
                    parts.append(f"(?P<{group}>{regex})")
                    fields.append((group, field))
                i = end
            elif char in _RESERVED_CHARS:
                raise ValueError(f"Unsupported pattern character '{char}' in '{pattern}'")
            else:
                parts.append(re.escape(char))
                i += 1
        return re.compile("".join(parts)), fields

    def parse(self, text: str) -> date:
        """Parse text into a date.

        Args:
            text: Raw date string; the whole string must match the pattern

        Returns:
            Resolved date (any time-of-day fields are validated and discarded)

        Raises:
            ValueError: If the text does not match or does not resolve to a valid date
        """
        match = self._regex.fullmatch(text)
        if match is None:
            raise ValueError(f"Text '{text}' could not be parsed with pattern '{self.pattern}'")

        values: dict[str, int] = {}
        for group, field in self._fields:
            raw = match.group(group)
            if field == "month_abbreviation":
                field, value = "month", MONTH_ABBREVIATIONS.index(raw) + 1
            elif field == "month_name":
                field, value = "month", MONTH_NAMES.index(raw) + 1
            elif field == "two_digit_year":
                field, value = "year", 2000 + int(raw)
            else:
                value = int(raw)

            bounds = _FIELD_RANGES.get(field)
            if bounds is not None and not bounds[0] <= value <= bounds[1]:
                raise ValueError(f"Invalid value {value} for {field} in '{text}'")
            if values.setdefault(field, value) != value:
                raise ValueError(f"Conflicting values for {field} in '{text}'")

        return self._resolve(values)

    def _resolve(self, values: dict[str, int]) -> date:
        missing = [f for f in ("year", "month", "day") if f not in values]
        if missing:
            raise ValueError(
                f"Pattern '{self.pattern}' does not resolve to a date (missing {', '.join(missing)})"
            )
        year, month, day = values["year"], values["month"], values["day"]
        if not date.min.year <= year <= date.max.year:
            raise ValueError(f"Year {year} is out of range")
        last_day = calendar.monthrange(year, month)[1]
        return date(year, month, min(day, last_day))


class DateFormatterCache:
    """Grow-only cache of compiled formatters keyed by pattern string.

    Safe for concurrent use: formatters are immutable once built and the first
    formatter inserted for a pattern wins.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self._formatters: dict[str, DateFormatter] = {}
        self._lock = threading.Lock()
        for pattern in patterns:
            self.get(pattern)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._formatters

    def __len__(self) -> int:
        return len(self._formatters)

    def get(self, pattern: str) -> DateFormatter:
        """Return the formatter for a pattern, building and caching it on first use."""
        formatter = self._formatters.get(pattern)
        if formatter is None:
            built = DateFormatter(pattern)
            with self._lock:
                formatter = self._formatters.setdefault(pattern, built)
        return formatter

    def parse(self, pattern: str, text: str) -> date:
        """Parse text with a pattern, retrying without the time component.

        Some banks emit a bare date for some rows and a date with time for
        others. When the configured pattern does not match, the pattern with
        its time component stripped is tried.

        Raises:
            ValueError: If neither the pattern nor its simplified form matches
        """
        try:
            return self.get(pattern).parse(text)
        except ValueError:
            simplified = simplify_pattern(pattern)
            logger.debug("Retrying date '%s' with simplified pattern '%s'", text, simplified)
            return self.get(simplified).parse(text)
