"""
Canonical form of date/time values.

Applications describe their values with SimpleDateFormat-style patterns
("yyyy-MM-dd'T'HH:mm:ss"). The canonical pattern is derived from which
pattern letters are present, never from the values:

    y                -> yyyy
    y M              -> yyyy-MM
    y M d            -> yyyy-MM-dd, and the time section may follow
    H/k/h/K          -> HH (after 'T' when a full date is present)
    ... m            -> :mm
    ... m s          -> :ss
    ... m s S        -> .SSS
    z/Z with an hour -> value converted to UTC, literal "Z" appended

A pattern with a day but no month is not a valid date and is evaluated as
a time only. Values are parsed with the application pattern and written back
with the canonical one. Trailing zeros of the fraction are dropped, as is
the decimal point when the whole fraction is zero.

Values are read the way SimpleDateFormat reads them: only the leading part
that matches the pattern counts, S digits are whole milliseconds and k
accepts 24 for midnight. Zone names (z) are limited to what strptime
accepts for %Z (UTC, GMT and the local zone names); numeric offsets (Z)
are always understood.

Parse failures never abort a computation: they are logged and the value is
kept exactly as it was given.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, List, Optional, Pattern, Tuple

from .errors import DateParseError, ErrorKind

logger = logging.getLogger(__name__)

HOUR_LETTERS = ("H", "k", "h", "K")
TIMEZONE_LETTERS = ("z", "Z")
RANGE_SEPARATOR = "/"
UTC_MARKER = "Z"

_DATE_FIELDS = ("year", "month", "day")
_TIME_FIELDS = ("hour", "minute", "second", "fraction")

_CANONICAL_TOKENS = {
    "year": "yyyy",
    "month": "-MM",
    "day": "-dd",
    "hour": "HH",
    "minute": ":mm",
    "second": ":ss",
    "fraction": ".SSS",
}

# A strptime directive with the letter run it came from, or literal text
Token = Tuple[Optional[str], str]

_DIRECTIVE_REGEX = {
    "%Y": r"\d{4}",
    "%y": r"\d{2}",
    "%m": r"\d{1,2}",
    "%d": r"\d{1,2}",
    "%H": r"\d{1,2}",
    "%I": r"\d{1,2}",
    "%M": r"\d{1,2}",
    "%S": r"\d{1,2}",
    "%j": r"\d{1,3}",
    "%f": r"\d+",
    "%B": r"[^\W\d_]+",
    "%b": r"[^\W\d_]+",
    "%A": r"[^\W\d_]+",
    "%a": r"[^\W\d_]+",
    "%p": r"[^\W\d_]+",
    "%Z": r"[^\W\d_]+",
    "%z": r"Z|[+-]\d{2}:?\d{2}",
}

# S counts whole milliseconds; k runs 1-24 with 24 meaning midnight
_MILLIS_GROUP = "millis"
_CLOCK24_GROUP = "clock24"


class UnfDateFormat:
    """
    Canonical date/time format derived from an application pattern.

    Attributes:
        pattern: The application-supplied pattern
        date_fields: Date components kept ("year", "month", "day")
        time_fields: Time components kept ("hour", "minute", "second", "fraction")
        timezone_specified: Values are converted to UTC and marked with "Z"
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.date_fields: Tuple[str, ...] = ()
        self.time_fields: Tuple[str, ...] = ()
        self.timezone_specified = False
        self._strptime_format: Optional[str] = None
        self._matcher: Optional[Pattern[str]] = None

        valid_date = self._derive_date(pattern)
        if not valid_date:
            self.date_fields = ()
            self._derive_time(pattern)

    def _derive_date(self, pattern: str) -> bool:
        if "y" not in pattern:
            return False
        if "M" in pattern:
            if "d" in pattern:
                self.date_fields = _DATE_FIELDS
                self._derive_time(pattern)
            else:
                self.date_fields = ("year", "month")
            return True
        if "d" in pattern:
            # Day without month
            return False
        self.date_fields = ("year",)
        return True

    def _derive_time(self, pattern: str) -> None:
        if not any(letter in pattern for letter in HOUR_LETTERS):
            return
        fields = ["hour"]
        if "m" in pattern:
            fields.append("minute")
            if "s" in pattern:
                fields.append("second")
                if "S" in pattern:
                    fields.append("fraction")
        self.time_fields = tuple(fields)
        self.timezone_specified = any(
            letter in pattern for letter in TIMEZONE_LETTERS
        )

    @property
    def is_valid(self) -> bool:
        """True when the pattern yields at least one canonical component."""
        return bool(self.date_fields or self.time_fields)

    @property
    def canonical_pattern(self) -> Optional[str]:
        """The derived pattern, in the same letter vocabulary as the input."""
        if not self.is_valid:
            return None
        parts = [_CANONICAL_TOKENS[f] for f in self.date_fields]
        if self.time_fields:
            if self.date_fields:
                parts.append("'T'")
            parts.extend(_CANONICAL_TOKENS[f] for f in self.time_fields)
            if self.timezone_specified:
                parts.append("'Z'")
        return "".join(parts)

    @property
    def strptime_format(self) -> str:
        """The application pattern translated to a strptime format."""
        if self._strptime_format is None:
            self._strptime_format = to_strptime(self.pattern)
        return self._strptime_format

    @property
    def matcher(self) -> Pattern[str]:
        """Compiled regular expression for values in the application pattern."""
        if self._matcher is None:
            self._matcher = re.compile(to_regex(self.pattern), re.IGNORECASE)
        return self._matcher

    def parse(self, text: str) -> datetime:
        """
        Parse a value with the application pattern.

        Only the leading part of the text that matches the pattern is read;
        anything after it is ignored. Fractional-second digits are a whole
        number of milliseconds, so ".5" is 5 ms and not half a second.

        Raises:
            DateParseError: If the value does not match the pattern
        """
        if not isinstance(text, str):
            raise DateParseError(
                f"Expected str, got {type(text).__name__}", text, self.pattern
            )
        match = self.matcher.match(text)
        if match is None:
            raise DateParseError("Value does not match pattern", text, self.pattern)
        matched = match.group(0)
        if len(matched) < len(text):
            logger.debug("ignoring %r after date/time %r", text[len(matched):], matched)

        millis = 0
        edits = []
        groups = match.groupdict()
        if groups.get(_MILLIS_GROUP) is not None:
            millis = int(groups[_MILLIS_GROUP])
            edits.append((match.span(_MILLIS_GROUP), "0"))
        clock24 = groups.get(_CLOCK24_GROUP)
        if clock24 is not None and int(clock24) == 24:
            edits.append((match.span(_CLOCK24_GROUP), "0"))
        for (start, end), replacement in sorted(edits, reverse=True):
            matched = matched[:start] + replacement + matched[end:]

        try:
            value = datetime.strptime(matched, self.strptime_format)
        except ValueError as exc:
            raise DateParseError(str(exc), text, self.pattern) from exc
        return value + timedelta(milliseconds=millis)

    def format(self, value: Any) -> str:
        """Write a date, time or datetime with the canonical pattern."""
        if not self.is_valid:
            raise DateParseError(
                "Pattern has no date or time component", value, self.pattern
            )
        if isinstance(value, time):
            value = datetime.combine(date(1900, 1, 1), value)
        elif not isinstance(value, datetime):
            value = datetime(value.year, value.month, value.day)

        if self.timezone_specified and value.utcoffset() is not None:
            value = value.astimezone(timezone.utc)

        parts: List[str] = []
        if "year" in self.date_fields:
            parts.append(f"{value.year:04d}")
        if "month" in self.date_fields:
            parts.append(f"-{value.month:02d}")
        if "day" in self.date_fields:
            parts.append(f"-{value.day:02d}")
        if self.time_fields:
            if self.date_fields:
                parts.append("T")
            parts.append(f"{value.hour:02d}")
            if "minute" in self.time_fields:
                parts.append(f":{value.minute:02d}")
            if "second" in self.time_fields:
                parts.append(f":{value.second:02d}")
            if "fraction" in self.time_fields:
                fraction = f"{value.microsecond // 1000:03d}".rstrip("0")
                if fraction:
                    parts.append(f".{fraction}")
            if self.timezone_specified:
                parts.append(UTC_MARKER)
        return "".join(parts)

    def normalize(self, text: str) -> str:
        """
        Parse with the application pattern and reformat canonically.

        Raises:
            DateParseError: If the value cannot be normalized
        """
        if not self.is_valid:
            raise DateParseError(
                "Pattern has no date or time component", text, self.pattern
            )
        return self.format(self.parse(text))

    def __repr__(self) -> str:
        return (
            f"UnfDateFormat(pattern={self.pattern!r}, "
            f"canonical={self.canonical_pattern!r})"
        )


# Canonical formats for values that arrive as date/time objects
_NATIVE_DATETIME = UnfDateFormat("yyyy-MM-dd'T'HH:mm:ss.SSS")
_NATIVE_DATETIME_UTC = UnfDateFormat("yyyy-MM-dd'T'HH:mm:ss.SSSZ")
_NATIVE_DATE = UnfDateFormat("yyyy-MM-dd")
_NATIVE_TIME = UnfDateFormat("HH:mm:ss.SSS")
_NATIVE_TIME_UTC = UnfDateFormat("HH:mm:ss.SSSZ")


def format_native(value: Any) -> str:
    """Canonical string for a datetime, date or time object."""
    if isinstance(value, datetime):
        aware = value.utcoffset() is not None
        return (_NATIVE_DATETIME_UTC if aware else _NATIVE_DATETIME).format(value)
    if isinstance(value, date):
        return _NATIVE_DATE.format(value)
    if isinstance(value, time):
        aware = value.utcoffset() is not None
        return (_NATIVE_TIME_UTC if aware else _NATIVE_TIME).format(value)
    raise TypeError(f"Expected a date/time object, got {type(value).__name__}")


def canonical_datetime(
    value: Any, pattern: Optional[str] = None, end: Any = None
) -> Tuple[str, Optional[ErrorKind]]:
    """
    Canonical string for a date/time value or a start/end range.

    Args:
        value: Text in the given pattern, or a date/time object
        pattern: Application pattern for text values; None keeps text as is
        end: Optional end of a range, in the same pattern

    Returns:
        (canonical string, PARSE_ERROR if any segment failed else None)
    """
    date_format = UnfDateFormat(pattern) if pattern is not None else None
    text, error = _normalize_segment(value, date_format)
    if end is not None:
        end_text, end_error = _normalize_segment(end, date_format)
        text = f"{text}{RANGE_SEPARATOR}{end_text}"
        error = error or end_error
    return text, error


def _normalize_segment(
    value: Any, date_format: Optional[UnfDateFormat]
) -> Tuple[str, Optional[ErrorKind]]:
    if isinstance(value, (datetime, date, time)):
        return format_native(value), None
    if date_format is None:
        return str(value), None
    try:
        return date_format.normalize(value), None
    except DateParseError as exc:
        logger.error("could not normalize date/time value: %s", exc)
        return str(value), ErrorKind.PARSE_ERROR


def tokenize(pattern: str) -> List[Token]:
    """
    Split a SimpleDateFormat-style pattern into directives and literal text.

    Quoted text is literal and '' is a single quote.

    Raises:
        DateParseError: If a letter has no strptime equivalent or a field repeats
    """
    tokens: List[Token] = []
    seen = set()
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                tokens.append((None, "'"))
                i += 2
                continue
            i += 1
            literal: List[str] = []
            while i < n:
                if pattern[i] == "'":
                    if i + 1 < n and pattern[i + 1] == "'":
                        literal.append("'")
                        i += 2
                        continue
                    break
                literal.append(pattern[i])
                i += 1
            i += 1  # closing quote
            tokens.append((None, "".join(literal)))
            continue
        if ("a" <= ch <= "z") or ("A" <= ch <= "Z"):
            j = i
            while j < n and pattern[j] == ch:
                j += 1
            directive = _directive(ch, j - i, pattern)
            if directive in seen:
                raise DateParseError(
                    f"Pattern letter {ch!r} repeated", None, pattern
                )
            seen.add(directive)
            tokens.append((directive, pattern[i:j]))
            i = j
            continue
        tokens.append((None, ch))
        i += 1
    return tokens


def to_strptime(pattern: str) -> str:
    """
    Translate a SimpleDateFormat-style pattern into a strptime format.

    Raises:
        DateParseError: If the pattern uses a letter with no strptime equivalent
    """
    return "".join(
        directive if directive else text.replace("%", "%%")
        for directive, text in tokenize(pattern)
    )


def to_regex(pattern: str) -> str:
    """
    Regular expression matching the text a pattern describes.

    Millisecond (S) and 1-24 hour (k) fields are captured in named groups so
    their digits can be rewritten before strptime reads them.

    Raises:
        DateParseError: If the pattern uses a letter with no strptime equivalent
    """
    parts: List[str] = []
    for directive, text in tokenize(pattern):
        if directive is None:
            for piece in re.split(r"(\s+)", text):
                if piece:
                    parts.append(r"\s+" if piece.isspace() else re.escape(piece))
            continue
        body = _DIRECTIVE_REGEX[directive]
        if text[0] == "S":
            parts.append(f"(?P<{_MILLIS_GROUP}>{body})")
        elif text[0] == "k":
            parts.append(f"(?P<{_CLOCK24_GROUP}>{body})")
        else:
            parts.append(f"(?:{body})")
    return "".join(parts)


def _directive(letter: str, count: int, pattern: str) -> str:
    if letter == "y":
        return "%y" if count == 2 else "%Y"
    if letter in ("M", "L"):
        if count >= 4:
            return "%B"
        return "%b" if count == 3 else "%m"
    if letter == "E":
        return "%A" if count >= 4 else "%a"
    simple = {
        "d": "%d",
        "H": "%H",
        "k": "%H",
        "h": "%I",
        "K": "%I",
        "m": "%M",
        "s": "%S",
        "S": "%f",
        "a": "%p",
        "D": "%j",
        "z": "%Z",
        "Z": "%z",
        "X": "%z",
    }
    if letter not in simple:
        raise DateParseError(f"Unsupported pattern letter {letter!r}", None, pattern)
    return simple[letter]
