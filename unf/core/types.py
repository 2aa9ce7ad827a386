from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from .bits import BitString
from .errors import ErrorKind


@dataclass(frozen=True)
class NumberValue:
    value: Any


@dataclass(frozen=True)
class TextValue:
    """
    Character data.

    Attributes:
        value: str, or bytes in ``encoding``
        encoding: Source encoding for bytes values
    """

    value: Any
    encoding: Optional[str] = None


@dataclass(frozen=True)
class DateTimeValue:
    """
    A date/time value, or a start/end range.

    Attributes:
        value: Text in ``pattern``, or a datetime/date/time object
        pattern: SimpleDateFormat-style pattern for text values
        end: Optional end of a range, in the same pattern
    """

    value: Any
    pattern: Optional[str] = None
    end: Any = None


@dataclass(frozen=True)
class BooleanValue:
    value: bool


# The closed set of value kinds the canonicalizer accepts
Value = Union[NumberValue, TextValue, DateTimeValue, BooleanValue, BitString]


@dataclass(frozen=True)
class CanonicalForm:
    """
    Canonical bytes of one value.

    Attributes:
        data: Bytes fed to the hash
        error: Non-fatal problem met while canonicalizing, if any
    """

    data: bytes
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None
