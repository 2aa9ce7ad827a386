"""
Error taxonomy for fingerprint computation.

Only a missing numeric value is fatal. Every other per-value problem is
recorded as an ErrorKind on the CanonicalForm, logged, and the computation
carries on so that one malformed cell does not abort a whole table.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kind of problem met while canonicalizing a value."""

    MISSING_VALUE = "missing_value"  # null where a value is required
    FORMAT_MISMATCH = "format_mismatch"  # malformed number or fingerprint text
    UNSUPPORTED_ENCODING = "unsupported_encoding"  # unknown character set
    PARSE_ERROR = "parse_error"  # date does not match its pattern


class UnfError(Exception):
    """Base exception for fingerprint errors."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class MissingValueError(UnfError):
    """
    Raised when a numeric value is None.

    Substituting anything for the missing number would silently change
    the meaning of the fingerprint, so this is always a hard failure.
    """

    kind = ErrorKind.MISSING_VALUE


class FormatMismatchError(UnfError):
    """Raised when text does not have the shape it claims to have."""

    kind = ErrorKind.FORMAT_MISMATCH


class UnsupportedEncodingError(UnfError):
    """Raised when a requested character set is not available."""

    kind = ErrorKind.UNSUPPORTED_ENCODING


class DateParseError(UnfError):
    """
    Raised when a date/time value cannot be read with its pattern.

    Attributes:
        pattern: The application-supplied pattern that failed
    """

    kind = ErrorKind.PARSE_ERROR

    def __init__(self, message: str, value: object = None, pattern: Optional[str] = None):
        super().__init__(message, value)
        self.pattern = pattern

    def __str__(self) -> str:
        base = super().__str__()
        if self.pattern is not None:
            return f"{base} (value={self.value!r}, pattern={self.pattern!r})"
        return base


class ConfigurationError(UnfError, ValueError):
    """Raised when an UnfConfig field is out of range."""


class IncompatibleFingerprintError(UnfError, ValueError):
    """Raised when fingerprints with different version or extensions are combined."""
