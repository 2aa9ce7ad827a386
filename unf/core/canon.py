"""Canonicalization of fingerprint values.

Turns one value of any supported kind into the exact bytes that are hashed.

Guarantees:
- canonicalize(v, config) is deterministic: same input always yields identical bytes
- Every real value ends with a line feed and, unless disabled, a NUL
- A missing value is three NUL bytes, which no real value can produce
- Text is UTF-8 encoded
- Numbers that are equal after rounding share one form, whatever their type
- -0.0 and 0.0 stay distinct
"""
from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from .bits import BitString
from .config import UnfConfig
from .dates import canonical_datetime
from .numeric import REAL_TYPES, canonical_number, terminate
from .text import CANONICAL_ENCODING, canonical_text, decode_text
from .types import (
    BooleanValue,
    CanonicalForm,
    DateTimeValue,
    NumberValue,
    TextValue,
    Value,
)

MISSING_VALUE = b"\x00\x00\x00"

_MISSING = CanonicalForm(MISSING_VALUE)


def canonicalize(value: Optional[Value], config: Optional[UnfConfig] = None) -> CanonicalForm:
    """Canonicalize one tagged value.

    Args:
        value: A NumberValue, TextValue, DateTimeValue, BooleanValue or
               BitString; None stands for a missing value.
        config: Canonicalization parameters, defaults when omitted.

    Returns:
        The canonical bytes plus any non-fatal problem met on the way.

    Raises:
        MissingValueError: A NumberValue holds None.
        TypeError: value is not one of the supported kinds.
    """
    config = config or UnfConfig()
    if value is None:
        return _MISSING
    if isinstance(value, NumberValue):
        return _canon_number(value, config)
    if isinstance(value, TextValue):
        return _canon_text(value, config)
    if isinstance(value, DateTimeValue):
        return _canon_datetime(value, config)
    if isinstance(value, BooleanValue):
        return _canon_boolean(value, config)
    if isinstance(value, BitString):
        return _canon_bits(value, config)
    raise TypeError(f"Unsupported value kind: {type(value).__name__}")


def to_value(obj: Any) -> Optional[Value]:
    """Wrap a plain Python object in its value kind.

    None stays None (missing). Already tagged values pass through.
    """
    if obj is None or isinstance(
        obj, (NumberValue, TextValue, DateTimeValue, BooleanValue, BitString)
    ):
        return obj
    if isinstance(obj, bool):
        return BooleanValue(obj)
    if isinstance(obj, REAL_TYPES):
        return NumberValue(obj)
    if isinstance(obj, str):
        return TextValue(obj)
    if isinstance(obj, (bytes, bytearray)):
        return TextValue(bytes(obj))
    if isinstance(obj, (datetime, date, time)):
        return DateTimeValue(obj)
    raise TypeError(f"Cannot fingerprint value of type {type(obj).__name__}")


def _canon_number(value: NumberValue, config: UnfConfig) -> CanonicalForm:
    text = canonical_number(value.value, config.digits, config.null_byte)
    return CanonicalForm(text.encode(CANONICAL_ENCODING))


def _canon_text(value: TextValue, config: UnfConfig) -> CanonicalForm:
    if value.value is None:
        return _MISSING
    error = None
    text = value.value
    if isinstance(text, (bytes, bytearray)):
        text, error = decode_text(text, value.encoding)
    canonical = canonical_text(
        text,
        config.characters,
        config.null_byte,
        config.convert_text_to_number,
        config.digits,
    )
    return CanonicalForm(canonical.encode(CANONICAL_ENCODING), error)


def _canon_datetime(value: DateTimeValue, config: UnfConfig) -> CanonicalForm:
    if value.value is None:
        return _MISSING
    text, error = canonical_datetime(value.value, value.pattern, value.end)
    canonical = canonical_text(text, config.characters, config.null_byte)
    return CanonicalForm(canonical.encode(CANONICAL_ENCODING), error)


def _canon_boolean(value: BooleanValue, config: UnfConfig) -> CanonicalForm:
    if value.value is None:
        return _MISSING
    number = 1 if value.value else 0
    text = canonical_number(number, config.digits, config.null_byte)
    return CanonicalForm(text.encode(CANONICAL_ENCODING))


def _canon_bits(value: BitString, config: UnfConfig) -> CanonicalForm:
    if not value.is_set:
        return _MISSING
    text = terminate(value.to_base64(), config.null_byte)
    return CanonicalForm(text.encode(CANONICAL_ENCODING))
