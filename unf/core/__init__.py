"""Canonicalization and hashing pipeline for UNF."""

from .bits import BitString
from .byteorder import change_byte_order, to_base64, to_base64_text
from .canon import MISSING_VALUE, canonicalize, to_value
from .config import UnfConfig
from .dates import UnfDateFormat, canonical_datetime
from .digest import UnfDigest, transpose
from .errors import (
    ConfigurationError,
    DateParseError,
    ErrorKind,
    FormatMismatchError,
    IncompatibleFingerprintError,
    MissingValueError,
    UnfError,
    UnsupportedEncodingError,
)
from .metadata import Fingerprint, FingerprintSet, is_fingerprint
from .numeric import canonical_number
from .text import canonical_text
from .types import (
    BooleanValue,
    CanonicalForm,
    DateTimeValue,
    NumberValue,
    TextValue,
    Value,
)

__all__ = [
    # Configuration
    "UnfConfig",
    # Value kinds
    "Value",
    "NumberValue",
    "TextValue",
    "DateTimeValue",
    "BooleanValue",
    "BitString",
    "CanonicalForm",
    # Canonicalization
    "canonicalize",
    "to_value",
    "canonical_number",
    "canonical_text",
    "canonical_datetime",
    "UnfDateFormat",
    "MISSING_VALUE",
    # Byte order
    "change_byte_order",
    "to_base64",
    "to_base64_text",
    # Engine
    "UnfDigest",
    "transpose",
    # Metadata
    "Fingerprint",
    "FingerprintSet",
    "is_fingerprint",
    # Errors
    "ErrorKind",
    "UnfError",
    "MissingValueError",
    "FormatMismatchError",
    "UnsupportedEncodingError",
    "DateParseError",
    "ConfigurationError",
    "IncompatibleFingerprintError",
]
