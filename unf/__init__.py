import logging

from .api import (
    add_unfs,
    calculate_unf,
    unf_bits,
    unf_booleans,
    unf_dataframe,
    unf_dataframe_set,
    unf_dates,
    unf_list,
    unf_numbers,
    unf_strings,
    unf_table,
    unf_table_set,
    unf_value,
)
from .core import (
    # Value kinds
    BitString,
    BooleanValue,
    CanonicalForm,
    # Errors
    ConfigurationError,
    DateParseError,
    DateTimeValue,
    ErrorKind,
    # Metadata
    Fingerprint,
    FingerprintSet,
    FormatMismatchError,
    IncompatibleFingerprintError,
    MissingValueError,
    NumberValue,
    TextValue,
    # Configuration
    UnfConfig,
    UnfDateFormat,
    # Engine
    UnfDigest,
    UnfError,
    UnsupportedEncodingError,
    # Canonicalization
    canonicalize,
    is_fingerprint,
)
from .version import LIBRARY_VERSION, UNF_PREFIX, UNF_VERSION

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "LIBRARY_VERSION",
    "UNF_VERSION",
    "UNF_PREFIX",
    # Entry points
    "unf_numbers",
    "unf_booleans",
    "unf_strings",
    "unf_dates",
    "unf_bits",
    "unf_list",
    "unf_value",
    "unf_table",
    "unf_table_set",
    "unf_dataframe",
    "unf_dataframe_set",
    "add_unfs",
    "calculate_unf",
    # Configuration
    "UnfConfig",
    # Value kinds
    "NumberValue",
    "TextValue",
    "DateTimeValue",
    "BooleanValue",
    "BitString",
    "CanonicalForm",
    # Canonicalization
    "canonicalize",
    "UnfDateFormat",
    # Engine
    "UnfDigest",
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
