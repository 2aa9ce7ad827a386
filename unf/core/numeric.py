"""Canonical text form of numeric values.

A number is rounded to a budget of significant digits and written in
normalized scientific notation:

- a sign, "+" or "-"
- one leading non-zero digit and a decimal point
- the remaining digits with trailing zeros dropped
- "e", the exponent sign and the exponent without leading zeros

So 1.0 becomes "+1.e+", -300 becomes "-3.e+2" and 0.00073 becomes
"+7.3e-4". Zero keeps its sign ("+0.e+" / "-0.e+") and the special values
are "+nan", "+inf" and "-inf". Every form ends with a line feed and,
unless disabled, a NUL byte.
"""
from __future__ import annotations

import logging
import math
import numbers
from decimal import ROUND_HALF_EVEN, Context, Decimal
from typing import Any, Optional

from .config import DEFAULT_DIGITS, clamp_digits
from .errors import MissingValueError

logger = logging.getLogger(__name__)

NAN_TOKEN = "+nan"
PLUS_INF_TOKEN = "+inf"
MINUS_INF_TOKEN = "-inf"
PLUS_ZERO_TOKEN = "+0.e+"
MINUS_ZERO_TOKEN = "-0.e+"

END_OF_LINE = "\n"
NUL = "\0"

# Decimal is not registered as numbers.Real
REAL_TYPES = (numbers.Real, Decimal)


def canonical_number(
    value: Any, digits: int = DEFAULT_DIGITS, null_byte: bool = True
) -> str:
    """Canonicalize a number to its terminated scientific-notation string.

    Args:
        value: int, float, Decimal, Fraction or a numpy scalar.
        digits: Significant digits to keep, clamped to [1, 14].
        null_byte: Append a NUL after the line feed.

    Raises:
        MissingValueError: value is None.
        TypeError: value is not a real number.
    """
    token = number_token(value, digits)
    return terminate(token, null_byte)


def number_token(value: Any, digits: int = DEFAULT_DIGITS) -> str:
    """Canonical token for a number, without the terminator."""
    if value is None:
        raise MissingValueError("Numeric value is missing", value)
    if isinstance(value, bool) or not isinstance(value, REAL_TYPES):
        raise TypeError(
            f"Expected a real number, got {type(value).__name__}: {value!r}"
        )
    digits = clamp_digits(digits)

    special = _special_token(value)
    if special is not None:
        return special

    decimal_value = _to_decimal(value)
    if decimal_value.is_zero():
        return MINUS_ZERO_TOKEN if decimal_value.is_signed() else PLUS_ZERO_TOKEN

    rounded = Context(prec=digits, rounding=ROUND_HALF_EVEN).plus(decimal_value)
    return _format_scientific(rounded)


def terminate(token: str, null_byte: bool) -> str:
    """Append the end-of-line and the optional NUL terminator."""
    if null_byte:
        return token + END_OF_LINE + NUL
    return token + END_OF_LINE


def _special_token(value: Any) -> Optional[str]:
    """Token for NaN and infinities, None for finite values."""
    if isinstance(value, Decimal):
        if value.is_nan():
            logger.debug("nan encountered")
            return NAN_TOKEN
        if value.is_infinite():
            logger.debug("infinite value encountered")
            return MINUS_INF_TOKEN if value.is_signed() else PLUS_INF_TOKEN
        return None
    if isinstance(value, numbers.Integral):
        return None
    as_float = float(value)
    if math.isnan(as_float):
        logger.debug("nan encountered")
        return NAN_TOKEN
    if math.isinf(as_float):
        logger.debug("infinite value encountered")
        return PLUS_INF_TOKEN if as_float > 0 else MINUS_INF_TOKEN
    return None


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, numbers.Integral):
        return Decimal(int(value))
    as_float = float(value)
    if as_float == 0.0:
        # The sign bit decides, -0.0 == 0.0 compares equal
        return Decimal("-0") if math.copysign(1.0, as_float) < 0 else Decimal("0")
    # repr is the shortest string that round-trips to the same double
    return Decimal(repr(as_float))


def _format_scientific(rounded: Decimal) -> str:
    sign = "-" if rounded.is_signed() else "+"
    coefficient = rounded.as_tuple().digits
    exponent = rounded.adjusted()

    leading = str(coefficient[0])
    mantissa = "".join(str(d) for d in coefficient[1:]).rstrip("0")
    exponent_sign = "-" if exponent < 0 else "+"
    exponent_digits = str(abs(exponent)) if exponent else ""

    return f"{sign}{leading}.{mantissa}e{exponent_sign}{exponent_digits}"
