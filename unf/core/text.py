"""Canonical form of character data.

Text is cut to a character budget and terminated like every other value.
Truncation counts characters (code points), not encoded bytes.
"""
from __future__ import annotations

import codecs
import logging
from typing import Optional, Tuple, Union

from .config import DEFAULT_CHARACTERS, DEFAULT_DIGITS
from .errors import ErrorKind, MissingValueError, UnsupportedEncodingError
from .numeric import canonical_number, terminate

logger = logging.getLogger(__name__)

CANONICAL_ENCODING = "utf-8"

# Characters treated as blank, same set as a classic trim(): U+0000..U+0020
_BLANK = "".join(chr(c) for c in range(0x21))


def canonical_text(
    text: str,
    characters: int = DEFAULT_CHARACTERS,
    null_byte: bool = True,
    convert_to_number: bool = False,
    digits: int = DEFAULT_DIGITS,
) -> str:
    """Canonicalize text to its truncated, terminated form.

    Args:
        text: Character data.
        characters: Number of characters to keep.
        null_byte: Append a NUL after the line feed.
        convert_to_number: Read digit-only text as an integer.
        digits: Digit budget used when the text is read as a number.

    Raises:
        MissingValueError: text is None.
    """
    if text is None:
        raise MissingValueError("Text value is missing", text)
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")

    if is_blank(text):
        # All-blank text longer than the budget keeps one character less
        kept = text[: characters - 1] if len(text) > characters else ""
        return terminate(kept, null_byte)

    if convert_to_number and is_numeric_text(text):
        return canonical_number(int(text), digits, null_byte)

    return terminate(text[:characters], null_byte)


def is_blank(text: str) -> bool:
    """True for empty text or text made only of blank characters."""
    return not text.strip(_BLANK)


def is_numeric_text(text: str) -> bool:
    """True when every character is a decimal digit.

    Signs and decimal points are not accepted. Text that mixes digits with
    other characters is logged and stays textual.
    """
    digit_count = sum(1 for ch in text if ch.isdecimal())
    if digit_count == len(text):
        return True
    if digit_count:
        logger.warning("mixing digits and chars treated as string: %r", text)
    return False


def decode_text(
    data: Union[bytes, bytearray],
    encoding: Optional[str] = None,
    strict: bool = False,
) -> Tuple[str, Optional[ErrorKind]]:
    """Decode raw bytes into text.

    An unknown encoding is reported as UNSUPPORTED_ENCODING and the bytes are
    decoded with the canonical encoding instead.

    Returns:
        (text, error kind or None)

    Raises:
        UnsupportedEncodingError: If strict and the encoding is unknown
    """
    error = None
    codec = CANONICAL_ENCODING
    if encoding:
        try:
            codec = codecs.lookup(encoding).name
        except LookupError as exc:
            if strict:
                raise UnsupportedEncodingError(
                    f"Encoding {encoding!r} is not supported", encoding
                ) from exc
            logger.warning(
                "encoding %r not supported, using %s", encoding, CANONICAL_ENCODING
            )
            error = ErrorKind.UNSUPPORTED_ENCODING
    return bytes(data).decode(codec, errors="replace"), error
