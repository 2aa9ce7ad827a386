"""Byte-order aware base64 encoding of digests.

Two entry points with deliberately different contracts:

- to_base64 reorders relative to the byte order the caller says the digest
  is in, then encodes to an ASCII string.
- to_base64_text always reorders relative to the host's native byte order,
  then decodes the base64 bytes with a caller-chosen text encoding.
"""
from __future__ import annotations

import base64
import codecs
import logging
import sys

logger = logging.getLogger(__name__)

BIG_ENDIAN = "big"
LITTLE_ENDIAN = "little"
DEFAULT_TEXT_ENCODING = "utf-8"


def change_byte_order(digest: bytes, native: str, target: str = BIG_ENDIAN) -> bytes:
    """Reverse the digest bytes when native and target orders differ."""
    _check_order(native)
    _check_order(target)
    if native != target:
        return bytes(reversed(digest))
    return bytes(digest)


def to_base64(
    digest: bytes, byte_order: str = BIG_ENDIAN, native_order: str = sys.byteorder
) -> str:
    """Base64 of the digest after forcing it into byte_order.

    Args:
        digest: Raw digest bytes.
        byte_order: Order the encoded bytes must be in.
        native_order: Order the digest bytes are currently in.
    """
    ordered = change_byte_order(digest, native_order, byte_order)
    return base64.b64encode(ordered).decode("ascii")


def to_base64_text(
    digest: bytes, encoding: str = DEFAULT_TEXT_ENCODING, byte_order: str = BIG_ENDIAN
) -> str:
    """Base64 of the digest, reordered from the host's order, as text.

    An unavailable encoding is logged and the default encoding is used.
    """
    ordered = change_byte_order(digest, sys.byteorder, byte_order)
    encoded = base64.b64encode(ordered)
    try:
        codec = codecs.lookup(encoding).name
    except LookupError:
        logger.warning(
            "encoding %r not supported, using %s", encoding, DEFAULT_TEXT_ENCODING
        )
        codec = DEFAULT_TEXT_ENCODING
    return encoded.decode(codec, errors="replace")


def _check_order(order: str) -> None:
    if order not in (BIG_ENDIAN, LITTLE_ENDIAN):
        raise ValueError(f"Byte order must be 'big' or 'little', got {order!r}")
