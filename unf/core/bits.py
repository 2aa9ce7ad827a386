"""Normalized bit patterns.

A bit pattern is stored without its leading zero bits and left-padded with
zeros to a whole number of bytes. Its canonical form is the base64 encoding
of those big-endian bytes.
"""
from __future__ import annotations

import base64
import logging
from typing import Optional

logger = logging.getLogger(__name__)

_BIT_CHARS = frozenset("01")


class BitString:
    """A normalized bit pattern.

    A string holding anything other than '0' and '1', or nothing at all, is
    rejected: a warning is logged and ``bits`` stays None. Such a value
    fingerprints as missing.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: Optional[str] = None):
        self._bits: Optional[str] = None
        if bits is not None:
            self.set_bits(bits)

    @classmethod
    def from_int(cls, value: int) -> "BitString":
        """Build from the binary representation of a non-negative integer."""
        if value < 0:
            raise ValueError(f"Bit patterns hold non-negative integers, got {value}")
        return cls(format(value, "b"))

    @property
    def bits(self) -> Optional[str]:
        return self._bits

    def set_bits(self, bits: str) -> None:
        if not validate(bits):
            logger.warning("rejected bit string %r: only '0' and '1' allowed", bits)
            return
        self._bits = normalize(bits)

    @property
    def is_set(self) -> bool:
        return self._bits is not None

    def to_bytes(self) -> bytes:
        """Big-endian bytes of the normalized pattern."""
        if self._bits is None:
            raise ValueError("Bit string is not set")
        return int(self._bits, 2).to_bytes(len(self._bits) // 8, "big")

    def to_base64(self) -> str:
        return base64.b64encode(self.to_bytes()).decode("ascii")

    def __len__(self) -> int:
        return len(self._bits) if self._bits is not None else 0

    def __str__(self) -> str:
        return self._bits or ""

    def __repr__(self) -> str:
        return f"BitString({self._bits!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitString):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)


def validate(bits: str) -> bool:
    return isinstance(bits, str) and bool(bits) and set(bits) <= _BIT_CHARS


def normalize(bits: str) -> str:
    """Drop leading zero bits, then left-pad to a multiple of 8.

    A pattern that is already byte aligned gets no padding byte. An all-zero
    pattern keeps a single zero bit, so it normalizes to one zero byte.
    """
    first_one = bits.find("1")
    trimmed = bits[first_one:] if first_one >= 0 else "0"
    padding = -len(trimmed) % 8
    return "0" * padding + trimmed
