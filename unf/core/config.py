"""
Immutable configuration for fingerprint computation.

Every public call takes an UnfConfig. There are no module-level toggles, so
computations running side by side with different settings cannot see each
other's parameters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 7
DEFAULT_CHARACTERS = 128
DEFAULT_HASH_SIZE = 128

# Bounds for the numeric digit budget
MIN_DIGITS = 1
MAX_DIGITS = 14

MAX_HASH_SIZE = 256  # SHA-256 output

BYTE_ORDERS = ("big", "little")


@dataclass(frozen=True)
class UnfConfig:
    """
    Parameters of one fingerprint computation.

    Attributes:
        digits: Significant digits kept for numbers (clamped to [1, 14]).
        characters: Characters kept for text.
        hash_size: Digest length in bits (multiple of 8, at most 256).
        null_byte: If True, append a NUL byte after each canonical form.
        byte_order: Byte order the digest is forced into before base64.
        transpose: If True, tables are row-major and get transposed.
        convert_text_to_number: If True, digit-only text is read as a number.
    """

    digits: int = DEFAULT_DIGITS
    characters: int = DEFAULT_CHARACTERS
    hash_size: int = DEFAULT_HASH_SIZE
    null_byte: bool = True
    byte_order: str = "big"
    transpose: bool = True
    convert_text_to_number: bool = False

    def __post_init__(self):
        digits = clamp_digits(self.digits)
        if digits != self.digits:
            object.__setattr__(self, "digits", digits)
        if self.characters < 1:
            raise ConfigurationError(
                f"characters must be at least 1, got {self.characters}"
            )
        if (
            self.hash_size <= 0
            or self.hash_size > MAX_HASH_SIZE
            or self.hash_size % 8
        ):
            raise ConfigurationError(
                f"hash_size must be a multiple of 8 in [8, {MAX_HASH_SIZE}], "
                f"got {self.hash_size}"
            )
        if self.byte_order not in BYTE_ORDERS:
            raise ConfigurationError(
                f"byte_order must be one of {BYTE_ORDERS}, got {self.byte_order!r}"
            )

    @classmethod
    def default(cls) -> "UnfConfig":
        """Create the default configuration."""
        return cls()

    @property
    def extensions(self) -> Tuple[str, ...]:
        """Extension tags for every parameter that differs from its default."""
        tags = []
        if self.characters != DEFAULT_CHARACTERS:
            tags.append(f"X{self.characters}")
        if self.digits != DEFAULT_DIGITS:
            tags.append(f"N{self.digits}")
        if self.hash_size != DEFAULT_HASH_SIZE:
            tags.append(f"H{self.hash_size}")
        return tuple(tags)

    @classmethod
    def from_extensions(cls, tokens: Iterable[str]) -> "UnfConfig":
        """Rebuild a configuration from extension tags such as ("N9", "H256")."""
        return cls().with_extensions(tokens)

    def with_extensions(self, tokens: Iterable[str]) -> "UnfConfig":
        """
        Return a copy with the parameters named by extension tags.

        Parameters not named keep their default value, since a fingerprint
        without a tag was produced with that default.

        Raises:
            ConfigurationError: If a tag is unknown or its value is not a number
        """
        fields = {
            "characters": DEFAULT_CHARACTERS,
            "digits": DEFAULT_DIGITS,
            "hash_size": DEFAULT_HASH_SIZE,
        }
        names = {"X": "characters", "N": "digits", "H": "hash_size"}
        for token in tokens:
            token = token.strip()
            if not token:
                continue
            name = names.get(token[0])
            if name is None or not token[1:].isdigit():
                raise ConfigurationError(f"Unknown extension tag: {token!r}")
            fields[name] = int(token[1:])
        return replace(self, **fields)


def clamp_digits(digits: int) -> int:
    """Clamp a digit budget to the supported range."""
    if digits < MIN_DIGITS:
        logger.warning("digit budget %d below %d, using %d", digits, MIN_DIGITS, MIN_DIGITS)
        return MIN_DIGITS
    if digits > MAX_DIGITS:
        logger.warning("digit budget %d above %d, using %d", digits, MAX_DIGITS, MAX_DIGITS)
        return MAX_DIGITS
    return digits
