"""Fingerprint strings and per-table fingerprint metadata."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..version import UNF_PREFIX, UNF_VERSION
from .config import UnfConfig
from .errors import FormatMismatchError

logger = logging.getLogger(__name__)

SEPARATOR = ":"
EXTENSION_SEPARATOR = ","


def is_fingerprint(value: Any) -> bool:
    """
    True when value looks like an already computed fingerprint.

    The shape is "UNF:" followed by at least two more ":"-separated
    segments. None and non-strings are tolerated and answer False.
    """
    if not isinstance(value, str):
        return False
    return value.startswith(UNF_PREFIX + SEPARATOR) and len(value.split(SEPARATOR)) >= 3


def format_fingerprint(
    b64: str, extensions: Tuple[str, ...] = (), version: str = UNF_VERSION
) -> str:
    """Build "UNF:<version>:[<ext,...>:]<base64>"."""
    parts = [UNF_PREFIX, version]
    if extensions:
        parts.append(EXTENSION_SEPARATOR.join(extensions))
    parts.append(b64)
    return SEPARATOR.join(parts)


@dataclass(frozen=True)
class Fingerprint:
    """
    A parsed fingerprint string.

    Attributes:
        version: Algorithm version, "6"
        extensions: Extension tags in the order they appear
        b64: The base64 segment
        digest: The digest bytes decoded from ``b64``
        well_formed: False when the string did not have the tagged shape
    """

    version: str
    extensions: Tuple[str, ...]
    b64: str
    digest: bytes
    well_formed: bool = True

    def __str__(self) -> str:
        return format_fingerprint(self.b64, self.extensions, self.version)

    @property
    def header(self) -> Tuple[str, Tuple[str, ...]]:
        """Version and extensions; fingerprints compare only when these match."""
        return (self.version, self.extensions)

    @classmethod
    def parse(cls, text: str, strict: bool = False) -> "Fingerprint":
        """
        Parse a fingerprint string.

        Malformed strings are logged, not rejected: the last segment is
        decoded as leniently as possible and ``well_formed`` is False.

        Raises:
            FormatMismatchError: If strict and the string is malformed
        """
        well_formed = is_fingerprint(text)
        if strict and not well_formed:
            raise FormatMismatchError(f"Not a fingerprint: {text!r}", text)
        segments = text.split(SEPARATOR)
        if well_formed:
            version = segments[1]
            extensions = tuple(
                tag
                for tag in SEPARATOR.join(segments[2:-1]).split(EXTENSION_SEPARATOR)
                if tag
            )
        else:
            logger.warning("malformed fingerprint %r", text)
            version = UNF_VERSION
            extensions = ()

        b64 = segments[-1]
        digest = _decode_b64(b64)
        if digest is None:
            logger.warning("undecodable base64 in fingerprint %r", text)
            well_formed = False
            if strict:
                raise FormatMismatchError(f"Undecodable base64 in {text!r}", text)
            digest = b""
        return cls(
            version=version,
            extensions=extensions,
            b64=b64,
            digest=digest,
            well_formed=well_formed,
        )


def _decode_b64(text: str) -> Optional[bytes]:
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.b64decode(padded, validate=False)
    except (binascii.Error, ValueError):
        return None


@dataclass(frozen=True)
class FingerprintSet:
    """
    Result of fingerprinting a table.

    Attributes:
        fingerprint: Table-level fingerprint
        column_fingerprints: One fingerprint per column, in column order
        digests: Raw truncated digest of each column
        config: Configuration the set was computed with
    """

    fingerprint: str
    column_fingerprints: Tuple[str, ...]
    digests: Tuple[bytes, ...]
    config: UnfConfig

    @property
    def hexvalues(self) -> Tuple[str, ...]:
        """Hexadecimal view of each column digest."""
        return tuple(d.hex() for d in self.digests)

    @property
    def b64(self) -> Tuple[str, ...]:
        """Base64 view of each column digest (the fingerprints' last segment)."""
        return tuple(fp.rsplit(SEPARATOR, 1)[-1] for fp in self.column_fingerprints)

    @property
    def extensions(self) -> Tuple[str, ...]:
        return self.config.extensions

    def __len__(self) -> int:
        return len(self.column_fingerprints)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fingerprint": self.fingerprint,
            "columns": list(self.column_fingerprints),
            "hex": list(self.hexvalues),
            "b64": list(self.b64),
            "extensions": list(self.extensions),
            "digits": self.config.digits,
            "characters": self.config.characters,
            "hash_size": self.config.hash_size,
        }
