"""
Fingerprint engine.

Hashes canonical forms, truncates and encodes the digests, and composes
child digests into parent fingerprints:

    element(v)   = encode(hash(canon(v)))
    vector(vs)   = encode(hash(canon(v1) + canon(v2) + ...))
    table(rows)  = encode(hash(digest(col1) + digest(col2) + ...))
    combine(fps) = encode(hash(decode(fp1) + decode(fp2) + ...))

Order is preserved everywhere: nothing is sorted or deduplicated, so
permuting rows changes a column fingerprint and permuting columns changes
the table fingerprint. Combining already computed column fingerprints gives
the same result as fingerprinting the table, which lets columns of
different kinds be fingerprinted separately and joined afterwards.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Iterable, List, Optional, Sequence

from ..version import UNF_VERSION
from .byteorder import BIG_ENDIAN, change_byte_order, to_base64
from .canon import canonicalize
from .config import UnfConfig
from .errors import IncompatibleFingerprintError
from .metadata import Fingerprint, FingerprintSet, format_fingerprint
from .types import Value

logger = logging.getLogger(__name__)


class UnfDigest:
    """
    Computes fingerprints under one immutable configuration.

    The engine holds no state beyond its configuration, so one instance can
    be shared freely.

    Example:
        engine = UnfDigest(UnfConfig(digits=9))
        engine.vector([NumberValue(1.0), NumberValue(2.0)])
        # 'UNF:6:N9:...'
    """

    def __init__(self, config: Optional[UnfConfig] = None):
        self.config = config or UnfConfig()

    # -------------------------------------------------------------------------
    # Digests
    # -------------------------------------------------------------------------

    def hash(self, data: bytes) -> bytes:
        """SHA-256 of data truncated to the configured hash size."""
        return hashlib.sha256(data).digest()[: self.config.hash_size // 8]

    def canonical_bytes(self, values: Iterable[Optional[Value]]) -> bytes:
        """Concatenated canonical forms, in input order."""
        return b"".join(canonicalize(v, self.config).data for v in values)

    def vector_digest(self, values: Iterable[Optional[Value]]) -> bytes:
        return self.hash(self.canonical_bytes(values))

    def combine_digests(self, digests: Iterable[bytes]) -> bytes:
        """Hash of child digests concatenated in order."""
        return self.hash(b"".join(digests))

    # -------------------------------------------------------------------------
    # Fingerprints
    # -------------------------------------------------------------------------

    def encode(self, digest: bytes) -> str:
        """Format a digest as a tagged fingerprint string."""
        # hashlib digests are big-endian byte strings
        b64 = to_base64(digest, byte_order=self.config.byte_order, native_order=BIG_ENDIAN)
        return format_fingerprint(b64, self.config.extensions)

    def element(self, value: Optional[Value]) -> str:
        """Fingerprint of a single value."""
        return self.encode(self.hash(canonicalize(value, self.config).data))

    def vector(self, values: Iterable[Optional[Value]]) -> str:
        """Fingerprint of an ordered sequence of values."""
        return self.encode(self.vector_digest(values))

    def table(self, rows: Sequence[Sequence[Optional[Value]]]) -> str:
        """Fingerprint of a 2-D table, see table_set."""
        return self.table_set(rows).fingerprint

    def table_set(self, rows: Sequence[Sequence[Optional[Value]]]) -> FingerprintSet:
        """
        Fingerprint a 2-D table column by column.

        Rows are transposed into columns first unless the configuration says
        the input is already column-major.

        Raises:
            ValueError: If rows have different lengths
        """
        columns = transpose(rows) if self.config.transpose else [list(c) for c in rows]
        return self.columns_set(columns)

    def columns_set(self, columns: Iterable[Iterable[Optional[Value]]]) -> FingerprintSet:
        """Fingerprint already column-major data."""
        digests = [self.vector_digest(column) for column in columns]
        return self.digests_set(digests)

    def digests_set(self, digests: Sequence[bytes]) -> FingerprintSet:
        """Build the fingerprint set for precomputed column digests."""
        return FingerprintSet(
            fingerprint=self.encode(self.combine_digests(digests)),
            column_fingerprints=tuple(self.encode(d) for d in digests),
            digests=tuple(digests),
            config=self.config,
        )

    def combine(self, fingerprints: Sequence[str]) -> str:
        """
        Combine already computed fingerprints into one.

        Each fingerprint is decoded back to its digest and the digests are
        hashed together in order. The result carries the inputs' extension
        tags, and the hash size they name.

        Raises:
            IncompatibleFingerprintError: If inputs differ in version or extensions
        """
        if not fingerprints:
            return self.encode(self.combine_digests([]))

        parsed = [Fingerprint.parse(fp) for fp in fingerprints]
        header = parsed[0].header
        for fp in parsed[1:]:
            if fp.header != header:
                raise IncompatibleFingerprintError(
                    f"Cannot combine {fp} with {parsed[0]}: "
                    "version and extensions must match",
                    str(fp),
                )
        version, extensions = header
        if version != UNF_VERSION:
            logger.warning(
                "combining version %s fingerprints, result is version %s",
                version,
                UNF_VERSION,
            )

        engine = self
        if parsed[0].well_formed:
            engine = UnfDigest(self.config.with_extensions(extensions))
        digests = [
            change_byte_order(fp.digest, engine.config.byte_order, BIG_ENDIAN)
            for fp in parsed
        ]
        return engine.encode(engine.combine_digests(digests))


def transpose(rows: Sequence[Sequence[Optional[Value]]]) -> List[List[Optional[Value]]]:
    """
    Turn row-major data into column-major.

    Raises:
        ValueError: If rows have different lengths
    """
    rows = [list(r) for r in rows]
    if not rows:
        return []
    width = len(rows[0])
    for idx, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(
                f"Row {idx} has {len(row)} cells, expected {width}"
            )
    return [[row[c] for row in rows] for c in range(width)]
