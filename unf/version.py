"""
UNF version constants.

This module defines the library version and the version of the fingerprint
algorithm. The algorithm version is embedded in every fingerprint string and
two fingerprints are only comparable when it matches.
"""

# Library version (matches pyproject.toml)
LIBRARY_VERSION = "0.1.0"

# Fingerprint algorithm version written after the prefix: "UNF:6:..."
UNF_VERSION = "6"

# Leading tag of every fingerprint string
UNF_PREFIX = "UNF"
