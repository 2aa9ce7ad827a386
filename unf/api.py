"""
Public entry points, one per input shape.

Each function normalizes its input into tagged values and hands them to
the fingerprint engine:

    unf_numbers([1.0, 2.0, 3.0])                  # 'UNF:6:AvELPR5QTaBbnq6S22Msow=='
    unf_strings(["abc"])                          # 'UNF:6:a7zlHUR2/C1hC4zgPeuDEA=='
    unf_dates(["2021-01-05T10:00:00Z"], "yyyy-MM-dd'T'HH:mm:ss'Z'")
    unf_table([[1, "a"], [2, "b"]])
    add_unfs([unf_numbers(x), unf_strings(y)])

Integer arrays use the largest value of their dtype as the "missing"
sentinel and fingerprint it as NaN. Text-capable entry points whose first
element is already a fingerprint string combine the fingerprints instead of
hashing the strings.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .core.bits import BitString
from .core.canon import to_value
from .core.config import UnfConfig
from .core.digest import UnfDigest
from .core.metadata import FingerprintSet, is_fingerprint
from .core.numeric import REAL_TYPES
from .core.types import BooleanValue, DateTimeValue, NumberValue, TextValue, Value


def _engine(config: Optional[UnfConfig]) -> UnfDigest:
    return UnfDigest(config)


def _first(values: Sequence[Any]) -> Any:
    return values[0] if len(values) else None


def _plain(obj: Any) -> Any:
    """Unwrap numpy scalars to the matching Python objects."""
    if isinstance(obj, np.generic):
        return obj.item()
    return obj


def _is_missing(obj: Any) -> bool:
    return obj is None or obj is pd.NA or obj is pd.NaT


# =============================================================================
# Vectors
# =============================================================================


def numeric_values(values: Any) -> List[Optional[Value]]:
    """
    Tag a 1-D numeric array as numbers.

    Integer dtypes map their maximum value to NaN; floating dtypes are
    widened to float64; object arrays keep each element as given, with None
    as a missing value.

    Raises:
        ValueError: If the array is not one-dimensional
        TypeError: If an element is not a number
    """
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise ValueError(f"Expected a 1-D array, got {arr.ndim} dimensions")
    kind = arr.dtype.kind
    if kind == "b":
        return [BooleanValue(bool(v)) for v in arr]
    if kind in "iu":
        sentinel = np.iinfo(arr.dtype).max
        floats = arr.astype(np.float64)
        floats[arr == sentinel] = np.nan
        return [NumberValue(float(v)) for v in floats]
    if kind == "f":
        return [NumberValue(float(v)) for v in arr.astype(np.float64)]
    if kind == "O":
        tagged: List[Optional[Value]] = []
        for obj in arr:
            obj = _plain(obj)
            if _is_missing(obj):
                tagged.append(None)
            elif isinstance(obj, bool) or not isinstance(obj, REAL_TYPES):
                raise TypeError(
                    f"Expected numbers, got {type(obj).__name__}: {obj!r}"
                )
            else:
                tagged.append(NumberValue(obj))
        return tagged
    raise TypeError(f"Array of dtype {arr.dtype} is not numeric")


def unf_numbers(values: Any, config: Optional[UnfConfig] = None) -> str:
    """Fingerprint a 1-D array or sequence of numbers."""
    return _engine(config).vector(numeric_values(values))


def unf_booleans(values: Sequence[Any], config: Optional[UnfConfig] = None) -> str:
    """Fingerprint booleans; True and False hash as the numbers 1 and 0."""
    tagged = [
        None if _is_missing(v) else BooleanValue(bool(_plain(v))) for v in values
    ]
    return _engine(config).vector(tagged)


def unf_strings(values: Sequence[Any], config: Optional[UnfConfig] = None) -> str:
    """Fingerprint character data, or combine it if it holds fingerprints."""
    values = list(values)
    if is_fingerprint(_first(values)):
        return add_unfs(values, config)
    tagged = [None if _is_missing(v) else TextValue(v) for v in values]
    return _engine(config).vector(tagged)


def unf_dates(
    values: Sequence[Any],
    patterns: Union[str, Sequence[Optional[str]]],
    end_values: Optional[Sequence[Any]] = None,
    config: Optional[UnfConfig] = None,
) -> str:
    """
    Fingerprint date/time values written in the given patterns.

    Args:
        values: Date/time text (or date/time objects)
        patterns: One pattern per value, or one pattern for all; a None
                  pattern leaves that value as plain text
        end_values: Optional range ends, one per value (None for no range)
        config: Canonicalization parameters

    Raises:
        ValueError: If patterns or end_values do not match values in length
    """
    values = list(values)
    if is_fingerprint(_first(values)):
        return add_unfs(values, config)
    if isinstance(patterns, str):
        patterns = [patterns] * len(values)
    patterns = list(patterns)
    ends = list(end_values) if end_values is not None else [None] * len(values)
    if len(patterns) != len(values) or len(ends) != len(values):
        raise ValueError(
            f"Got {len(values)} values, {len(patterns)} patterns "
            f"and {len(ends)} end values"
        )

    tagged: List[Optional[Value]] = []
    for value, pattern, end in zip(values, patterns, ends):
        if _is_missing(value):
            tagged.append(None)
        elif pattern is None and not isinstance(value, (datetime, date, time)):
            tagged.append(TextValue(value))
        else:
            tagged.append(DateTimeValue(value, pattern, None if _is_missing(end) else end))
    return _engine(config).vector(tagged)


def unf_bits(values: Sequence[Any], config: Optional[UnfConfig] = None) -> str:
    """Fingerprint bit patterns given as BitString, '0'/'1' text or integers."""
    tagged: List[Optional[Value]] = []
    for v in values:
        v = _plain(v)
        if _is_missing(v):
            tagged.append(None)
        elif isinstance(v, BitString):
            tagged.append(v)
        elif isinstance(v, int) and not isinstance(v, bool):
            tagged.append(BitString.from_int(v))
        else:
            tagged.append(BitString(v))
    return _engine(config).vector(tagged)


def unf_list(values: Sequence[Any], config: Optional[UnfConfig] = None) -> str:
    """Fingerprint a generic list, each element tagged by its own kind."""
    values = list(values)
    if is_fingerprint(_first(values)):
        return add_unfs(values, config)
    tagged = [None if _is_missing(v) else to_value(_plain(v)) for v in values]
    return _engine(config).vector(tagged)


def unf_value(value: Any, config: Optional[UnfConfig] = None) -> str:
    """Fingerprint a single value."""
    tagged = None if _is_missing(value) else to_value(_plain(value))
    return _engine(config).element(tagged)


def add_unfs(fingerprints: Sequence[str], config: Optional[UnfConfig] = None) -> str:
    """Combine already computed fingerprints, in order, into one."""
    return _engine(config).combine(list(fingerprints))


# =============================================================================
# Tables
# =============================================================================


def unf_table_set(rows: Any, config: Optional[UnfConfig] = None) -> FingerprintSet:
    """
    Fingerprint a 2-D table column by column.

    A numeric ndarray is split into columns with the same dtype handling as
    unf_numbers. Any other input is a row-major sequence of rows whose cells
    are tagged by their own kind.
    """
    engine = _engine(config)
    if isinstance(rows, np.ndarray) and rows.dtype.kind in "biuf":
        if rows.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got {rows.ndim} dimensions")
        columns = rows.T if engine.config.transpose else rows
        return engine.columns_set(numeric_values(col) for col in columns)
    tagged = [
        [None if _is_missing(cell) else to_value(_plain(cell)) for cell in row]
        for row in rows
    ]
    return engine.table_set(tagged)


def unf_table(rows: Any, config: Optional[UnfConfig] = None) -> str:
    """Fingerprint a 2-D table."""
    return unf_table_set(rows, config).fingerprint


def dataframe_column_values(column: pd.Series) -> List[Optional[Value]]:
    """Tag the cells of one DataFrame column according to its dtype."""
    dtype = column.dtype
    if isinstance(dtype, np.dtype) and dtype.kind in "biuf":
        # NaN in a float column is a value ("+nan"), not a missing cell
        return numeric_values(column.to_numpy())

    numeric = pd.api.types.is_numeric_dtype(dtype)
    tagged: List[Optional[Value]] = []
    for cell in column.astype(object):
        cell = _plain(cell)
        if _is_missing(cell):
            tagged.append(None)
        elif not numeric and isinstance(cell, float) and np.isnan(cell):
            # pandas writes NaN for absent text
            tagged.append(None)
        else:
            tagged.append(to_value(cell))
    return tagged


def unf_dataframe_set(df: pd.DataFrame, config: Optional[UnfConfig] = None) -> FingerprintSet:
    """
    Fingerprint a DataFrame, one column per column in frame order.

    Numeric columns follow unf_numbers, boolean columns unf_booleans,
    datetime columns are written as canonical date/times and everything
    else is tagged cell by cell. Missing cells (None, NA, NaT) are missing
    values; NaN in a float column is the number NaN.
    """
    engine = _engine(config)
    return engine.columns_set(dataframe_column_values(df[name]) for name in df.columns)


def unf_dataframe(df: pd.DataFrame, config: Optional[UnfConfig] = None) -> str:
    """Fingerprint a DataFrame."""
    return unf_dataframe_set(df, config).fingerprint


# =============================================================================
# Dispatcher
# =============================================================================


def calculate_unf(data: Any, config: Optional[UnfConfig] = None) -> str:
    """
    Fingerprint data of any supported shape.

    - DataFrame -> unf_dataframe
    - 2-D ndarray, or a sequence of lists/tuples -> unf_table
    - 1-D numeric or boolean ndarray -> unf_numbers
    - Series -> its column as in unf_dataframe
    - any other sequence -> unf_list
    """
    if isinstance(data, pd.DataFrame):
        return unf_dataframe(data, config)
    if isinstance(data, pd.Series):
        return _engine(config).vector(dataframe_column_values(data))
    if isinstance(data, np.ndarray):
        if data.ndim == 2:
            return unf_table(data, config)
        if data.ndim == 1 and data.dtype.kind in "biuf":
            return unf_numbers(data, config)
        return unf_list(data.tolist(), config)
    if isinstance(data, (str, bytes)):
        raise TypeError("Expected a sequence of values, got a single string")
    data = list(data)
    if data and all(isinstance(row, (list, tuple)) for row in data):
        return unf_table(data, config)
    return unf_list(data, config)
