"""
Tests for the public entry points.

These tests verify:
1. numpy dtypes map onto the right value kinds
2. Integer sentinels become NaN
3. DataFrame columns are dispatched by dtype
4. Fingerprint strings are combined instead of hashed
"""

import unittest
from datetime import datetime
from decimal import Decimal

import numpy as np
import pandas as pd

from unf import (
    BitString,
    BooleanValue,
    NumberValue,
    TextValue,
    UnfConfig,
    UnfDigest,
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

ONE_TWO_THREE = "UNF:6:AvELPR5QTaBbnq6S22Msow=="
ONE_NAN_THREE = "UNF:6:FPpvtzciT8LbJpRNigclig=="
ONE_MISSING_THREE = "UNF:6:Gtlx8HDiR52yvdf3FdsnjQ=="
TRUE_FALSE = "UNF:6:MIqW0kwKHV+Y7F1DzENBTQ=="
ABC = "UNF:6:a7zlHUR2/C1hC4zgPeuDEA=="
ONE = "UNF:6:tv3XYCv524AfmlFyVOhuZg=="
TABLE = "UNF:6:5BzHI+rsR5t0B5cNojNOxQ=="


class TestUnfNumbers(unittest.TestCase):
    def test_sequences_and_arrays(self):
        self.assertEqual(unf_numbers([1.0, 2.0, 3.0]), ONE_TWO_THREE)
        self.assertEqual(unf_numbers([1, 2, 3]), ONE_TWO_THREE)
        self.assertEqual(unf_numbers(np.array([1, 2, 3], dtype=np.int32)), ONE_TWO_THREE)
        self.assertEqual(unf_numbers(np.array([1, 2, 3], dtype=np.uint16)), ONE_TWO_THREE)
        self.assertEqual(unf_numbers(np.array([1, 2, 3], dtype=np.float32)), ONE_TWO_THREE)

    def test_integer_sentinel_is_nan(self):
        big = np.iinfo(np.int64).max
        self.assertEqual(unf_numbers(np.array([1, big, 3])), ONE_NAN_THREE)
        self.assertEqual(unf_numbers(np.array([1, 255, 3], dtype=np.uint8)), ONE_NAN_THREE)
        self.assertEqual(unf_numbers([1.0, float("nan"), 3.0]), ONE_NAN_THREE)

    def test_none_is_missing(self):
        self.assertEqual(unf_numbers([1.0, None, 3.0]), ONE_MISSING_THREE)

    def test_booleans_delegate(self):
        self.assertEqual(unf_numbers(np.array([True, False])), TRUE_FALSE)
        self.assertEqual(unf_booleans([True, False]), TRUE_FALSE)
        self.assertEqual(unf_booleans(np.array([True, False])), TRUE_FALSE)

    def test_config(self):
        self.assertEqual(
            unf_numbers([1, 2, 3], UnfConfig(digits=9)),
            "UNF:6:N9:AvELPR5QTaBbnq6S22Msow==",
        )

    def test_decimals(self):
        decimals = [Decimal("1"), Decimal("2.0"), Decimal("3.000")]
        self.assertEqual(unf_numbers(decimals), ONE_TWO_THREE)
        self.assertEqual(unf_numbers(np.array(decimals, dtype=object)), ONE_TWO_THREE)
        self.assertEqual(unf_list(decimals), ONE_TWO_THREE)
        self.assertEqual(unf_value(Decimal("1.00")), ONE)

    def test_rejects_non_numbers(self):
        with self.assertRaises(TypeError):
            unf_numbers(["a", "b"])
        with self.assertRaises(TypeError):
            unf_numbers(np.array([1, "a"], dtype=object))

    def test_rejects_two_dimensions(self):
        with self.assertRaises(ValueError):
            unf_numbers(np.zeros((2, 2)))


class TestTextEntryPoints(unittest.TestCase):
    def test_strings(self):
        self.assertEqual(unf_strings(["abc"]), ABC)
        self.assertEqual(
            unf_strings(["abc", None]),
            UnfDigest().vector([TextValue("abc"), None]),
        )

    def test_strings_sniff_fingerprints(self):
        self.assertEqual(unf_strings([ONE_TWO_THREE]), "UNF:6:xAeZgNaZNYwd+upTyd6+0w==")

    def test_dates(self):
        self.assertEqual(
            unf_dates(["2021-01-05T10:00:00Z"], "yyyy-MM-dd'T'HH:mm:ss'Z'"),
            "UNF:6:/I8xtDqJYXZJmx8gZdcykg==",
        )

    def test_dates_per_element_patterns(self):
        result = unf_dates(
            ["01/05/2021", "2021-01-06"], ["MM/dd/yyyy", "yyyy-MM-dd"]
        )
        self.assertEqual(result, unf_strings(["2021-01-05", "2021-01-06"]))

    def test_dates_none_pattern_is_text(self):
        self.assertEqual(unf_dates(["abc"], [None]), ABC)

    def test_dates_ranges(self):
        result = unf_dates(["2021-01-05"], "yyyy-MM-dd", end_values=["2021-02-01"])
        self.assertEqual(result, unf_strings(["2021-01-05/2021-02-01"]))

    def test_dates_missing(self):
        self.assertEqual(
            unf_dates([None], "yyyy-MM-dd"), UnfDigest().vector([None])
        )

    def test_dates_length_mismatch(self):
        with self.assertRaises(ValueError):
            unf_dates(["2021-01-05", "2021-01-06"], ["yyyy-MM-dd"])
        with self.assertRaises(ValueError):
            unf_dates(["2021-01-05"], "yyyy-MM-dd", end_values=[])

    def test_dates_sniff_fingerprints(self):
        self.assertEqual(
            unf_dates([ONE_TWO_THREE], "yyyy"), "UNF:6:xAeZgNaZNYwd+upTyd6+0w=="
        )


class TestOtherEntryPoints(unittest.TestCase):
    def test_bits(self):
        result = unf_bits(["101", 5, BitString("00000101")])
        self.assertEqual(result, "UNF:6:hrt+YMmzEZokKawcJ+HIzg==")

    def test_bits_invalid_is_missing(self):
        with self.assertLogs("unf.core.bits", level="WARNING"):
            result = unf_bits(["12"])
        self.assertEqual(result, UnfDigest().vector([None]))

    def test_list_dispatches_per_element(self):
        expected = UnfDigest().vector(
            [NumberValue(1), TextValue("abc"), BooleanValue(True), None]
        )
        self.assertEqual(unf_list([1, "abc", True, None]), expected)

    def test_list_numpy_scalars(self):
        self.assertEqual(unf_list([np.float64(1.0)]), ONE)
        self.assertEqual(unf_list([np.int64(1)]), ONE)

    def test_list_sniff_fingerprints(self):
        self.assertEqual(unf_list([ONE_TWO_THREE, "UNF:6:BT6LJzHn64qGKimvo6iCfA=="]), TABLE)

    def test_value(self):
        self.assertEqual(unf_value(1.0), ONE)
        self.assertEqual(unf_value(np.float64(1.0)), ONE)
        self.assertEqual(unf_value("abc"), ABC)

    def test_add_unfs(self):
        self.assertEqual(add_unfs([ONE_TWO_THREE]), "UNF:6:xAeZgNaZNYwd+upTyd6+0w==")


class TestTables(unittest.TestCase):
    def test_nested_lists(self):
        self.assertEqual(unf_table([[1, 4], [2, 5], [3, 6]]), TABLE)

    def test_ndarray(self):
        self.assertEqual(unf_table(np.array([[1, 4], [2, 5], [3, 6]])), TABLE)
        self.assertEqual(unf_table(np.array([[1.0, 4.0], [2.0, 5.0], [3.0, 6.0]])), TABLE)

    def test_ndarray_column_major(self):
        config = UnfConfig(transpose=False)
        self.assertEqual(unf_table(np.array([[1, 2, 3], [4, 5, 6]]), config), TABLE)

    def test_mixed_columns(self):
        expected = add_unfs([unf_numbers([1, 2]), unf_strings(["a", "b"])])
        self.assertEqual(unf_table([[1, "a"], [2, "b"]]), expected)

    def test_table_set(self):
        result = unf_table_set([[1, 4], [2, 5], [3, 6]])
        self.assertEqual(result.fingerprint, TABLE)
        self.assertEqual(result.column_fingerprints[0], ONE_TWO_THREE)


class TestDataFrame(unittest.TestCase):
    def test_numeric_frame(self):
        df = pd.DataFrame({"a": [1, 2, 3], "b": [4.0, 5.0, 6.0]})
        self.assertEqual(unf_dataframe(df), TABLE)

    def test_column_fingerprints_in_frame_order(self):
        df = pd.DataFrame({"b": [4, 5, 6], "a": [1, 2, 3]})
        result = unf_dataframe_set(df)
        self.assertEqual(result.column_fingerprints[1], ONE_TWO_THREE)
        self.assertNotEqual(result.fingerprint, TABLE)

    def test_float_nan_is_a_value(self):
        df = pd.DataFrame({"x": [1.0, np.nan, 3.0]})
        self.assertEqual(unf_dataframe_set(df).column_fingerprints[0], ONE_NAN_THREE)

    def test_nullable_integer_na_is_missing(self):
        df = pd.DataFrame({"x": pd.array([1, None, 3], dtype="Int64")})
        self.assertEqual(unf_dataframe_set(df).column_fingerprints[0], ONE_MISSING_THREE)

    def test_text_columns(self):
        df = pd.DataFrame({"s": ["abc", None], "t": ["abc", np.nan]})
        columns = unf_dataframe_set(df).column_fingerprints
        self.assertEqual(columns[0], unf_strings(["abc", None]))
        self.assertEqual(columns[1], columns[0])

    def test_boolean_column(self):
        df = pd.DataFrame({"b": [True, False]})
        self.assertEqual(unf_dataframe_set(df).column_fingerprints[0], TRUE_FALSE)

    def test_datetime_column(self):
        df = pd.DataFrame({"t": pd.to_datetime(["2021-01-05 10:00:00"])})
        column = unf_dataframe_set(df).column_fingerprints[0]
        self.assertEqual(column, "UNF:6:U3fofkwZXT48hd4KKPW+tg==")
        self.assertEqual(column, unf_list([datetime(2021, 1, 5, 10)]))

    def test_nat_is_missing(self):
        df = pd.DataFrame({"t": pd.to_datetime(["2021-01-05 10:00:00", None])})
        column = unf_dataframe_set(df).column_fingerprints[0]
        self.assertEqual(column, unf_list([datetime(2021, 1, 5, 10), None]))


class TestCalculateUnf(unittest.TestCase):
    def test_dispatch(self):
        self.assertEqual(calculate_unf([1.0, 2.0, 3.0]), ONE_TWO_THREE)
        self.assertEqual(calculate_unf(np.array([1.0, 2.0, 3.0])), ONE_TWO_THREE)
        self.assertEqual(calculate_unf(pd.Series([1.0, 2.0, 3.0])), ONE_TWO_THREE)
        self.assertEqual(calculate_unf(np.array(["abc"])), ABC)
        self.assertEqual(calculate_unf([[1, 4], [2, 5], [3, 6]]), TABLE)
        self.assertEqual(calculate_unf(np.array([[1, 4], [2, 5], [3, 6]])), TABLE)
        self.assertEqual(calculate_unf(pd.DataFrame({"a": [1, 2, 3], "b": [4, 5, 6]})), TABLE)

    def test_fingerprints_combined(self):
        self.assertEqual(calculate_unf([ONE_TWO_THREE]), "UNF:6:xAeZgNaZNYwd+upTyd6+0w==")

    def test_single_string_rejected(self):
        with self.assertRaises(TypeError):
            calculate_unf("abc")


if __name__ == "__main__":
    unittest.main()
