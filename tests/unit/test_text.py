"""Tests for text canonicalization and decoding."""

import unittest

from unf.core.errors import ErrorKind, MissingValueError, UnsupportedEncodingError
from unf.core.text import canonical_text, decode_text, is_blank, is_numeric_text


class TestCanonicalText(unittest.TestCase):
    def test_plain_text(self):
        self.assertEqual(canonical_text("abc"), "abc\n\0")

    def test_truncates_to_character_budget(self):
        self.assertEqual(canonical_text("abcdef", characters=3), "abc\n\0")

    def test_truncation_counts_code_points(self):
        self.assertEqual(canonical_text("héllo", characters=2), "hé\n\0")

    def test_blank_text(self):
        self.assertEqual(canonical_text(""), "\n\0")
        self.assertEqual(canonical_text("   "), "\n\0")
        self.assertEqual(canonical_text("\t \r"), "\n\0")

    def test_blank_text_longer_than_budget(self):
        self.assertEqual(canonical_text("    ", characters=2), " \n\0")

    def test_without_null_byte(self):
        self.assertEqual(canonical_text("abc", null_byte=False), "abc\n")

    def test_numeric_coercion(self):
        self.assertEqual(canonical_text("123"), "123\n\0")
        self.assertEqual(canonical_text("123", convert_to_number=True), "+1.23e+2\n\0")
        self.assertEqual(
            canonical_text("123456789", convert_to_number=True, digits=3),
            "+1.23e+8\n\0",
        )

    def test_mixed_digits_stay_text(self):
        with self.assertLogs("unf.core.text", level="WARNING"):
            self.assertEqual(canonical_text("12a", convert_to_number=True), "12a\n\0")

    def test_none_and_non_text(self):
        with self.assertRaises(MissingValueError):
            canonical_text(None)
        with self.assertRaises(TypeError):
            canonical_text(5)


class TestHelpers(unittest.TestCase):
    def test_is_blank(self):
        self.assertTrue(is_blank(""))
        self.assertTrue(is_blank(" \t\n\x00"))
        self.assertFalse(is_blank(" a "))

    def test_is_numeric_text(self):
        self.assertTrue(is_numeric_text("0042"))
        self.assertFalse(is_numeric_text("-1"))
        self.assertFalse(is_numeric_text("abc"))


class TestDecodeText(unittest.TestCase):
    def test_default_is_utf8(self):
        self.assertEqual(decode_text("café".encode("utf-8")), ("café", None))

    def test_declared_encoding(self):
        self.assertEqual(decode_text(b"caf\xe9", "latin-1"), ("café", None))

    def test_unknown_encoding_falls_back(self):
        with self.assertLogs("unf.core.text", level="WARNING"):
            text, error = decode_text(b"abc", "no-such-codec")
        self.assertEqual(text, "abc")
        self.assertEqual(error, ErrorKind.UNSUPPORTED_ENCODING)

    def test_unknown_encoding_strict(self):
        with self.assertRaises(UnsupportedEncodingError) as ctx:
            decode_text(b"abc", "no-such-codec", strict=True)
        self.assertEqual(ctx.exception.kind, ErrorKind.UNSUPPORTED_ENCODING)

    def test_invalid_bytes_replaced(self):
        text, error = decode_text(b"a\xffb")
        self.assertEqual(text, "a\ufffdb")
        self.assertIsNone(error)


if __name__ == "__main__":
    unittest.main()
