"""
Tests for Named String Formats.
"""

import unittest

from parameterized import parameterized

from mikrovalid import MikroValid
from mikrovalid.validators import is_correct_format


class TestFormats(unittest.TestCase):
    """Each named format accepts and rejects representative strings."""

    def setUp(self):
        self.validator = MikroValid(silent=True)

    def _check(self, fmt, value):
        return self.validator.test(
            {"properties": {"field": {"type": "string", "format": fmt}}},
            {"field": value},
        )

    @parameterized.expand([
        ("alphanumeric", "abc123"),
        ("alphanumeric", "ABC"),
        ("numeric", "123"),
        ("numeric", "-12.5"),
        ("email", "sam.person@example.com"),
        ("date", "2024-01-01"),
        ("url", "https://something.online.com/alkfjo3iu3.jpg"),
        ("url", "http://localhost:8080"),
        ("hexColor", "#ffffff"),
        ("hexColor", "ABC"),
        ("hexColor", "#A1b2C3"),
    ])
    def test_valid_format(self, fmt, value):
        report = self._check(fmt, value)
        self.assertTrue(report.success, f"{value!r} should match {fmt}")

    @parameterized.expand([
        ("alphanumeric", "abc 123"),
        ("alphanumeric", "abc-123"),
        ("alphanumeric", ""),
        ("numeric", "12a"),
        ("numeric", "1."),
        ("numeric", "١٢٣"),
        ("email", "sam.person@example"),
        ("email", "not an email"),
        ("date", "20240101"),
        ("date", "2024-1-01"),
        ("url", "ftp://example.com"),
        ("url", "https://exa mple.com"),
        ("hexColor", "#ffff"),
        ("hexColor", "#gggggg"),
    ])
    def test_invalid_format(self, fmt, value):
        report = self._check(fmt, value)
        self.assertFalse(report.success, f"{value!r} should not match {fmt}")
        self.assertEqual(report.errors[0].error, "Invalid format")

    def test_trailing_newline_is_rejected(self):
        self.assertFalse(is_correct_format("date", "2024-01-01\n"))

    def test_numeric_format_on_number_value(self):
        self.assertTrue(is_correct_format("numeric", 42))
        self.assertTrue(is_correct_format("numeric", -1.5))

    def test_unknown_format_fails(self):
        self.assertFalse(is_correct_format("uuid", "anything"))
