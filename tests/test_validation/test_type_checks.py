"""
Tests for Type Validation.

Covers the string, number, boolean, object and array type checks, both
through the validator and through the pure predicates.
"""

import math
from collections import OrderedDict
from datetime import date

import pytest

from mikrovalid.validators import is_correct_type


class TestTypeValidation:
    """Tests for type checks through MikroValid.test()."""

    def test_validate_string(self, validator):
        report = validator.test(
            {"properties": {"username": {"type": "string"}}},
            {"username": "Sam Person"},
        )
        assert report.success is True
        assert report.errors == []

    def test_validate_number(self, validator):
        report = validator.test(
            {"properties": {"phone": {"type": "number"}}},
            {"phone": 7012312300},
        )
        assert report.success is True

    def test_validate_float(self, validator):
        report = validator.test(
            {"properties": {"price": {"type": "number"}}},
            {"price": 3.14},
        )
        assert report.success is True

    def test_validate_boolean(self, validator):
        report = validator.test(
            {"properties": {"enabled": {"type": "boolean"}}},
            {"enabled": False},
        )
        assert report.success is True

    def test_validate_array(self, validator):
        report = validator.test(
            {"properties": {"fruits": {"type": "array"}}},
            {"fruits": ["banana", "apple", "orange"]},
        )
        assert report.success is True

    def test_validate_object(self, validator):
        report = validator.test(
            {"properties": {"options": {"type": "object"}}},
            {"options": {"key": "value"}},
        )
        assert report.success is True

    def test_invalid_type_result(self, validator):
        report = validator.test(
            {"properties": {"username": {"type": "string"}}},
            {"username": 123},
        )
        assert report.success is False
        assert [e.to_dict() for e in report.errors] == [
            {"key": "username", "value": 123, "success": False, "error": "Invalid type"}
        ]

    def test_empty_string_is_present(self, validator):
        """Empty strings are validated, not skipped."""
        report = validator.test(
            {"properties": {"username": {"type": "number"}}},
            {"username": ""},
        )
        assert report.success is False
        assert report.errors[0].error == "Invalid type"

    def test_zero_and_false_are_present(self, validator):
        report = validator.test(
            {"properties": {"count": {"type": "string"}, "flag": {"type": "string"}}},
            {"count": 0, "flag": False},
        )
        assert [e.key for e in report.errors] == ["count", "flag"]

    def test_none_value_is_skipped(self, validator):
        report = validator.test(
            {"properties": {"username": {"type": "string"}}},
            {"username": None},
        )
        assert report.success is True


class TestTypePredicates:
    """Edge cases for is_correct_type()."""

    def test_number_rejects_nan(self):
        assert is_correct_type("number", math.nan) is False
        assert is_correct_type("number", float("nan")) is False

    def test_number_accepts_infinity(self):
        assert is_correct_type("number", math.inf) is True

    def test_number_rejects_bool(self):
        assert is_correct_type("number", True) is False

    def test_number_rejects_numeric_string(self):
        assert is_correct_type("number", "42") is False

    def test_boolean_is_strict(self):
        assert is_correct_type("boolean", 1) is False
        assert is_correct_type("boolean", "true") is False
        assert is_correct_type("boolean", True) is True

    @pytest.mark.parametrize(
        "value",
        [[], [1, 2], None, date(2024, 1, 1), {1, 2}, frozenset(), "text", 5, object()],
    )
    def test_object_rejects_non_plain_values(self, value):
        assert is_correct_type("object", value) is False

    def test_object_accepts_dict_subclasses(self):
        assert is_correct_type("object", OrderedDict(a=1)) is True
        assert is_correct_type("object", {}) is True

    @pytest.mark.parametrize("value", ["abc", {"0": "a", "length": 1}, {1, 2}, range(3), None])
    def test_array_rejects_array_likes(self, value):
        assert is_correct_type("array", value) is False

    def test_array_accepts_lists_and_tuples(self):
        assert is_correct_type("array", []) is True
        assert is_correct_type("array", (1, 2)) is True

    def test_unknown_type_fails(self):
        assert is_correct_type("integer", 1) is False
