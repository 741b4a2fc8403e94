"""
Tests for Length, Range and Pattern Constraints.
"""

import re

import pytest

from mikrovalid.errors import ErrorKind
from mikrovalid.schema import PropertySchema
from mikrovalid.validators import FieldCheck, as_text, validate_input


class TestLengthConstraints:
    """Tests for minLength/maxLength on strings and arrays."""

    def test_string_too_long(self, validator):
        report = validator.test(
            {"properties": {"username": {"type": "string", "maxLength": 2}}},
            {"username": "SamPerson"},
        )
        assert report.success is False
        assert report.errors[0].error == "Length too long"

    def test_string_too_short(self, validator):
        report = validator.test(
            {"properties": {"username": {"type": "string", "minLength": 20}}},
            {"username": "SamPerson"},
        )
        assert report.success is False
        assert report.errors[0].error == "Length too short"

    def test_length_bounds_are_inclusive(self, validator):
        report = validator.test(
            {"properties": {"code": {"type": "string", "minLength": 5, "maxLength": 5}}},
            {"code": "hello"},
        )
        assert report.success is True

    def test_array_too_long(self, validator):
        report = validator.test(
            {"properties": {"fruits": {"type": "array", "maxLength": 2}}},
            {"fruits": ["banana", "apple", "orange"]},
        )
        assert report.errors[0].error == "Length too long"

    def test_array_too_short(self, validator):
        report = validator.test(
            {"properties": {"fruits": {"type": "array", "minLength": 4}}},
            {"fruits": ["banana", "apple", "orange"]},
        )
        assert report.errors[0].error == "Length too short"

    def test_number_length_uses_text_form(self):
        schema = PropertySchema(max_length=3)
        assert validate_input(schema, 123).success is True
        assert validate_input(schema, 1234).success is False

    def test_integral_float_length_matches_integer(self, validator):
        report = validator.test({"properties": {"n": {"maxLength": 1}}}, {"n": 1.0})
        assert report.success is True
        assert validate_input(PropertySchema(max_length=21), 1e20).success is True
        assert validate_input(PropertySchema(max_length=3), 1.5).success is True

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1.0, "1"),
            (-3.0, "-3"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (2.5, "2.5"),
            (float("inf"), "Infinity"),
            (float("-inf"), "-Infinity"),
            (True, "true"),
            (None, "null"),
            (7, "7"),
        ],
    )
    def test_text_form(self, value, expected):
        assert as_text(value) == expected

    def test_min_length_zero_is_honoured(self):
        schema = PropertySchema(type="string", min_length=0)
        assert validate_input(schema, "").success is True


class TestRangeConstraints:
    """Tests for minValue/maxValue."""

    def test_value_too_small(self, validator):
        report = validator.test(
            {"properties": {"phone": {"type": "number", "minValue": 1000}}},
            {"phone": 999},
        )
        assert report.success is False
        assert len(report.errors) == 1
        assert report.errors[0].to_dict() == {
            "key": "phone",
            "value": 999,
            "success": False,
            "error": "Value too small",
        }

    def test_value_too_large(self, validator):
        report = validator.test(
            {"properties": {"phone": {"type": "number", "maxValue": 10}}},
            {"phone": 999},
        )
        assert report.errors[0].error == "Value too large"

    def test_range_is_inclusive(self, validator):
        report = validator.test(
            {"properties": {"memory": {"type": "number", "minValue": 128, "maxValue": 3008}}},
            {"memory": 128},
        )
        assert report.success is True

    def test_zero_bound_is_checked(self):
        """A bound of 0 is a real constraint, not an absent one."""
        check = validate_input(PropertySchema(min_value=0), -1)
        assert check == FieldCheck(success=False, kind=ErrorKind.VALUE_TOO_SMALL)

    def test_range_on_non_number_fails(self):
        assert validate_input(PropertySchema(min_value=1), "5").success is False
        assert validate_input(PropertySchema(max_value=1), True).success is False


class TestPatternConstraint:
    """Tests for matchesPattern."""

    def test_pattern_string(self, validator):
        report = validator.test(
            {"properties": {"architecture": {"type": "string", "matchesPattern": "^(arm|x86)$"}}},
            {"architecture": "arm"},
        )
        assert report.success is True

    def test_compiled_pattern(self, validator):
        report = validator.test(
            {"properties": {"runtime": {"type": "string", "matchesPattern": re.compile(r"^(nodejs20|python3\.7)$")}}},
            {"runtime": "python3.8"},
        )
        assert report.errors[0].error == "Pattern does not match"

    def test_empty_string_gets_no_exemption(self, validator):
        report = validator.test(
            {"properties": {"name": {"type": "string", "matchesPattern": "^[a-z]+$"}}},
            {"name": ""},
        )
        assert report.success is False
        assert report.errors[0].error == "Pattern does not match"

    def test_pattern_is_unanchored_by_default(self):
        assert validate_input(PropertySchema(pattern=re.compile("ell")), "hello").success is True

    def test_pattern_applies_to_text_form(self):
        assert validate_input(PropertySchema(pattern=re.compile(r"^\d+$")), 42).success is True


class TestCheckOrder:
    """The first failing check decides the label."""

    def test_type_checked_before_length(self):
        schema = PropertySchema(type="string", min_length=10)
        check = validate_input(schema, 5)
        assert check.kind == ErrorKind.INVALID_TYPE

    def test_format_checked_before_length(self):
        schema = PropertySchema(type="string", format="alphanumeric", max_length=2)
        check = validate_input(schema, "a b c")
        assert check.kind == ErrorKind.INVALID_FORMAT

    def test_length_checked_before_pattern(self):
        schema = PropertySchema(type="string", max_length=2, pattern=re.compile("^x$"))
        check = validate_input(schema, "abc")
        assert check.kind == ErrorKind.LENGTH_TOO_LONG

    def test_missing_schema_is_vacuous_success(self):
        assert validate_input(None, "anything") == FieldCheck(success=True)

    @pytest.mark.parametrize("value", ["text", 1, [1], {"a": 1}, True])
    def test_empty_schema_accepts_everything(self, value):
        assert validate_input(PropertySchema(), value).success is True
