#!/usr/bin/env python3
"""
Tests for number-specific validation features.
"""
import pytest

from typeschema import (
    ErrorCode,
    IntegerSchema,
    JsonValidator,
    MultipleOfViolation,
    NumberSchema,
    OutOfRange,
    TypeMismatch,
)


class TestNumberValidation:
    """Tests for number-specific schema validation."""

    def setup_method(self):
        """Set up the test environment."""
        self.validator = JsonValidator()

    def test_number_constraints(self):
        """Test number-specific constraints."""
        schema = {
            "type": "number",
            "minimum": 10,
            "maximum": 100
        }

        # Valid - within range
        result = self.validator.validate(42, schema)
        assert result.valid

        # Invalid - below minimum
        result = self.validator.validate(5, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.NUMBER_OUT_OF_RANGE
        assert "greater than or equal" in result.errors[0].message

        # Invalid - above maximum
        result = self.validator.validate(150, schema)
        assert result.errors == (OutOfRange(None, 100, 150, "/"),)
        assert "less than or equal" in result.errors[0].message

    def test_bounds_are_inclusive(self):
        """Boundary values satisfy minimum and maximum."""
        schema = NumberSchema(minimum=0, maximum=1)
        assert schema.validate(0).valid
        assert schema.validate(1).valid
        assert schema.validate(0.5).valid

    def test_exclusive_bounds(self):
        """Test exclusiveMinimum and exclusiveMaximum."""
        schema = NumberSchema(exclusive_minimum=0, exclusive_maximum=10)

        assert schema.validate(5).valid

        result = schema.validate(0)
        assert result.errors == (OutOfRange(0, None, 0, "/", exclusive=True),)
        assert result.errors[0].message == "Value 0 must be greater than 0"

        result = schema.validate(10)
        assert result.errors[0].message == "Value 10 must be less than 10"

    def test_multiple_of(self):
        """Test the multipleOf constraint."""
        schema = {
            "type": "integer",
            "multipleOf": 5
        }

        # Valid - multiple of 5
        result = self.validator.validate(25, schema)
        assert result.valid

        # Invalid - not a multiple of 5
        result = self.validator.validate(27, schema)
        assert not result.valid
        assert result.errors == (MultipleOfViolation(5, 27, "/"),)
        assert result.errors[0].code == ErrorCode.NUMBER_NOT_MULTIPLE

    def test_float_multiple_of(self):
        """Floating point multiples tolerate rounding."""
        schema = NumberSchema(multiple_of=0.1)
        assert schema.validate(0.3).valid
        assert schema.validate(1.7).valid
        assert not schema.validate(0.35).valid

    def test_huge_integer_float_multiple_of(self):
        """Integers beyond float range are checked exactly."""
        assert NumberSchema(multiple_of=0.5).validate(10 ** 400).valid
        assert IntegerSchema(multiple_of=0.2).validate(10 ** 400).valid

        result = NumberSchema(multiple_of=0.3).validate(10 ** 400)
        assert len(result.errors) == 1
        assert isinstance(result.errors[0], MultipleOfViolation)

        result = self.validator.validate(10 ** 400 + 1, {"type": "integer", "multipleOf": 0.3})
        assert not result.valid

    def test_all_violations_reported(self):
        """A number violating several constraints reports each one."""
        schema = NumberSchema(minimum=10, multiple_of=3)
        result = schema.validate(4)

        assert [e.code for e in result.errors] == [
            ErrorCode.NUMBER_OUT_OF_RANGE,
            ErrorCode.NUMBER_NOT_MULTIPLE,
        ]

    def test_booleans_are_not_numbers(self):
        """JSON booleans never satisfy a number schema."""
        result = NumberSchema().validate(True)
        assert result.errors == (TypeMismatch("number", "boolean", "/"),)

        result = IntegerSchema().validate(False)
        assert result.errors == (TypeMismatch("integer", "boolean", "/"),)

    def test_integer_type(self):
        """Integers accept integral floats and reject fractions."""
        schema = IntegerSchema(minimum=0)

        assert schema.validate(3).valid
        assert schema.validate(3.0).valid

        result = schema.validate(3.5)
        assert result.errors == (TypeMismatch("integer", "number", "/"),)

        result = schema.validate(-1)
        assert result.errors[0].code == ErrorCode.NUMBER_OUT_OF_RANGE

    def test_const(self):
        """Test a number pinned with const."""
        schema = {"const": 42}

        assert self.validator.validate(42, schema).valid
        assert self.validator.validate(42.0, schema).valid

        result = self.validator.validate(43, schema)
        assert not result.valid
        assert result.errors[0].code == ErrorCode.TYPE_ERROR

    def test_draft4_exclusive_flags(self):
        """Boolean exclusiveMinimum turns minimum into an exclusive bound."""
        schema = {"type": "number", "minimum": 0, "exclusiveMinimum": True}

        assert self.validator.validate(0.1, schema).valid

        result = self.validator.validate(0, schema)
        assert not result.valid
        assert result.errors[0].exclusive

    @pytest.mark.parametrize("value,valid", [
        (0, True),
        (-0.5, False),
        (99.99, True),
        (100, False),
    ])
    def test_mixed_bounds(self, value, valid):
        """Test an inclusive minimum with an exclusive maximum."""
        schema = NumberSchema(minimum=0, exclusive_maximum=100)
        assert schema.validate(value).valid == valid

    def test_json_schema(self):
        """Test serialization of number schemas."""
        assert IntegerSchema(minimum=1, multiple_of=2).to_json_schema() == {
            "type": "integer",
            "minimum": 1,
            "multipleOf": 2,
        }
        assert NumberSchema(exclusive_maximum=5).to_json_schema() == {
            "type": "number",
            "exclusiveMaximum": 5,
        }
