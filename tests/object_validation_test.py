#!/usr/bin/env python3
"""
Tests for object-specific validation features.
"""
import pytest

from typeschema import (
    AdditionalProperty,
    ErrorCode,
    IntegerSchema,
    Invalid,
    JsonValidator,
    MaxPropertiesViolation,
    MinPropertiesViolation,
    MissingField,
    ObjectSchema,
    SchemaError,
    StringSchema,
    TypeMismatch,
)


class TestObjectValidation:
    """Tests for object-specific schema validation."""

    def setup_method(self):
        """Set up the test environment."""
        self.validator = JsonValidator()

    def test_object_constraints(self):
        """Test object-specific constraints."""
        schema = {
            "type": "object",
            "required": ["name", "age"]
        }

        # Valid - has all required properties
        result = self.validator.validate({"name": "John", "age": 30}, schema)
        assert result.valid

        # Invalid - missing required property
        result = self.validator.validate({"name": "John"}, schema)
        assert not result.valid
        assert result.errors == (MissingField("age", "/"),)
        assert result.errors[0].code == ErrorCode.REQUIRED_PROPERTY_MISSING
        assert "Missing required property" in result.errors[0].message

        # Test properties with specific types
        schema = {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "age": {"type": "integer", "minimum": 0}
            }
        }

        # Invalid - wrong property types, reported in property order
        result = self.validator.validate(
            {"age": "thirty", "name": 123}, schema)
        assert result.errors == (
            TypeMismatch("string", "integer", "/name"),
            TypeMismatch("integer", "string", "/age"),
        )

        # Test non-object with object schema
        result = self.validator.validate("not an object", schema)
        assert result.errors == (TypeMismatch("object", "string", "/"),)

    def test_missing_field_path_is_the_object(self):
        """A missing property is reported at its parent object."""
        schema = ObjectSchema(
            properties={"user": ObjectSchema(properties={"name": StringSchema()}, required={"name"})},
        )

        result = schema.validate({"user": {}})
        assert result == Invalid([MissingField("name", "/user")])

    def test_required_in_property_order(self):
        """Missing required properties follow property declaration order."""
        schema = ObjectSchema(
            properties={"b": StringSchema(), "a": StringSchema()},
            required={"a", "b", "z"},
        )

        result = schema.validate({})
        assert [e.name for e in result.errors] == ["b", "a", "z"]
        assert schema.to_json_schema()["required"] == ["b", "a", "z"]

    def test_additional_properties_false(self):
        """Test additionalProperties: false."""
        schema = {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "additionalProperties": False
        }

        assert self.validator.validate({"name": "John"}, schema).valid

        result = self.validator.validate({"name": "John", "extra": 1}, schema)
        assert result.errors == (AdditionalProperty("extra", "/"),)
        assert "not allowed" in result.errors[0].message

    def test_additional_properties_schema(self):
        """Unmatched keys are validated against the additionalProperties schema."""
        schema = ObjectSchema(
            properties={"id": StringSchema()},
            additional_properties=IntegerSchema(),
        )

        assert schema.validate({"id": "x", "count": 3}).valid

        result = schema.validate({"id": "x", "count": "3"})
        assert result.errors == (TypeMismatch("integer", "string", "/count"),)

    def test_pattern_properties(self):
        """Test patternProperties and their interaction with additionalProperties."""
        schema = {
            "type": "object",
            "patternProperties": {
                "^S_": {"type": "string"},
                "^I_": {"type": "integer"}
            },
            "additionalProperties": False
        }

        # Valid - all keys match a pattern
        result = self.validator.validate({"S_name": "x", "I_count": 1}, schema)
        assert result.valid

        # Invalid - pattern value of the wrong type
        result = self.validator.validate({"S_name": 5}, schema)
        assert result.errors[0].path == "/S_name"

        # Invalid - key matching no pattern
        result = self.validator.validate({"other": 1}, schema)
        assert result.errors == (AdditionalProperty("other", "/"),)

    def test_declared_properties_skip_patterns(self):
        """A declared property is never also checked by a pattern."""
        schema = ObjectSchema(
            properties={"S_id": IntegerSchema()},
            pattern_properties={"^S_": StringSchema()},
        )
        assert schema.validate({"S_id": 1}).valid

    def test_property_count(self):
        """Test minProperties and maxProperties."""
        schema = ObjectSchema(min_properties=1, max_properties=2)

        assert schema.validate({"a": 1}).valid

        result = schema.validate({})
        assert result.errors == (MinPropertiesViolation(1, 0, "/"),)

        result = schema.validate({"a": 1, "b": 2, "c": 3})
        assert result.errors == (MaxPropertiesViolation(2, 3, "/"),)
        assert result.errors[0].code == ErrorCode.OBJECT_TOO_MANY_PROPERTIES

    def test_property_names(self):
        """Every key must satisfy propertyNames."""
        schema = {
            "type": "object",
            "propertyNames": {"pattern": "^[a-z]+$"}
        }

        assert self.validator.validate({"abc": 1}, schema).valid

        result = self.validator.validate({"abc": 1, "ABC": 2}, schema)
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.PATTERN_MISMATCH
        assert result.errors[0].path == "/ABC"

    def test_dependent_required(self):
        """Test dependentRequired."""
        schema = {
            "type": "object",
            "dependentRequired": {"credit_card": ["billing_address"]}
        }

        assert self.validator.validate({"name": "x"}, schema).valid
        assert self.validator.validate({"credit_card": 1, "billing_address": "y"}, schema).valid

        result = self.validator.validate({"credit_card": 1}, schema)
        assert result.errors == (MissingField("billing_address", "/"),)

    def test_draft7_dependencies(self):
        """Property-list dependencies compile like dependentRequired."""
        schema = {"dependencies": {"a": ["b"]}}

        result = self.validator.validate({"a": 1}, schema)
        assert result.errors == (MissingField("b", "/"),)

    def test_invalid_pattern_property(self):
        """Invalid pattern regexes fail at construction."""
        with pytest.raises(SchemaError):
            ObjectSchema(pattern_properties={"(": StringSchema()})

    def test_collections_are_frozen(self):
        """Schemas copy and freeze the collections they are given."""
        properties = {"a": StringSchema()}
        schema = ObjectSchema(properties=properties)
        properties["b"] = StringSchema()

        assert list(schema.properties) == ["a"]
        with pytest.raises(TypeError):
            schema.properties["c"] = StringSchema()

    def test_json_schema(self):
        """Test serialization of object schemas."""
        schema = ObjectSchema(
            properties={"name": StringSchema()},
            required={"name"},
            additional_properties=False,
        )
        assert schema.to_json_schema() == {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "required": ["name"],
            "additionalProperties": False,
        }
        assert ObjectSchema().to_json_schema() == {"type": "object"}
