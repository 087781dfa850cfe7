#!/usr/bin/env python3
"""
Tests for modifier wrappers: optional, nullable and metadata.
"""
import pytest

from typeschema import (
    BooleanSchema,
    DefaultSchema,
    EnumSchema,
    IntegerSchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    StringSchema,
    TitleSchema,
    TypeMismatch,
    VALID,
)


class TestModifiers:
    """Tests for schema modifier wrappers."""

    def test_nullable_accepts_null(self):
        """Nullable schemas accept null and validate other values normally."""
        schema = StringSchema(min_length=2).nullable()

        assert schema.validate(None) == VALID
        assert schema.validate("ab").valid
        assert not schema.validate("a").valid
        assert schema.validate(5).errors == (TypeMismatch("string", "integer", "/"),)

    def test_optional_does_not_accept_null(self):
        """Optional only affects presence, not the accepted values."""
        schema = StringSchema().optional()
        assert not schema.validate(None).valid

    def test_optional_property(self):
        """Optional properties may be absent when not required."""
        schema = ObjectSchema(
            properties={"name": StringSchema(), "nick": StringSchema().optional()},
            required={"name"},
        )

        assert schema.validate({"name": "x"}).valid
        assert not schema.validate({"name": "x", "nick": None}).valid

    def test_nullable_json_schema(self):
        """Nullable types gain "null" in their type list."""
        assert StringSchema().nullable().to_json_schema() == {"type": ["string", "null"]}
        assert EnumSchema(["a", "b"]).nullable().to_json_schema() == {
            "type": ["string", "null"],
            "enum": ["a", "b", None],
        }

    def test_nullable_json_schema_edge_cases(self):
        """Pinned schemas fall back to anyOf; untyped enums gain a null member."""
        assert EnumSchema([1, 2]).nullable().to_json_schema() == {"enum": [1, 2, None]}
        assert StringSchema(const="x").nullable().to_json_schema() == {
            "anyOf": [{"type": "string", "const": "x"}, {"type": "null"}],
        }
        assert IntegerSchema().nullable().nullable().to_json_schema() == {"type": ["integer", "null"]}

    def test_optional_json_schema(self):
        """Optional is invisible in the serialized node."""
        assert StringSchema().optional().to_json_schema() == {"type": "string"}

    def test_metadata_accessors(self):
        """Each wrapper supplies exactly its own metadata."""
        schema = (
            StringSchema(min_length=1)
            .with_title("Name")
            .with_description("Display name")
            .with_default("anon")
            .with_examples("ada", "grace")
            .as_deprecated()
            .as_read_only()
            .as_write_only(False)
            .with_id("https://example.com/name")
            .with_dialect()
        )

        assert schema.title == "Name"
        assert schema.description == "Display name"
        assert schema.default == "anon"
        assert schema.has_default
        assert schema.examples == ("ada", "grace")
        assert schema.deprecated is True
        assert schema.read_only is True
        assert schema.write_only is False
        assert schema.id == "https://example.com/name"
        assert schema.dialect == "https://json-schema.org/draft/2020-12/schema"

    def test_variant_attributes_are_forwarded(self):
        """Wrappers expose the attributes of the schema they wrap."""
        schema = IntegerSchema(minimum=3).with_title("Count").nullable()
        assert schema.minimum == 3
        assert schema.title == "Count"

        with pytest.raises(AttributeError):
            schema.no_such_attribute

    def test_unset_metadata(self):
        """Plain schemas report no metadata."""
        schema = BooleanSchema()
        assert schema.title is None
        assert schema.default is None
        assert not schema.has_default
        assert schema.examples is None
        assert schema.definitions is None

    def test_default_of_none(self):
        """A null default is distinguishable from no default."""
        schema = StringSchema().nullable().with_default(None)
        assert schema.has_default
        assert schema.to_json_schema() == {"type": ["string", "null"], "default": None}

    def test_metadata_does_not_change_validation(self):
        """Metadata wrappers validate exactly like the wrapped schema."""
        plain = IntegerSchema(maximum=5)
        wrapped = plain.with_title("t").with_description("d").with_default(1).as_read_only()

        for value in (1, 6, "x", None):
            assert wrapped.validate(value) == plain.validate(value)

    def test_metadata_json_schema(self):
        """Test serialization of metadata keywords."""
        schema = (
            IntegerSchema()
            .with_default(0)
            .with_examples(1, 2)
            .with_description("Count")
            .with_title("Counter")
            .as_deprecated()
            .as_read_only()
            .as_write_only()
        )
        assert schema.to_json_schema() == {
            "type": "integer",
            "default": 0,
            "examples": [1, 2],
            "description": "Count",
            "title": "Counter",
            "deprecated": True,
            "readOnly": True,
            "writeOnly": True,
        }

    def test_id_and_dialect_lead_the_document(self):
        """$schema and $id come first in the serialized document."""
        schema = StringSchema().with_title("x").with_id("urn:x").with_dialect()
        assert list(schema.to_json_schema()) == ["$schema", "$id", "type", "title"]

    def test_serialization_is_fresh(self):
        """Serialized documents can be mutated without touching the schema."""
        schema = EnumSchema(["a"]).with_examples("a")
        document = schema.to_json_schema()
        document["enum"].append("b")
        document["examples"].append("c")

        assert schema.to_json_schema() == {"type": "string", "enum": ["a"], "examples": ["a"]}

    def test_wrappers_are_values(self):
        """Wrappers compare by value."""
        assert StringSchema().with_title("a") == TitleSchema(StringSchema(), "a")
        assert DefaultSchema(StringSchema(), 1) != DefaultSchema(StringSchema(), 2)
        assert OptionalSchema(StringSchema()) != NullableSchema(StringSchema())
