#!/usr/bin/env python3
"""
Tests for the metadata overlay and the full derive() pipeline.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Dict, List, NotRequired, Optional, TypedDict, Union

import pytest

from typeschema import (
    ArraySchema,
    EnumSchema,
    IntegerSchema,
    ObjectSchema,
    SchemaDerivationError,
    StringSchema,
    TitleSchema,
    apply_metadata,
    derive,
    derive_structure,
    schema_metadata,
)
from typeschema.derivation import (
    Const,
    Default,
    Deprecated,
    Description,
    EnumValues,
    Examples,
    ExclusiveMinimum,
    Format,
    MaxItems,
    MaxLength,
    Maximum,
    MinItems,
    MinLength,
    Minimum,
    MultipleOf,
    Pattern,
    ReadOnly,
    Title,
    UniqueItems,
    WriteOnly,
)


class Plan(Enum):
    FREE = "free"
    PRO = "pro"


@schema_metadata(title="User", description="A registered user")
@dataclass
class User:
    name: Annotated[str, MinLength(1), MaxLength(50), Title("Name")]
    age: Annotated[int, Minimum(0), Maximum(150)]
    email: Annotated[Optional[str], Format("email")] = None
    role: Annotated[str, EnumValues("admin", "user")] = "user"
    tags: Annotated[List[str], MinItems(1), UniqueItems()] = field(default_factory=list)


@dataclass
class Account:
    id: Annotated[str, ReadOnly(), Examples("a1", "b2")]
    password: Annotated[str, WriteOnly(), Description("Never returned")]
    plan: Annotated[Plan, Default("free")]
    kind: Annotated[str, Const("account")] = "account"
    legacy_id: Annotated[Optional[int], Deprecated()] = None


@dataclass
class Product:
    sku: Annotated[str, Pattern(r"^[A-Z]{3}-\d+$")]
    price: Annotated[float, ExclusiveMinimum(0), MultipleOf(0.01)]
    quantity: Annotated[int, EnumValues(1, 5, 10)] = 1
    plan: Plan = Plan.FREE


@dataclass
class BadRecord:
    name: Annotated[str, Minimum(0)]
    age: Annotated[int, MinLength(1)]
    fine: Annotated[str, MaxLength(5)]
    code: Annotated[str, Const(3)]


@dataclass
class MismatchedValues:
    count: Annotated[int, EnumValues("a", "b")]
    enabled: Annotated[bool, Const("yes")]
    ratio: Annotated[float, Const(True)]


@dataclass
class BadPattern:
    code: Annotated[str, Pattern("[unclosed")]


class MovieDict(TypedDict):
    title: Annotated[str, MinLength(1)]
    year: NotRequired[Annotated[int, Minimum(1888)]]


@schema_metadata(description="A category in the tree")
@dataclass
class Category:
    name: Annotated[str, MinLength(1)]
    parent: Optional["Category"] = None


@dataclass
class Circle:
    radius: Annotated[float, ExclusiveMinimum(0)]


@dataclass
class Square:
    side: Annotated[float, ExclusiveMinimum(0)]


class TestMetadataOverlay:
    """Tests for applying declared annotations."""

    def test_field_annotations(self):
        """Constraint and metadata annotations land on their fields."""
        assert derive(User).to_json_schema() == {
            "type": "object",
            "properties": {
                "name": {"type": "string", "minLength": 1, "maxLength": 50, "title": "Name"},
                "age": {"type": "integer", "minimum": 0, "maximum": 150},
                "email": {"type": ["string", "null"], "format": "email", "default": None},
                "role": {"type": "string", "enum": ["admin", "user"], "default": "user"},
                "tags": {"type": "array", "items": {"type": "string"}, "minItems": 1, "uniqueItems": True},
            },
            "required": ["name", "age"],
            "title": "User",
            "description": "A registered user",
        }

    def test_required_is_unchanged(self):
        """The overlay never changes which fields are required."""
        assert derive(User).required == derive_structure(User).required
        assert derive(Account).required == frozenset({"id", "password"})

    def test_overlay_is_idempotent(self):
        """Applying the overlay twice changes nothing."""
        for tp in (User, Account, Product, Category, MovieDict):
            once = derive(tp)
            assert apply_metadata(once, tp) == once

    def test_constraints_go_below_optional(self):
        """Constraints reach the leaf inside Optional and Nullable wrappers."""
        email = derive(User).properties["email"]
        assert email.format == "email"
        assert email.validate(None).valid
        assert not email.validate("nope").valid

    def test_annotation_metadata(self):
        """Test metadata-only annotations."""
        schema = derive(Account)

        assert schema.properties["id"].read_only is True
        assert schema.properties["id"].examples == ("a1", "b2")
        assert schema.properties["password"].write_only is True
        assert schema.properties["password"].description == "Never returned"
        assert schema.properties["legacy_id"].deprecated is True
        assert schema.properties["plan"].default == "free"
        assert schema.properties["kind"].const == "account"

    def test_literal_defaults(self):
        """JSON-compatible dataclass defaults are emitted, enums by value."""
        document = derive(Product).to_json_schema()

        assert document["properties"]["quantity"] == {"enum": [1, 5, 10], "default": 1}
        assert document["properties"]["plan"] == {
            "type": "string",
            "enum": ["free", "pro"],
            "default": "free",
        }
        assert "default" not in document["properties"]["sku"]

    def test_numeric_constraints(self):
        """Validation follows the overlaid numeric constraints."""
        schema = derive(Product)

        assert schema.validate({"sku": "ABC-1", "price": 9.99}).valid

        result = schema.validate({"sku": "abc", "price": 0, "quantity": 3})
        assert [e.path for e in result.errors] == ["/sku", "/price", "/quantity"]

    def test_top_level_annotated(self):
        """Annotated types can be derived directly."""
        schema = derive(Annotated[str, MinLength(3), Title("Code")])
        assert schema == TitleSchema(StringSchema(min_length=3), "Code")

    def test_collection_elements(self):
        """Annotations on element and value types are applied."""
        assert derive(List[Annotated[str, MinLength(2)]]) == ArraySchema(items=StringSchema(min_length=2))
        assert derive(Dict[str, Annotated[int, Minimum(0)]]) == ObjectSchema(
            additional_properties=IntegerSchema(minimum=0),
        )
        assert derive(Annotated[List[int], MaxItems(3)]) == ArraySchema(items=IntegerSchema(), max_items=3)

    def test_enum_values_on_non_strings(self):
        """EnumValues replaces non-string leaves with an enum."""
        schema = derive(Product).properties["quantity"]
        assert schema.underlying == EnumSchema([1, 5, 10])

    def test_typed_dict(self):
        """Annotations inside NotRequired are applied."""
        schema = derive(MovieDict)

        assert schema.required == frozenset({"title"})
        assert schema.properties["year"].minimum == 1888
        assert not schema.validate({"title": "Metropolis", "year": 1800}).valid
        assert schema.validate({"title": "Metropolis"}).valid

    def test_recursive_record(self):
        """Metadata applies to the definitions of recursive records."""
        schema = derive(Category)
        document = schema.to_json_schema()

        assert document["$ref"] == "#/$defs/Category"
        definition = document["$defs"]["Category"]
        assert definition["description"] == "A category in the tree"
        assert definition["properties"]["name"] == {"type": "string", "minLength": 1}
        assert definition["properties"]["parent"] == {
            "anyOf": [{"$ref": "#/$defs/Category"}, {"type": "null"}],
            "default": None,
        }

        assert schema.validate({"name": "a", "parent": {"name": "b"}}).valid
        result = schema.validate({"name": "a", "parent": {"name": ""}})
        assert result.errors[0].path == "/parent/name"

    def test_union_variants(self):
        """Each record variant of a union receives its own annotations."""
        schema = derive(Union[Circle, Square])

        assert schema.validate({"type": "Circle", "radius": 1}).valid
        assert not schema.validate({"type": "Circle", "radius": 0}).valid
        assert schema.schemas[1].properties["side"].exclusive_minimum == 0


class TestMetadataErrors:
    """Tests for incompatible annotations."""

    def test_incompatible_annotations_are_collected(self):
        """Every offending field is reported, one issue per field."""
        with pytest.raises(SchemaDerivationError) as exc_info:
            derive(BadRecord)

        issues = exc_info.value.issues
        assert len(issues) == 3
        assert issues[0].startswith("BadRecord.name:")
        assert "Minimum" in issues[0]
        assert "string values" in issues[0]
        assert issues[1].startswith("BadRecord.age:")
        assert issues[2].startswith("BadRecord.code:")
        assert "Cannot derive schema" in str(exc_info.value)

    def test_value_kinds_must_match(self):
        """Enum and const values must be of the field's JSON kind."""
        with pytest.raises(SchemaDerivationError) as exc_info:
            derive(MismatchedValues)

        issues = exc_info.value.issues
        assert len(issues) == 3
        assert issues[0].startswith("MismatchedValues.count:")
        assert "integer values" in issues[0]
        assert issues[1].startswith("MismatchedValues.enabled:")
        assert "boolean values" in issues[1]
        assert issues[2].startswith("MismatchedValues.ratio:")

    def test_numeric_values_widen(self):
        """Integral floats fit integer fields and integers fit number fields."""

        @dataclass
        class Levels:
            level: Annotated[int, Const(2.0)]
            weight: Annotated[float, EnumValues(1, 2.5)]

        schema = derive(Levels)
        assert schema.properties["level"] == IntegerSchema(const=2.0)
        assert schema.properties["weight"] == EnumSchema([1, 2.5])

    def test_invalid_pattern(self):
        """Invalid regexes in annotations are derivation errors."""
        with pytest.raises(SchemaDerivationError, match="BadPattern.code"):
            derive(BadPattern)

    def test_top_level_mismatch(self):
        """A mismatch outside any record is still reported."""
        with pytest.raises(SchemaDerivationError):
            derive(Annotated[int, MinLength(1)])


class TestSchemaMetadataDecorator:
    """Tests for the schema_metadata decorator."""

    def test_decorator_keeps_class(self):
        """The decorator only records metadata on the class."""
        assert User.__schema_metadata__ == (Title("User"), Description("A registered user"))
        assert User(name="a", age=1).role == "user"

    def test_annotations_argument(self):
        """Annotations may be passed positionally."""

        @schema_metadata(Deprecated(), title="Old")
        @dataclass
        class Old:
            value: int

        schema = derive(Old)
        assert schema.deprecated is True
        assert schema.title == "Old"
        assert schema.to_json_schema()["required"] == ["value"]
