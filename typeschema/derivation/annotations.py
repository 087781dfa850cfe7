"""
Schema metadata annotations.

Field-level metadata is attached with ``typing.Annotated``::

    @dataclass
    class User:
        name: Annotated[str, MinLength(1), Title("Display name")]
        age: Annotated[int, Minimum(0), Maximum(150)] = 0

Type-level metadata is attached with the ``schema_metadata`` decorator.
Constraint annotations set a keyword on the derived schema and are only
valid for matching structural types; the remaining annotations wrap the
schema with metadata and apply to any type.
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Optional, Tuple, Type, Union

from ..schemas import (
    Schema,
    TypedSchema,
    StringSchema,
    NumberSchema,
    BooleanSchema,
    ArraySchema,
    EnumSchema,
    DefaultSchema,
    TitleSchema,
    DescriptionSchema,
    ExamplesSchema,
    DeprecatedSchema,
    ReadOnlySchema,
    WriteOnlySchema,
)
from ..utils import TypeUtils

Numeric = Union[int, float]


class SchemaAnnotation:
    """Base class for every schema annotation."""


class ConstraintAnnotation(SchemaAnnotation):
    """
    Annotation that sets one keyword on a structural schema.

    Attributes:
        attribute: Name of the schema attribute to set
        targets: Schema classes the annotation may be applied to
    """
    attribute: ClassVar[str]
    targets: ClassVar[Tuple[Type[Schema], ...]]

    def accepts(self, schema: Schema) -> bool:
        return isinstance(schema, self.targets)

    def apply_to(self, schema: Schema) -> Schema:
        return replace(schema, **{self.attribute: self.value})


class MetadataAnnotation(SchemaAnnotation):
    """
    Annotation that wraps a schema with a metadata modifier.

    Attributes:
        wrapper: Modifier class carrying the metadata
    """
    wrapper: ClassVar[Type[Schema]]

    @property
    def payload(self) -> Any:
        return self.value


@dataclass(frozen=True)
class MinLength(ConstraintAnnotation):
    value: int
    attribute: ClassVar[str] = "min_length"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (StringSchema,)


@dataclass(frozen=True)
class MaxLength(ConstraintAnnotation):
    value: int
    attribute: ClassVar[str] = "max_length"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (StringSchema,)


@dataclass(frozen=True)
class Pattern(ConstraintAnnotation):
    value: str
    attribute: ClassVar[str] = "pattern"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (StringSchema,)


@dataclass(frozen=True)
class Format(ConstraintAnnotation):
    value: str
    attribute: ClassVar[str] = "format"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (StringSchema,)


@dataclass(frozen=True)
class Minimum(ConstraintAnnotation):
    value: Numeric
    attribute: ClassVar[str] = "minimum"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (NumberSchema,)


@dataclass(frozen=True)
class Maximum(ConstraintAnnotation):
    value: Numeric
    attribute: ClassVar[str] = "maximum"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (NumberSchema,)


@dataclass(frozen=True)
class ExclusiveMinimum(ConstraintAnnotation):
    value: Numeric
    attribute: ClassVar[str] = "exclusive_minimum"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (NumberSchema,)


@dataclass(frozen=True)
class ExclusiveMaximum(ConstraintAnnotation):
    value: Numeric
    attribute: ClassVar[str] = "exclusive_maximum"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (NumberSchema,)


@dataclass(frozen=True)
class MultipleOf(ConstraintAnnotation):
    value: Numeric
    attribute: ClassVar[str] = "multiple_of"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (NumberSchema,)


@dataclass(frozen=True)
class MinItems(ConstraintAnnotation):
    value: int
    attribute: ClassVar[str] = "min_items"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (ArraySchema,)


@dataclass(frozen=True)
class MaxItems(ConstraintAnnotation):
    value: int
    attribute: ClassVar[str] = "max_items"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (ArraySchema,)


@dataclass(frozen=True)
class UniqueItems(ConstraintAnnotation):
    value: bool = True
    attribute: ClassVar[str] = "unique_items"
    targets: ClassVar[Tuple[Type[Schema], ...]] = (ArraySchema,)


def _fits(value: Any, schema: Schema) -> bool:
    """Check that a literal value is of the JSON kind a typed schema accepts."""
    if not isinstance(schema, TypedSchema):
        return True
    kind = TypeUtils.get_json_type(value)
    if schema.json_type == "integer":
        return kind == "integer" or (kind == "number" and float(value).is_integer())
    if schema.json_type == "number":
        return kind in ("integer", "number")
    return kind == schema.json_type


@dataclass(frozen=True, init=False)
class EnumValues(ConstraintAnnotation):
    """
    Restrict a field to a fixed list of values.

    Every value must be of the field's JSON kind. Strings keep their string
    schema with an ``enum`` keyword; any other type is replaced by an enum
    schema.
    """
    values: Tuple[Any, ...]

    def __init__(self, *values: Any):
        object.__setattr__(self, "values", tuple(values))

    def accepts(self, schema: Schema) -> bool:
        return all(_fits(v, schema) for v in self.values)

    def apply_to(self, schema: Schema) -> Schema:
        if isinstance(schema, StringSchema):
            return replace(schema, enum=self.values)
        return EnumSchema(self.values)


@dataclass(frozen=True)
class Const(ConstraintAnnotation):
    """Pin a field to a single value of its JSON kind."""
    value: Any

    def accepts(self, schema: Schema) -> bool:
        return _fits(self.value, schema)

    def apply_to(self, schema: Schema) -> Schema:
        if isinstance(schema, (StringSchema, NumberSchema, BooleanSchema)):
            return replace(schema, const=self.value)
        return EnumSchema((self.value,))


@dataclass(frozen=True)
class Title(MetadataAnnotation):
    value: str
    wrapper: ClassVar[Type[Schema]] = TitleSchema


@dataclass(frozen=True)
class Description(MetadataAnnotation):
    value: str
    wrapper: ClassVar[Type[Schema]] = DescriptionSchema


@dataclass(frozen=True)
class Default(MetadataAnnotation):
    """Declare a default value; the field is no longer required."""
    value: Any
    wrapper: ClassVar[Type[Schema]] = DefaultSchema


@dataclass(frozen=True, init=False)
class Examples(MetadataAnnotation):
    values: Tuple[Any, ...]
    wrapper: ClassVar[Type[Schema]] = ExamplesSchema

    def __init__(self, *values: Any):
        object.__setattr__(self, "values", tuple(values))

    @property
    def payload(self) -> Any:
        return self.values


@dataclass(frozen=True)
class Deprecated(MetadataAnnotation):
    value: bool = True
    wrapper: ClassVar[Type[Schema]] = DeprecatedSchema


@dataclass(frozen=True)
class ReadOnly(MetadataAnnotation):
    value: bool = True
    wrapper: ClassVar[Type[Schema]] = ReadOnlySchema


@dataclass(frozen=True)
class WriteOnly(MetadataAnnotation):
    value: bool = True
    wrapper: ClassVar[Type[Schema]] = WriteOnlySchema


def schema_metadata(*annotations: SchemaAnnotation,
                    title: Optional[str] = None,
                    description: Optional[str] = None):
    """
    Class decorator attaching type-level metadata.

    Args:
        *annotations: Annotations applied to every schema derived for the class
        title: Shortcut for ``Title(title)``
        description: Shortcut for ``Description(description)``

    Returns:
        Decorator returning the class unchanged apart from its metadata
    """
    collected = list(annotations)
    if title is not None:
        collected.append(Title(title))
    if description is not None:
        collected.append(Description(description))

    def decorator(cls):
        cls.__schema_metadata__ = tuple(collected)
        return cls

    return decorator
