"""
Structural derivation: Python type shape to Schema.

This phase looks only at the shape of a type (field types, optionality,
defaults). Metadata annotations are left to the overlay phase.
"""

import collections.abc
import dataclasses
import enum
import logging
import types
import typing
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional, Set, Tuple

from ..api import SchemaDerivationError
from ..schemas import (
    Schema,
    StringSchema,
    NumberSchema,
    IntegerSchema,
    BooleanSchema,
    NullSchema,
    EnumSchema,
    AnySchema,
    ArraySchema,
    ObjectSchema,
    AllOfSchema,
    AnyOfSchema,
    OneOfSchema,
    RefSchema,
    OptionalSchema,
    NullableSchema,
    DescriptionSchema,
    DefsSchema,
)
from .annotations import Default, SchemaAnnotation

logger = logging.getLogger("typeschema")

NoneType = type(None)

# Pattern for the string form of integer keys
INTEGER_KEY_PATTERN = r"^-?\d+$"

# Property naming the variant of a record union
DISCRIMINATOR = "type"

_FORMATTED_STRINGS = {
    datetime: "date-time",
    date: "date",
    time: "time",
    uuid.UUID: "uuid",
}

_SEQUENCE_ORIGINS = {
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
}
_SET_ORIGINS = {set, frozenset, collections.abc.Set, collections.abc.MutableSet}
_MAPPING_ORIGINS = {dict, collections.abc.Mapping, collections.abc.MutableMapping}


@dataclass(frozen=True)
class RecordField:
    """
    One field of a dataclass or TypedDict.

    Attributes:
        name: Property name
        type: Field type with qualifiers (Annotated, Required) removed
        annotations: Schema annotations declared on the field
        has_default: Whether the field declares a default
        default: Literal default value, MISSING when absent or computed
        required_key: For TypedDicts, whether the key is required
    """
    name: str
    type: Any
    annotations: Tuple[SchemaAnnotation, ...]
    has_default: bool = False
    # MISSING as a plain default would read as "no default"
    default: Any = dataclasses.field(default_factory=lambda: dataclasses.MISSING)
    required_key: Optional[bool] = None


def unwrap_type(tp: Any) -> Tuple[Any, Tuple[SchemaAnnotation, ...]]:
    """
    Strip Annotated, Required and NotRequired from a type.

    Args:
        tp: Type hint

    Returns:
        The bare type and the schema annotations found on the way
    """
    annotations: List[SchemaAnnotation] = []
    while True:
        origin = typing.get_origin(tp)
        if origin is typing.Annotated:
            annotations.extend(a for a in tp.__metadata__ if isinstance(a, SchemaAnnotation))
            tp = tp.__origin__
        elif origin in (typing.Required, typing.NotRequired):
            tp = typing.get_args(tp)[0]
        else:
            return tp, tuple(annotations)


def is_union(tp: Any) -> bool:
    return typing.get_origin(tp) in (typing.Union, types.UnionType)


def is_optional(tp: Any) -> bool:
    """Check for ``Optional[T]`` / ``T | None``."""
    return is_union(tp) and NoneType in typing.get_args(tp)


def is_record(tp: Any) -> bool:
    """Check for a dataclass or TypedDict class."""
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or typing.is_typeddict(tp)


def has_schema_hook(tp: Any) -> bool:
    return isinstance(tp, type) and callable(getattr(tp, "__json_schema__", None))


def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except NameError as e:
        raise SchemaDerivationError(f"Cannot resolve type hints of {cls.__name__}: {e}") from e


def record_fields(cls: type) -> List[RecordField]:
    """
    List the fields of a dataclass or TypedDict in declaration order.

    Args:
        cls: Record class

    Returns:
        One RecordField per field
    """
    hints = _type_hints(cls)

    if typing.is_typeddict(cls):
        fields = []
        for name, hint in hints.items():
            field_type, annotations = unwrap_type(hint)
            has_default = any(isinstance(a, Default) for a in annotations)
            fields.append(RecordField(
                name=name,
                type=field_type,
                annotations=annotations,
                has_default=has_default,
                required_key=name in cls.__required_keys__,
            ))
        return fields

    fields = []
    for f in dataclasses.fields(cls):
        field_type, annotations = unwrap_type(hints.get(f.name, f.type))
        has_default = (
            f.default is not dataclasses.MISSING
            or f.default_factory is not dataclasses.MISSING
            or any(isinstance(a, Default) for a in annotations)
        )
        fields.append(RecordField(
            name=f.name,
            type=field_type,
            annotations=annotations,
            has_default=has_default,
            default=f.default,
        ))
    return fields


class StructuralDeriver:
    """
    Derives the structural schema of a Python type.

    Recursive record types are emitted as references into ``$defs``; the
    definitions are attached to the top-level schema.
    """

    def __init__(self):
        self._in_progress: Set[type] = set()
        self._recursive: Set[type] = set()
        self._definitions: Dict[str, Schema] = {}

    def derive(self, tp: Any) -> Schema:
        """
        Derive the structural schema for a type.

        Args:
            tp: Python type

        Returns:
            The derived schema

        Raises:
            SchemaDerivationError: If the type or one of its parts is unsupported
        """
        schema = self._derive(tp)
        if self._definitions:
            schema = DefsSchema(schema, self._definitions)
        return schema

    def _derive(self, tp: Any) -> Schema:
        tp, _ = unwrap_type(tp)

        if has_schema_hook(tp):
            schema = tp.__json_schema__()
            if not isinstance(schema, Schema):
                raise SchemaDerivationError(f"{tp.__name__}.__json_schema__ must return a Schema")
            return schema

        if tp is Any or tp is object:
            return AnySchema()
        if tp is None or tp is NoneType:
            return NullSchema()
        if tp is bool:
            return BooleanSchema()
        if tp is int:
            return IntegerSchema()
        if tp is float or tp is Decimal:
            return NumberSchema()
        if tp is str:
            return StringSchema()
        if tp in _FORMATTED_STRINGS:
            return StringSchema(format=_FORMATTED_STRINGS[tp])

        if isinstance(tp, type) and issubclass(tp, enum.Enum):
            return EnumSchema([member.value for member in tp])

        if isinstance(tp, typing.NewType):
            return self._derive(tp.__supertype__)

        origin = typing.get_origin(tp)
        args = typing.get_args(tp)

        if origin is typing.Literal:
            return EnumSchema([a.value if isinstance(a, enum.Enum) else a for a in args])

        if is_union(tp):
            return self._derive_union(args)

        if tp in _SEQUENCE_ORIGINS or origin in _SEQUENCE_ORIGINS:
            return ArraySchema(items=self._derive(args[0]) if args else None)

        if tp is tuple or origin is tuple:
            return self._derive_tuple(args)

        if tp in _SET_ORIGINS or origin in _SET_ORIGINS:
            return ArraySchema(items=self._derive(args[0]) if args else None, unique_items=True)

        if tp in _MAPPING_ORIGINS or origin in _MAPPING_ORIGINS:
            return self._derive_mapping(args)

        if is_record(tp):
            return self._derive_record(tp)

        raise SchemaDerivationError(f"Unsupported type: {tp!r}")

    def _derive_union(self, args: Tuple[Any, ...]) -> Schema:
        variants = [a for a in args if a is not NoneType]
        nullable = len(variants) < len(args)

        if len(variants) == 1:
            schema = self._derive(variants[0])
        else:
            bare = [unwrap_type(v)[0] for v in variants]
            if all(is_record(v) and not has_schema_hook(v) for v in bare):
                schema = self._derive_sum_type(bare)
            else:
                schema = AnyOfSchema([self._derive(v) for v in variants])

        return NullableSchema(schema) if nullable else schema

    def _derive_sum_type(self, variants: List[type]) -> Schema:
        """
        Derive a union of record types.

        Zero-field dataclasses are markers encoded as their class name; a
        union made only of markers is a single string enum. Every other
        variant carries a required ``type`` property holding its class name,
        so variants with overlapping fields stay distinguishable.
        """
        markers = [v for v in variants if dataclasses.is_dataclass(v) and not dataclasses.fields(v)]
        if len(markers) == len(variants):
            return EnumSchema([v.__name__ for v in variants])

        return OneOfSchema([
            EnumSchema([v.__name__]) if v in markers else self._derive_variant(v)
            for v in variants
        ])

    def _derive_variant(self, cls: type) -> Schema:
        name = cls.__name__
        if any(f.name == DISCRIMINATOR for f in record_fields(cls)):
            raise SchemaDerivationError(
                f"{name}: field '{DISCRIMINATOR}' clashes with the union discriminator"
            )

        tag = StringSchema(const=name)
        schema = self._derive(cls)
        if isinstance(schema, ObjectSchema):
            return replace(
                schema,
                properties={DISCRIMINATOR: tag, **schema.properties},
                required=schema.required | {DISCRIMINATOR},
            )

        # Recursive variants are references shared with non-union uses
        return AllOfSchema([
            schema,
            ObjectSchema(properties={DISCRIMINATOR: tag}, required={DISCRIMINATOR}),
        ])

    def _derive_tuple(self, args: Tuple[Any, ...]) -> Schema:
        if not args:
            return ArraySchema()
        if len(args) == 2 and args[1] is Ellipsis:
            return ArraySchema(items=self._derive(args[0]))
        return ArraySchema(
            prefix_items=[self._derive(a) for a in args],
            min_items=len(args),
            max_items=len(args),
        )

    def _derive_mapping(self, args: Tuple[Any, ...]) -> Schema:
        key_type, value_type = args if args else (str, Any)
        key_type, _ = unwrap_type(key_type)
        value_schema = self._derive(value_type)

        if key_type is str:
            return ObjectSchema(additional_properties=value_schema)
        if key_type is int:
            return ObjectSchema(
                pattern_properties={INTEGER_KEY_PATTERN: value_schema},
                additional_properties=False,
            )

        key_name = getattr(key_type, "__name__", repr(key_type))
        return DescriptionSchema(
            ObjectSchema(pattern_properties={".*": value_schema}),
            f"Map with {key_name} keys",
        )

    def _derive_record(self, cls: type) -> Schema:
        name = cls.__name__
        ref = RefSchema(f"#/$defs/{name}")

        if cls in self._in_progress:
            logger.debug(f"Recursive reference to {name}")
            self._recursive.add(cls)
            return ref

        self._in_progress.add(cls)
        try:
            schema = self._derive_object(cls)
        finally:
            self._in_progress.discard(cls)

        if cls in self._recursive:
            self._definitions[name] = schema
            return ref
        return schema

    def _derive_object(self, cls: type) -> ObjectSchema:
        properties = {}
        required = []
        issues = []

        for field in record_fields(cls):
            try:
                schema = self._derive(field.type)
            except SchemaDerivationError as e:
                issues.extend(f"{cls.__name__}.{field.name}: {issue}" for issue in e.issues)
                continue

            if field.required_key is not None:
                # TypedDict: presence follows the declared key totality
                is_required = field.required_key and not field.has_default
            else:
                is_required = not is_optional(field.type) and not field.has_default

            if is_required:
                required.append(field.name)
            elif field.required_key is not None or is_optional(field.type):
                schema = OptionalSchema(schema)

            properties[field.name] = schema

        if issues:
            raise SchemaDerivationError(issues)

        logger.debug(f"Derived {cls.__name__} with required fields {required}")
        return ObjectSchema(properties=properties, required=frozenset(required))


def derive_structure(tp: Any) -> Schema:
    """
    Derive the structural schema of a Python type.

    Args:
        tp: Python type

    Returns:
        Schema describing the shape of the type
    """
    return StructuralDeriver().derive(tp)
