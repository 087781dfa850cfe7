"""
Metadata overlay: merges declared annotations into a structural schema.

The overlay walks a Python type and its structural schema in parallel.
Constraint annotations set keywords on the innermost structural schema;
metadata annotations wrap the schema, replacing any existing wrapper of the
same kind so applying the overlay twice changes nothing. Required fields
are never touched.
"""

import dataclasses
import enum
import logging
import typing
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from ..api import SchemaDerivationError, SchemaError
from ..schemas import (
    Schema,
    TypedSchema,
    ArraySchema,
    ObjectSchema,
    AnyOfSchema,
    OneOfSchema,
    RefSchema,
    OptionalSchema,
    NullableSchema,
    DefaultSchema,
    TitleSchema,
    DescriptionSchema,
    ExamplesSchema,
    DeprecatedSchema,
    ReadOnlySchema,
    WriteOnlySchema,
    DefsSchema,
    IdSchema,
    DialectSchema,
)
from .annotations import ConstraintAnnotation, Default, MetadataAnnotation, SchemaAnnotation
from .structural import (
    NoneType,
    has_schema_hook,
    is_record,
    is_union,
    record_fields,
    unwrap_type,
)

logger = logging.getLogger("typeschema")

METADATA_WRAPPERS = (
    DefaultSchema,
    TitleSchema,
    DescriptionSchema,
    ExamplesSchema,
    DeprecatedSchema,
    ReadOnlySchema,
    WriteOnlySchema,
    IdSchema,
    DialectSchema,
)
SHAPE_WRAPPERS = (OptionalSchema, NullableSchema)

_WRAPPER_FIELDS = {
    DefaultSchema: "value",
    TitleSchema: "text",
    DescriptionSchema: "text",
    ExamplesSchema: "example_values",
    DeprecatedSchema: "flag",
    ReadOnlySchema: "flag",
    WriteOnlySchema: "flag",
}

_JSON_SCALARS = (str, int, float, bool, NoneType)


class AnnotationMismatch(Exception):
    """A constraint annotation does not fit the schema it targets."""


def map_through(schema: Schema, wrappers: Tuple[type, ...], fn: Callable[[Schema], Schema]) -> Schema:
    """
    Apply ``fn`` below a chain of wrappers, rebuilding the chain around it.

    Args:
        schema: Schema, possibly wrapped
        wrappers: Wrapper classes to descend through
        fn: Transformation of the first schema that is not such a wrapper

    Returns:
        The rebuilt schema
    """
    if isinstance(schema, wrappers):
        return replace(schema, underlying=map_through(schema.underlying, wrappers, fn))
    return fn(schema)


def _replace_wrapper(schema: Schema, wrapper: Type[Schema], payload: Any) -> Optional[Schema]:
    if isinstance(schema, wrapper):
        return replace(schema, **{_WRAPPER_FIELDS[wrapper]: payload})
    if isinstance(schema, METADATA_WRAPPERS):
        inner = _replace_wrapper(schema.underlying, wrapper, payload)
        if inner is not None:
            return replace(schema, underlying=inner)
    return None


def with_wrapper(schema: Schema, wrapper: Type[Schema], payload: Any) -> Schema:
    """Wrap ``schema``, or update the existing wrapper of the same kind."""
    replaced = _replace_wrapper(schema, wrapper, payload)
    if replaced is not None:
        return replaced
    return wrapper(schema, payload)


def _describe(schema: Schema) -> str:
    if isinstance(schema, TypedSchema):
        return f"{schema.json_type} values"
    return type(schema).__name__


def _literal_default(value: Any) -> Any:
    """Return the JSON form of a literal default, or MISSING."""
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, _JSON_SCALARS):
        return value
    return dataclasses.MISSING


class MetadataOverlay:
    """
    Applies declared metadata to a structural schema.

    Attributes:
        issues: Incompatible annotations found so far, one per field
    """

    def __init__(self):
        self.issues: List[str] = []

    def apply(self, schema: Schema, tp: Any) -> Schema:
        bare, annotations = unwrap_type(tp)
        return self._apply(schema, bare, annotations)

    def _apply(self, schema: Schema, tp: Any, annotations: Tuple[SchemaAnnotation, ...]) -> Schema:
        if isinstance(schema, DefsSchema):
            return self._apply_definitions(schema, tp, annotations)

        if isinstance(schema, RefSchema):
            # Type-level metadata of recursive types lives on the definition
            return self._apply_annotations(schema, annotations)

        schema = map_through(schema, METADATA_WRAPPERS, lambda s: self._apply_structure(s, tp))

        if is_record(tp) and not has_schema_hook(tp):
            annotations = tuple(getattr(tp, "__schema_metadata__", ())) + annotations

        return self._apply_annotations(schema, annotations)

    def _apply_definitions(self, schema: DefsSchema, tp: Any,
                           annotations: Tuple[SchemaAnnotation, ...]) -> Schema:
        records = _reachable_records(tp)
        definitions = {
            name: self._apply(definition, records[name], ()) if name in records else definition
            for name, definition in schema.defs.items()
        }
        underlying = self._apply(schema.underlying, tp, annotations)
        return replace(schema, underlying=underlying, defs=definitions)

    def _apply_annotations(self, schema: Schema, annotations: Tuple[SchemaAnnotation, ...]) -> Schema:
        for annotation in annotations:
            if isinstance(annotation, ConstraintAnnotation):
                schema = map_through(
                    schema,
                    METADATA_WRAPPERS + SHAPE_WRAPPERS,
                    lambda base, a=annotation: self._constrain(base, a),
                )
            elif isinstance(annotation, MetadataAnnotation):
                schema = with_wrapper(schema, annotation.wrapper, annotation.payload)
        return schema

    def _constrain(self, schema: Schema, annotation: ConstraintAnnotation) -> Schema:
        if not annotation.accepts(schema):
            raise AnnotationMismatch(f"{annotation!r} does not apply to {_describe(schema)}")
        try:
            return annotation.apply_to(schema)
        except SchemaError as e:
            raise AnnotationMismatch(str(e)) from e

    def _apply_structure(self, schema: Schema, tp: Any) -> Schema:
        if is_union(tp):
            variants = [a for a in typing.get_args(tp) if a is not NoneType]
            if len(variants) == 1:
                return map_through(schema, SHAPE_WRAPPERS, lambda s: self.apply(s, variants[0]))
            return map_through(schema, SHAPE_WRAPPERS, lambda s: self._apply_variants(s, variants))

        if is_record(tp):
            return self._apply_record(schema, tp)

        origin = typing.get_origin(tp)
        args = typing.get_args(tp)
        if not args or origin is typing.Literal:
            return schema

        if isinstance(schema, ArraySchema):
            if schema.prefix_items is not None and len(schema.prefix_items) == len(args):
                return replace(schema, prefix_items=[
                    self.apply(item, arg) for item, arg in zip(schema.prefix_items, args)
                ])
            if schema.items is not None:
                return replace(schema, items=self.apply(schema.items, args[0]))
            return schema

        if isinstance(schema, ObjectSchema) and len(args) == 2:
            value_type = args[1]
            if isinstance(schema.additional_properties, Schema):
                schema = replace(schema, additional_properties=self.apply(schema.additional_properties, value_type))
            if schema.pattern_properties:
                schema = replace(schema, pattern_properties={
                    pattern: self.apply(prop, value_type)
                    for pattern, prop in schema.pattern_properties.items()
                })
        return schema

    def _apply_variants(self, schema: Schema, variants: List[Any]) -> Schema:
        if isinstance(schema, (AnyOfSchema, OneOfSchema)) and len(schema.schemas) == len(variants):
            return replace(schema, schemas=[
                self.apply(branch, variant) for branch, variant in zip(schema.schemas, variants)
            ])
        return schema

    def _apply_record(self, schema: Schema, cls: type) -> Schema:
        if not isinstance(schema, ObjectSchema) or has_schema_hook(cls):
            return schema

        properties: Dict[str, Schema] = dict(schema.properties)
        for field in record_fields(cls):
            if field.name not in properties:
                continue
            try:
                prop = self._apply(properties[field.name], field.type, field.annotations)
            except AnnotationMismatch as e:
                self.issues.append(f"{cls.__name__}.{field.name}: {e}")
                continue

            if not any(isinstance(a, Default) for a in field.annotations):
                default = _literal_default(field.default)
                if default is not dataclasses.MISSING:
                    prop = with_wrapper(prop, DefaultSchema, default)

            properties[field.name] = prop

        return replace(schema, properties=properties)


def _reachable_records(tp: Any, found: Optional[Dict[str, type]] = None) -> Dict[str, type]:
    """Collect every record class reachable from a type, keyed by name."""
    if found is None:
        found = {}

    bare, _ = unwrap_type(tp)
    if is_record(bare):
        if bare.__name__ in found or has_schema_hook(bare):
            return found
        found[bare.__name__] = bare
        for field in record_fields(bare):
            _reachable_records(field.type, found)
    elif typing.get_origin(bare) is not typing.Literal:
        for arg in typing.get_args(bare):
            _reachable_records(arg, found)

    return found


def apply_metadata(schema: Schema, tp: Any) -> Schema:
    """
    Overlay the metadata declared on a type onto its structural schema.

    Args:
        schema: Structural schema derived for ``tp``
        tp: The Python type the schema was derived from

    Returns:
        Schema with constraints set and metadata wrappers applied

    Raises:
        SchemaDerivationError: Listing every field whose annotations do
            not fit its structural type
    """
    overlay = MetadataOverlay()
    try:
        result = overlay.apply(schema, tp)
    except AnnotationMismatch as e:
        overlay.issues.append(str(e))
        result = schema

    if overlay.issues:
        for issue in overlay.issues:
            logger.debug(f"Metadata issue: {issue}")
        raise SchemaDerivationError(overlay.issues)

    return result
