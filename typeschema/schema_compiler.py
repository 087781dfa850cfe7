"""
Schema compiler: builds Schema values from JSON Schema documents.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from .api import SchemaError
from .schemas import (
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
    NotSchema,
    IfThenElseSchema,
    RefSchema,
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
from .utils import SchemaKeywords, JsonPointer

logger = logging.getLogger("typeschema")

SchemaDocument = Union[Dict[str, Any], bool]

# Types whose schema carries a const pin directly
_CONST_TYPES = {"string", "number", "integer", "boolean"}


class SchemaBuilder:
    """
    Builds a schema tree from a JSON Schema document.

    Each document node becomes one structural schema (from ``type`` or the
    type implied by its keywords), combined with any composition keywords
    through allOf, then wrapped with its metadata.
    """

    def build(self, document: SchemaDocument, path: str = JsonPointer.ROOT) -> Schema:
        """
        Build the schema for one document node.

        Args:
            document: JSON Schema node (object or boolean)
            path: JSON Pointer of the node, used in error messages

        Returns:
            The compiled schema

        Raises:
            SchemaError: If the node is malformed
        """
        if document is True:
            return AnySchema()
        if document is False:
            return NotSchema(AnySchema())
        if not isinstance(document, dict):
            raise SchemaError(f"Schema at '{path}' must be an object or a boolean")

        parts: List[Schema] = []

        if SchemaKeywords.REF in document:
            parts.append(self._create_reference(document[SchemaKeywords.REF], path))

        typed = self._create_typed_schema(document, path)
        if typed is not None:
            parts.append(typed)

        parts.extend(self._create_logical_schemas(document, path))

        if not parts:
            schema: Schema = AnySchema()
        elif len(parts) == 1:
            schema = parts[0]
        else:
            schema = AllOfSchema(parts)

        return self._apply_metadata(schema, document, path)

    def _child(self, document: Dict[str, Any], keyword: str, path: str) -> Schema:
        return self.build(document[keyword], JsonPointer.append(path, keyword))

    def _create_reference(self, ref: Any, path: str) -> Schema:
        if not isinstance(ref, str):
            raise SchemaError(f"$ref at '{path}' must be a string")
        if not ref.startswith("#"):
            raise SchemaError(f"External references not supported: {ref}")
        return RefSchema(ref)

    def _determine_types(self, document: Dict[str, Any], path: str) -> Optional[List[str]]:
        """
        Determine the JSON types a node describes.

        Args:
            document: Schema node
            path: JSON Pointer of the node

        Returns:
            Declared or implied type names, or None when the node is untyped
        """
        if SchemaKeywords.TYPE in document:
            type_value = document[SchemaKeywords.TYPE]
            types = type_value if isinstance(type_value, list) else [type_value]
            if not types or not all(isinstance(t, str) for t in types):
                raise SchemaError(f"Invalid type declaration at '{path}': {type_value}")
            return types

        # Infer type from type-specific keywords
        for keyword in document:
            implied = SchemaKeywords.get_implied_type(keyword)
            if implied is not None:
                return [implied]

        return None

    def _create_typed_schema(self, document: Dict[str, Any], path: str) -> Optional[Schema]:
        types = self._determine_types(document, path)

        if types is None:
            if SchemaKeywords.ENUM in document:
                return EnumSchema(document[SchemaKeywords.ENUM])
            if SchemaKeywords.CONST in document:
                return EnumSchema([document[SchemaKeywords.CONST]])
            return None

        non_null = [t for t in types if t != "null"]
        if not non_null:
            return NullSchema()

        branches = [self._create_for_type(t, document, path) for t in non_null]
        schema = branches[0] if len(branches) == 1 else AnyOfSchema(branches)

        if "null" in types:
            schema = NullableSchema(schema)
        return schema

    def _create_for_type(self, json_type: str, document: Dict[str, Any], path: str) -> Schema:
        if json_type == "string":
            schema: Schema = self._create_string_schema(document, path)
        elif json_type in ("number", "integer"):
            schema = self._create_number_schema(json_type, document, path)
        elif json_type == "boolean":
            schema = BooleanSchema(const=document.get(SchemaKeywords.CONST))
        elif json_type == "array":
            schema = self._create_array_schema(document, path)
        elif json_type == "object":
            schema = self._create_object_schema(document, path)
        else:
            raise SchemaError(f"Unknown type '{json_type}' at '{path}'")

        # Pins the typed schema cannot carry itself
        pins = []
        if SchemaKeywords.ENUM in document and json_type != "string":
            pins.append(EnumSchema(document[SchemaKeywords.ENUM]))
        if SchemaKeywords.CONST in document and json_type not in _CONST_TYPES:
            pins.append(EnumSchema([document[SchemaKeywords.CONST]]))

        return AllOfSchema([schema] + pins) if pins else schema

    def _create_string_schema(self, document: Dict[str, Any], path: str) -> StringSchema:
        enum = document.get(SchemaKeywords.ENUM)
        if enum is not None and not all(isinstance(v, str) for v in enum):
            raise SchemaError(f"String enum at '{path}' must only contain strings")

        return StringSchema(
            min_length=document.get(SchemaKeywords.MIN_LENGTH),
            max_length=document.get(SchemaKeywords.MAX_LENGTH),
            pattern=document.get(SchemaKeywords.PATTERN),
            format=document.get(SchemaKeywords.FORMAT),
            const=document.get(SchemaKeywords.CONST),
            enum=enum,
        )

    def _create_number_schema(self, json_type: str, document: Dict[str, Any], path: str) -> NumberSchema:
        minimum = document.get(SchemaKeywords.MINIMUM)
        maximum = document.get(SchemaKeywords.MAXIMUM)
        exclusive_minimum = document.get(SchemaKeywords.EXCLUSIVE_MINIMUM)
        exclusive_maximum = document.get(SchemaKeywords.EXCLUSIVE_MAXIMUM)

        # Draft 4 boolean form: the flag makes minimum/maximum exclusive
        if isinstance(exclusive_minimum, bool):
            exclusive_minimum, minimum = (minimum, None) if exclusive_minimum else (None, minimum)
        if isinstance(exclusive_maximum, bool):
            exclusive_maximum, maximum = (maximum, None) if exclusive_maximum else (None, maximum)

        multiple_of = document.get(SchemaKeywords.MULTIPLE_OF)
        if multiple_of is not None and multiple_of <= 0:
            raise SchemaError(f"multipleOf at '{path}' must be greater than 0")

        schema_class = IntegerSchema if json_type == "integer" else NumberSchema
        return schema_class(
            minimum=minimum,
            maximum=maximum,
            exclusive_minimum=exclusive_minimum,
            exclusive_maximum=exclusive_maximum,
            multiple_of=multiple_of,
            const=document.get(SchemaKeywords.CONST),
        )

    def _create_array_schema(self, document: Dict[str, Any], path: str) -> ArraySchema:
        items = None
        prefix_items = None

        if SchemaKeywords.PREFIX_ITEMS in document:
            prefix_path = JsonPointer.append(path, SchemaKeywords.PREFIX_ITEMS)
            prefix_items = [
                self.build(item, JsonPointer.append(prefix_path, i))
                for i, item in enumerate(document[SchemaKeywords.PREFIX_ITEMS])
            ]

        if SchemaKeywords.ITEMS in document:
            items_value = document[SchemaKeywords.ITEMS]
            if isinstance(items_value, list):
                # Pre 2020-12 tuple form
                items_path = JsonPointer.append(path, SchemaKeywords.ITEMS)
                prefix_items = [
                    self.build(item, JsonPointer.append(items_path, i))
                    for i, item in enumerate(items_value)
                ]
            else:
                items = self._child(document, SchemaKeywords.ITEMS, path)

        contains = None
        if SchemaKeywords.CONTAINS in document:
            contains = self._child(document, SchemaKeywords.CONTAINS, path)

        return ArraySchema(
            items=items,
            prefix_items=prefix_items,
            min_items=document.get(SchemaKeywords.MIN_ITEMS),
            max_items=document.get(SchemaKeywords.MAX_ITEMS),
            unique_items=bool(document.get(SchemaKeywords.UNIQUE_ITEMS, False)),
            contains=contains,
            min_contains=document.get(SchemaKeywords.MIN_CONTAINS),
            max_contains=document.get(SchemaKeywords.MAX_CONTAINS),
        )

    def _create_object_schema(self, document: Dict[str, Any], path: str) -> ObjectSchema:
        properties = {}
        properties_path = JsonPointer.append(path, SchemaKeywords.PROPERTIES)
        for name, prop_schema in document.get(SchemaKeywords.PROPERTIES, {}).items():
            properties[name] = self.build(prop_schema, JsonPointer.append(properties_path, name))

        pattern_properties = {}
        patterns_path = JsonPointer.append(path, SchemaKeywords.PATTERN_PROPERTIES)
        for pattern, pattern_schema in document.get(SchemaKeywords.PATTERN_PROPERTIES, {}).items():
            pattern_properties[pattern] = self.build(pattern_schema, JsonPointer.append(patterns_path, pattern))

        additional_properties: Union[bool, Schema] = True
        if SchemaKeywords.ADDITIONAL_PROPERTIES in document:
            additional = document[SchemaKeywords.ADDITIONAL_PROPERTIES]
            if isinstance(additional, bool):
                additional_properties = additional
            else:
                additional_properties = self._child(document, SchemaKeywords.ADDITIONAL_PROPERTIES, path)

        property_names = None
        if SchemaKeywords.PROPERTY_NAMES in document:
            property_names = self._child(document, SchemaKeywords.PROPERTY_NAMES, path)

        required = document.get(SchemaKeywords.REQUIRED, [])
        if not isinstance(required, list):
            raise SchemaError(f"required at '{path}' must be a list of property names")

        dependent_required = dict(document.get(SchemaKeywords.DEPENDENT_REQUIRED, {}))
        # Draft 7 "dependencies" with property-list values
        for name, deps in document.get(SchemaKeywords.DEPENDENCIES, {}).items():
            if isinstance(deps, list):
                dependent_required[name] = deps

        return ObjectSchema(
            properties=properties,
            required=frozenset(required),
            pattern_properties=pattern_properties,
            additional_properties=additional_properties,
            min_properties=document.get(SchemaKeywords.MIN_PROPERTIES),
            max_properties=document.get(SchemaKeywords.MAX_PROPERTIES),
            property_names=property_names,
            dependent_required=dependent_required,
        )

    def _create_logical_schemas(self, document: Dict[str, Any], path: str) -> List[Schema]:
        schemas: List[Schema] = []

        for keyword, schema_class in (
            (SchemaKeywords.ALL_OF, AllOfSchema),
            (SchemaKeywords.ANY_OF, AnyOfSchema),
            (SchemaKeywords.ONE_OF, OneOfSchema),
        ):
            if keyword not in document:
                continue
            branches = document[keyword]
            if not isinstance(branches, list):
                raise SchemaError(f"{keyword} at '{path}' must be a list of schemas")
            keyword_path = JsonPointer.append(path, keyword)
            schemas.append(schema_class([
                self.build(branch, JsonPointer.append(keyword_path, i))
                for i, branch in enumerate(branches)
            ]))

        if SchemaKeywords.NOT in document:
            schemas.append(NotSchema(self._child(document, SchemaKeywords.NOT, path)))

        if SchemaKeywords.IF in document:
            schemas.append(IfThenElseSchema(
                condition=self._child(document, SchemaKeywords.IF, path),
                then_schema=self._child(document, SchemaKeywords.THEN, path)
                if SchemaKeywords.THEN in document else None,
                else_schema=self._child(document, SchemaKeywords.ELSE, path)
                if SchemaKeywords.ELSE in document else None,
            ))

        return schemas

    def _apply_metadata(self, schema: Schema, document: Dict[str, Any], path: str) -> Schema:
        if SchemaKeywords.DEFAULT in document:
            schema = DefaultSchema(schema, document[SchemaKeywords.DEFAULT])
        if SchemaKeywords.EXAMPLES in document:
            schema = ExamplesSchema(schema, document[SchemaKeywords.EXAMPLES])
        if SchemaKeywords.DESCRIPTION in document:
            schema = DescriptionSchema(schema, document[SchemaKeywords.DESCRIPTION])
        if SchemaKeywords.TITLE in document:
            schema = TitleSchema(schema, document[SchemaKeywords.TITLE])
        if SchemaKeywords.DEPRECATED in document:
            schema = DeprecatedSchema(schema, bool(document[SchemaKeywords.DEPRECATED]))
        if SchemaKeywords.READ_ONLY in document:
            schema = ReadOnlySchema(schema, bool(document[SchemaKeywords.READ_ONLY]))
        if SchemaKeywords.WRITE_ONLY in document:
            schema = WriteOnlySchema(schema, bool(document[SchemaKeywords.WRITE_ONLY]))

        definitions = {}
        for keyword in (SchemaKeywords.DEFINITIONS, SchemaKeywords.DEFS):
            keyword_path = JsonPointer.append(path, keyword)
            for name, definition in document.get(keyword, {}).items():
                definitions[name] = self.build(definition, JsonPointer.append(keyword_path, name))
        if definitions:
            schema = DefsSchema(schema, definitions)

        if SchemaKeywords.ID in document:
            schema = IdSchema(schema, document[SchemaKeywords.ID])
        if SchemaKeywords.SCHEMA in document:
            schema = DialectSchema(schema, document[SchemaKeywords.SCHEMA])

        return schema


class SchemaCompiler:
    """
    Compiles JSON Schema documents into Schema values.

    The compiled schema validates exactly like a hand-built one and
    serializes back to an equivalent document.
    """

    def __init__(self):
        """Initialize a new schema compiler."""
        self.builder = SchemaBuilder()

    def compile(self, document: SchemaDocument) -> Schema:
        """
        Compile a JSON Schema document.

        Args:
            document: JSON Schema to compile

        Returns:
            Root schema of the compiled document

        Raises:
            SchemaError: If the document is malformed
        """
        schema = self.builder.build(document)
        logger.debug(f"Compiled schema: {schema!r}")
        return schema
