"""
Object schema implementation.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Dict, FrozenSet, List, Mapping, Optional, Pattern, Tuple, Union

from .base import Schema, TypedSchema, ValidationContext
from ..api import (
    AdditionalProperty,
    MaxPropertiesViolation,
    MinPropertiesViolation,
    MissingField,
    SchemaError,
    ValidationResult,
)


@dataclass(frozen=True)
class ObjectSchema(TypedSchema):
    """
    Schema for object values.

    Attributes:
        properties: Schemas for named properties
        required: Names that must be present
        pattern_properties: Schemas for keys matching a regex
        additional_properties: False denies unmatched keys, True allows
            them, a Schema validates them
        min_properties: Minimum number of keys
        max_properties: Maximum number of keys
        property_names: Schema every key must satisfy
        dependent_required: Names required whenever a given name is present
    """
    properties: Mapping[str, Schema] = field(default_factory=dict)
    required: FrozenSet[str] = frozenset()
    pattern_properties: Mapping[str, Schema] = field(default_factory=dict)
    additional_properties: Union[bool, Schema] = True
    min_properties: Optional[int] = None
    max_properties: Optional[int] = None
    property_names: Optional[Schema] = None
    dependent_required: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    _compiled_patterns: Tuple[Tuple[Pattern, Schema], ...] = field(
        default=(), init=False, repr=False, compare=False
    )

    json_type: ClassVar[str] = "object"

    def __post_init__(self):
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        object.__setattr__(self, "required", frozenset(self.required))
        object.__setattr__(self, "pattern_properties", MappingProxyType(dict(self.pattern_properties)))
        object.__setattr__(self, "dependent_required", MappingProxyType(
            {name: tuple(deps) for name, deps in self.dependent_required.items()}
        ))

        compiled = []
        for pattern, schema in self.pattern_properties.items():
            try:
                compiled.append((re.compile(pattern), schema))
            except re.error as e:
                raise SchemaError(f"Invalid regex pattern '{pattern}': {e}") from e
        object.__setattr__(self, "_compiled_patterns", tuple(compiled))

    def ordered_required(self) -> List[str]:
        """Required names in property order, then any others sorted."""
        declared = [name for name in self.properties if name in self.required]
        return declared + sorted(self.required.difference(self.properties))

    def _validate_type_specific(self, value: Dict[str, Any], context: ValidationContext) -> ValidationResult:
        errors = []

        if self.min_properties is not None and len(value) < self.min_properties:
            errors.append(MinPropertiesViolation(self.min_properties, len(value), context.path))

        if self.max_properties is not None and len(value) > self.max_properties:
            errors.append(MaxPropertiesViolation(self.max_properties, len(value), context.path))

        for name in self.ordered_required():
            if name not in value:
                errors.append(MissingField(name, context.path))

        for name, dependencies in self.dependent_required.items():
            if name in value:
                errors.extend(
                    MissingField(dep, context.path) for dep in dependencies if dep not in value
                )

        results = [ValidationResult.of(errors)]

        if self.property_names is not None:
            for key in value:
                results.append(self.property_names.validate(key, context.with_property(key)))

        for name, schema in self.properties.items():
            if name in value:
                results.append(schema.validate(value[name], context.with_property(name)))

        for key, item in value.items():
            if key in self.properties:
                continue

            matched = False
            for regex, schema in self._compiled_patterns:
                if regex.search(key):
                    matched = True
                    results.append(schema.validate(item, context.with_property(key)))

            if matched:
                continue

            if self.additional_properties is False:
                results.append(ValidationResult.of([AdditionalProperty(key, context.path)]))
            elif isinstance(self.additional_properties, Schema):
                results.append(self.additional_properties.validate(item, context.with_property(key)))

        return ValidationResult.combine_all(results)

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": "object"}
        if self.properties:
            schema["properties"] = {
                name: prop.to_json_schema() for name, prop in self.properties.items()
            }
        if self.required:
            schema["required"] = self.ordered_required()
        if self.pattern_properties:
            schema["patternProperties"] = {
                pattern: prop.to_json_schema() for pattern, prop in self.pattern_properties.items()
            }
        if self.additional_properties is False:
            schema["additionalProperties"] = False
        elif isinstance(self.additional_properties, Schema):
            schema["additionalProperties"] = self.additional_properties.to_json_schema()
        if self.min_properties is not None:
            schema["minProperties"] = self.min_properties
        if self.max_properties is not None:
            schema["maxProperties"] = self.max_properties
        if self.property_names is not None:
            schema["propertyNames"] = self.property_names.to_json_schema()
        if self.dependent_required:
            schema["dependentRequired"] = {
                name: list(deps) for name, deps in self.dependent_required.items()
            }
        return schema
