"""
Logical composition schemas (allOf, anyOf, oneOf, not).
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .base import Schema, ValidationContext
from ..api import VALID, CompositionError, Invalid, ValidationResult


class CompositeSchema(Schema):
    """Base class for schemas composed of a list of sub-schemas."""
    keyword = ""

    def __post_init__(self):
        object.__setattr__(self, "schemas", tuple(self.schemas))

    def to_json_schema(self) -> Dict[str, Any]:
        return {self.keyword: [schema.to_json_schema() for schema in self.schemas]}


@dataclass(frozen=True)
class AllOfSchema(CompositeSchema):
    """Value must satisfy every sub-schema; an empty list accepts everything."""
    schemas: Tuple[Schema, ...]
    keyword = "allOf"

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        return ValidationResult.combine_all(schema.validate(value, context) for schema in self.schemas)


@dataclass(frozen=True)
class AnyOfSchema(CompositeSchema):
    """
    Value must satisfy at least one sub-schema.

    When no branch matches, the errors of every branch are reported.
    """
    schemas: Tuple[Schema, ...]
    keyword = "anyOf"

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        if not self.schemas:
            return Invalid((CompositionError("Value does not match any of the schemas in anyOf", context.path),))

        results = []
        for schema in self.schemas:
            result = schema.validate(value, context)
            if result.valid:
                return VALID
            results.append(result)

        return ValidationResult.combine_all(results)


@dataclass(frozen=True)
class OneOfSchema(CompositeSchema):
    """
    Value must satisfy exactly one sub-schema.

    Every branch is evaluated, even after a second match, so ambiguity is
    always detected. Branch errors are not reported.
    """
    schemas: Tuple[Schema, ...]
    keyword = "oneOf"

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        matches = [schema.validate(value, context).valid for schema in self.schemas].count(True)

        if matches == 1:
            return VALID
        if matches == 0:
            return Invalid((CompositionError("Value does not match any of the schemas in oneOf", context.path),))
        return Invalid((CompositionError(
            f"Value matches more than one schema in oneOf ({matches} matches)", context.path
        ),))


@dataclass(frozen=True)
class NotSchema(Schema):
    """Value must not satisfy the inner schema."""
    schema: Schema

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        if self.schema.validate(value, context).valid:
            return Invalid((CompositionError("Value must NOT match the schema", context.path),))
        return VALID

    def to_json_schema(self) -> Dict[str, Any]:
        return {"not": self.schema.to_json_schema()}
