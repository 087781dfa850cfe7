"""
Conditional (if/then/else) schema implementation.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import Schema, ValidationContext
from ..api import VALID, ValidationResult


@dataclass(frozen=True)
class IfThenElseSchema(Schema):
    """
    Applies ``then_schema`` when the value satisfies ``condition`` and
    ``else_schema`` otherwise. The condition's own errors are never reported.
    """
    condition: Schema
    then_schema: Optional[Schema] = None
    else_schema: Optional[Schema] = None

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        branch = self.then_schema if self.condition.validate(value, context).valid else self.else_schema
        if branch is None:
            return VALID
        return branch.validate(value, context)

    def to_json_schema(self) -> Dict[str, Any]:
        schema = {"if": self.condition.to_json_schema()}
        if self.then_schema is not None:
            schema["then"] = self.then_schema.to_json_schema()
        if self.else_schema is not None:
            schema["else"] = self.else_schema.to_json_schema()
        return schema
