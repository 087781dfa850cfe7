"""
Boolean schema implementation.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from .base import TypedSchema, ValidationContext, const_errors
from ..api import ValidationResult


@dataclass(frozen=True)
class BooleanSchema(TypedSchema):
    """
    Schema for boolean values, optionally pinned to one value.
    """
    const: Optional[bool] = None

    json_type: ClassVar[str] = "boolean"

    def _validate_type_specific(self, value: bool, context: ValidationContext) -> ValidationResult:
        if self.const is None:
            return ValidationResult.of(())
        return ValidationResult.of(const_errors(self.const, value, context))

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": "boolean"}
        if self.const is not None:
            schema["const"] = self.const
        return schema
