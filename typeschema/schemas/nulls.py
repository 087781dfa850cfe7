"""
Null schema implementation.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict

from .base import TypedSchema, ValidationContext
from ..api import VALID, ValidationResult


@dataclass(frozen=True)
class NullSchema(TypedSchema):
    """Schema accepting only null."""

    json_type: ClassVar[str] = "null"

    def _validate_type_specific(self, value: None, context: ValidationContext) -> ValidationResult:
        return VALID

    def to_json_schema(self) -> Dict[str, Any]:
        return {"type": "null"}
