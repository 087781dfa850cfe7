"""
Schema accepting any JSON value.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .base import Schema, ValidationContext
from ..api import VALID, ValidationResult


@dataclass(frozen=True)
class AnySchema(Schema):
    """The empty schema ``{}``, which every value satisfies."""

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        return VALID

    def to_json_schema(self) -> Dict[str, Any]:
        return {}
