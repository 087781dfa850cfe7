"""
Enum schema implementation.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .base import Schema, ValidationContext
from ..api import VALID, Invalid, TypeMismatch, ValidationResult
from ..utils import TypeUtils


@dataclass(frozen=True)
class EnumSchema(Schema):
    """
    Schema accepting one of a fixed, ordered list of JSON values.

    Values may be heterogeneous; membership uses JSON equality, so ``True``
    never matches ``1``.
    """
    values: Tuple[Any, ...]

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        if any(TypeUtils.json_equal(allowed, value) for allowed in self.values):
            return VALID

        expected = "one of " + ", ".join(TypeUtils.describe(v) for v in self.values)
        return Invalid((TypeMismatch(expected, TypeUtils.describe(value), context.path),))

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {}
        if self.values and all(isinstance(v, str) for v in self.values):
            schema["type"] = "string"
        schema["enum"] = list(self.values)
        return schema
