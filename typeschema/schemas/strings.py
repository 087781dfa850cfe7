"""
String schema implementation.
"""

import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Pattern, Tuple

from .base import TypedSchema, ValidationContext, const_errors
from ..api import (
    InvalidFormat,
    MaxLengthViolation,
    MinLengthViolation,
    PatternMismatch,
    SchemaError,
    TypeMismatch,
    ValidationResult,
)
from ..utils import TypeUtils, check_format


@dataclass(frozen=True)
class StringSchema(TypedSchema):
    """
    Schema for string values.

    Attributes:
        min_length: Minimum length in code points
        max_length: Maximum length in code points
        pattern: Regular expression searched anywhere in the string
        format: Named format such as "email" or "date-time"
        const: Single allowed value
        enum: Allowed values
    """
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    const: Optional[str] = None
    enum: Optional[Tuple[str, ...]] = None
    _compiled_pattern: Optional[Pattern] = field(default=None, init=False, repr=False, compare=False)

    json_type: ClassVar[str] = "string"

    def __post_init__(self):
        if self.enum is not None:
            object.__setattr__(self, "enum", tuple(self.enum))

        # Compile the pattern once
        if self.pattern is not None:
            try:
                object.__setattr__(self, "_compiled_pattern", re.compile(self.pattern))
            except re.error as e:
                raise SchemaError(f"Invalid regex pattern '{self.pattern}': {e}") from e

    def _validate_type_specific(self, value: str, context: ValidationContext) -> ValidationResult:
        errors = []

        if self.min_length is not None and len(value) < self.min_length:
            errors.append(MinLengthViolation(self.min_length, len(value), context.path))

        if self.max_length is not None and len(value) > self.max_length:
            errors.append(MaxLengthViolation(self.max_length, len(value), context.path))

        if self._compiled_pattern is not None and not self._compiled_pattern.search(value):
            errors.append(PatternMismatch(self.pattern, value, context.path))

        if self.const is not None:
            errors.extend(const_errors(self.const, value, context))

        if self.enum is not None and value not in self.enum:
            expected = "one of " + ", ".join(TypeUtils.describe(v) for v in self.enum)
            errors.append(TypeMismatch(expected, TypeUtils.describe(value), context.path))

        if self.format is not None and not check_format(self.format, value):
            errors.append(InvalidFormat(self.format, value, context.path))

        return ValidationResult.of(errors)

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": "string"}
        if self.min_length is not None:
            schema["minLength"] = self.min_length
        if self.max_length is not None:
            schema["maxLength"] = self.max_length
        if self.pattern is not None:
            schema["pattern"] = self.pattern
        if self.format is not None:
            schema["format"] = self.format
        if self.const is not None:
            schema["const"] = self.const
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        return schema
