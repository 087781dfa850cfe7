"""
Number and integer schema implementations.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Any, ClassVar, Dict, Optional, Union

from .base import TypedSchema, ValidationContext, const_errors
from ..api import MultipleOfViolation, OutOfRange, ValidationResult
from ..utils import TypeUtils

Numeric = Union[int, float]


def _is_multiple(value: Numeric, multiple_of: Numeric) -> bool:
    if isinstance(value, float) or isinstance(multiple_of, float):
        try:
            remainder = value % multiple_of
        except OverflowError:
            # Integer too large for a float; compare exactly
            return Fraction(value) % Fraction(str(multiple_of)) == 0
        # Handle floating point precision issues
        return remainder < 1e-10 or abs(remainder - multiple_of) < 1e-10
    return value % multiple_of == 0


@dataclass(frozen=True)
class NumberSchema(TypedSchema):
    """
    Schema for numeric values.

    Attributes:
        minimum: Inclusive lower bound
        maximum: Inclusive upper bound
        exclusive_minimum: Exclusive lower bound
        exclusive_maximum: Exclusive upper bound
        multiple_of: Value must be a multiple of this number
        const: Single allowed value
    """
    minimum: Optional[Numeric] = None
    maximum: Optional[Numeric] = None
    exclusive_minimum: Optional[Numeric] = None
    exclusive_maximum: Optional[Numeric] = None
    multiple_of: Optional[Numeric] = None
    const: Optional[Numeric] = None

    json_type: ClassVar[str] = "number"

    def _matches_type(self, value: Any) -> bool:
        return TypeUtils.is_number(value)

    def _validate_type_specific(self, value: Numeric, context: ValidationContext) -> ValidationResult:
        errors = []

        if self.minimum is not None and value < self.minimum:
            errors.append(OutOfRange(self.minimum, None, value, context.path))

        if self.maximum is not None and value > self.maximum:
            errors.append(OutOfRange(None, self.maximum, value, context.path))

        if self.exclusive_minimum is not None and value <= self.exclusive_minimum:
            errors.append(OutOfRange(self.exclusive_minimum, None, value, context.path, exclusive=True))

        if self.exclusive_maximum is not None and value >= self.exclusive_maximum:
            errors.append(OutOfRange(None, self.exclusive_maximum, value, context.path, exclusive=True))

        if self.multiple_of is not None and not _is_multiple(value, self.multiple_of):
            errors.append(MultipleOfViolation(self.multiple_of, value, context.path))

        if self.const is not None:
            errors.extend(const_errors(self.const, value, context))

        return ValidationResult.of(errors)

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.json_type}
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        if self.exclusive_minimum is not None:
            schema["exclusiveMinimum"] = self.exclusive_minimum
        if self.exclusive_maximum is not None:
            schema["exclusiveMaximum"] = self.exclusive_maximum
        if self.multiple_of is not None:
            schema["multipleOf"] = self.multiple_of
        if self.const is not None:
            schema["const"] = self.const
        return schema


@dataclass(frozen=True)
class IntegerSchema(NumberSchema):
    """
    Schema for integer values.

    Floats with no fractional part (``5.0``) are integers in JSON.
    """
    json_type: ClassVar[str] = "integer"

    def _matches_type(self, value: Any) -> bool:
        if isinstance(value, float):
            return value.is_integer()
        return TypeUtils.is_number(value)
