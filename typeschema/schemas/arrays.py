"""
Array schema implementation.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from .base import Schema, TypedSchema, ValidationContext
from ..api import (
    CompositionError,
    MaxItemsViolation,
    MinItemsViolation,
    UniqueViolation,
    ValidationResult,
)
from ..utils import TypeUtils


@dataclass(frozen=True)
class ArraySchema(TypedSchema):
    """
    Schema for array values.

    Attributes:
        items: Schema for elements past the prefix, None accepts any element
        prefix_items: Positional schemas for the leading elements (tuple mode)
        min_items: Minimum number of elements
        max_items: Maximum number of elements
        unique_items: Whether all elements must be distinct
        contains: Schema that some elements must satisfy
        min_contains: Minimum number of matching elements (1 when unset)
        max_contains: Maximum number of matching elements
    """
    items: Optional[Schema] = None
    prefix_items: Optional[Tuple[Schema, ...]] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    unique_items: bool = False
    contains: Optional[Schema] = None
    min_contains: Optional[int] = None
    max_contains: Optional[int] = None

    json_type: ClassVar[str] = "array"

    def __post_init__(self):
        if self.prefix_items is not None:
            object.__setattr__(self, "prefix_items", tuple(self.prefix_items))

    def _validate_type_specific(self, value: List[Any], context: ValidationContext) -> ValidationResult:
        errors = []

        if self.min_items is not None and len(value) < self.min_items:
            errors.append(MinItemsViolation(self.min_items, len(value), context.path))

        if self.max_items is not None and len(value) > self.max_items:
            errors.append(MaxItemsViolation(self.max_items, len(value), context.path))

        if self.unique_items:
            duplicate = self._first_duplicate(value)
            if duplicate is not None:
                errors.append(UniqueViolation(duplicate, context.path))

        results = [ValidationResult.of(errors)]

        prefix = self.prefix_items or ()
        for i, item in enumerate(value):
            if i < len(prefix):
                results.append(prefix[i].validate(item, context.with_index(i)))
            elif self.items is not None:
                results.append(self.items.validate(item, context.with_index(i)))

        if self.contains is not None:
            results.append(self._validate_contains(value, context))

        return ValidationResult.combine_all(results)

    @staticmethod
    def _first_duplicate(value: List[Any]) -> Optional[int]:
        for j in range(1, len(value)):
            for i in range(j):
                if TypeUtils.json_equal(value[i], value[j]):
                    return j
        return None

    def _validate_contains(self, value: List[Any], context: ValidationContext) -> ValidationResult:
        matches = sum(
            1 for i, item in enumerate(value)
            if self.contains.validate(item, context.with_index(i)).valid
        )

        minimum = 1 if self.min_contains is None else self.min_contains
        if matches < minimum:
            return ValidationResult.of([CompositionError(
                f"Array must contain at least {minimum} matching item(s), found {matches}",
                context.path
            )])

        if self.max_contains is not None and matches > self.max_contains:
            return ValidationResult.of([CompositionError(
                f"Array must contain at most {self.max_contains} matching item(s), found {matches}",
                context.path
            )])

        return ValidationResult.of(())

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": "array"}
        if self.prefix_items is not None:
            schema["prefixItems"] = [item.to_json_schema() for item in self.prefix_items]
        if self.items is not None:
            schema["items"] = self.items.to_json_schema()
        if self.min_items is not None:
            schema["minItems"] = self.min_items
        if self.max_items is not None:
            schema["maxItems"] = self.max_items
        if self.unique_items:
            schema["uniqueItems"] = True
        if self.contains is not None:
            schema["contains"] = self.contains.to_json_schema()
        if self.min_contains is not None:
            schema["minContains"] = self.min_contains
        if self.max_contains is not None:
            schema["maxContains"] = self.max_contains
        return schema
