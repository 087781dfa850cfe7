"""
Base schema classes for typeschema.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from ..api import TypeMismatch, ValidationError, ValidationResult, Invalid
from ..utils import JsonPointer, TypeUtils


@dataclass(frozen=True)
class ValidationContext:
    """
    Context for validation operations.

    Contexts are immutable: descending into a property or array element
    returns a new context, so sibling branches never see each other's path.

    Attributes:
        path: JSON Pointer of the value being validated
        root_schema: Schema whose $defs are used to resolve local references
    """
    path: str = JsonPointer.ROOT
    root_schema: Optional["Schema"] = field(default=None, compare=False, repr=False)

    def with_property(self, name: str) -> "ValidationContext":
        """Return a context for the named property of the current object."""
        return replace(self, path=JsonPointer.append(self.path, name))

    def with_index(self, index: int) -> "ValidationContext":
        """Return a context for the given element of the current array."""
        return replace(self, path=JsonPointer.append(self.path, index))

    def with_root_schema(self, schema: "Schema") -> "ValidationContext":
        """Return a context that resolves references against ``schema``."""
        return replace(self, root_schema=schema)

    def resolve_ref(self, ref: str) -> Optional["Schema"]:
        """
        Resolve a local reference against the root schema.

        Args:
            ref: "#" or "#/$defs/<name>" (also "#/definitions/<name>")

        Returns:
            The referenced schema, or None if it cannot be resolved
        """
        if self.root_schema is None:
            return None
        if ref == "#":
            return self.root_schema
        if not ref.startswith("#/"):
            return None

        parts = JsonPointer.to_parts(ref[1:])
        if len(parts) != 2 or parts[0] not in ("$defs", "definitions"):
            return None

        definitions = self.root_schema.definitions or {}
        return definitions.get(parts[1])


class Schema(ABC):
    """
    Abstract base class for all schemas.

    A schema is an immutable value that validates JSON values and serializes
    itself to a JSON Schema 2020-12 document. Metadata accessors return None
    unless a modifier wrapper supplies the value.
    """

    def validate(self, value: Any, context: Optional[ValidationContext] = None) -> ValidationResult:
        """
        Validate a JSON value against this schema.

        Args:
            value: The value to validate
            context: Validation context, defaults to a root context bound
                to this schema

        Returns:
            ValidationResult with every violation found
        """
        if context is None:
            context = ValidationContext(root_schema=self)
        elif context.root_schema is None:
            context = context.with_root_schema(self)
        return self._validate(value, context)

    @abstractmethod
    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        pass

    @abstractmethod
    def to_json_schema(self) -> Dict[str, Any]:
        """
        Serialize this schema to a fresh JSON Schema document.

        Returns:
            JSON Schema 2020-12 document as a dict
        """
        pass

    @property
    def title(self) -> Optional[str]:
        return None

    @property
    def description(self) -> Optional[str]:
        return None

    @property
    def default(self) -> Any:
        return None

    @property
    def has_default(self) -> bool:
        return False

    @property
    def examples(self) -> Optional[Tuple[Any, ...]]:
        return None

    @property
    def deprecated(self) -> Optional[bool]:
        return None

    @property
    def read_only(self) -> Optional[bool]:
        return None

    @property
    def write_only(self) -> Optional[bool]:
        return None

    @property
    def id(self) -> Optional[str]:
        return None

    @property
    def dialect(self) -> Optional[str]:
        return None

    @property
    def definitions(self) -> Optional[Mapping[str, "Schema"]]:
        return None

    def optional(self) -> "Schema":
        from .modifiers import OptionalSchema
        return OptionalSchema(self)

    def nullable(self) -> "Schema":
        from .modifiers import NullableSchema
        return NullableSchema(self)

    def with_default(self, value: Any) -> "Schema":
        from .modifiers import DefaultSchema
        return DefaultSchema(self, value)

    def with_title(self, text: str) -> "Schema":
        from .modifiers import TitleSchema
        return TitleSchema(self, text)

    def with_description(self, text: str) -> "Schema":
        from .modifiers import DescriptionSchema
        return DescriptionSchema(self, text)

    def with_examples(self, *values: Any) -> "Schema":
        from .modifiers import ExamplesSchema
        return ExamplesSchema(self, values)

    def with_defs(self, **defs: "Schema") -> "Schema":
        from .modifiers import DefsSchema
        return DefsSchema(self, defs)

    def with_id(self, uri: str) -> "Schema":
        from .modifiers import IdSchema
        return IdSchema(self, uri)

    def with_dialect(self, uri: str = "https://json-schema.org/draft/2020-12/schema") -> "Schema":
        from .modifiers import DialectSchema
        return DialectSchema(self, uri)

    def as_deprecated(self, flag: bool = True) -> "Schema":
        from .modifiers import DeprecatedSchema
        return DeprecatedSchema(self, flag)

    def as_read_only(self, flag: bool = True) -> "Schema":
        from .modifiers import ReadOnlySchema
        return ReadOnlySchema(self, flag)

    def as_write_only(self, flag: bool = True) -> "Schema":
        from .modifiers import WriteOnlySchema
        return WriteOnlySchema(self, flag)


class TypedSchema(Schema):
    """
    Base class for schemas bound to a single JSON type.

    The JSON kind is checked first; a mismatch short-circuits every other
    constraint of the node.
    """
    json_type: ClassVar[str]

    def _matches_type(self, value: Any) -> bool:
        return TypeUtils.get_json_type(value) == self.json_type

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        if not self._matches_type(value):
            return Invalid((TypeMismatch(self.json_type, TypeUtils.get_json_type(value), context.path),))
        return self._validate_type_specific(value, context)

    @abstractmethod
    def _validate_type_specific(self, value: Any, context: ValidationContext) -> ValidationResult:
        """
        Validate type-specific constraints.

        Args:
            value: The value to validate (guaranteed to be of the right type)
            context: Validation context

        Returns:
            ValidationResult for the type-specific constraints
        """
        pass


def const_errors(const: Any, value: Any, context: ValidationContext) -> List[ValidationError]:
    """Report a const pin violation as a TypeMismatch, if any."""
    if TypeUtils.json_equal(const, value):
        return []
    return [TypeMismatch(TypeUtils.describe(const), TypeUtils.describe(value), context.path)]
