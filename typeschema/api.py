"""
Public API for typeschema: error taxonomy, validation results and the
JsonValidator entrypoint.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Iterable, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from .schemas.base import Schema


class ErrorCode(Enum):
    """Enumeration of validation error codes."""
    TYPE_ERROR = auto()
    NUMBER_OUT_OF_RANGE = auto()
    NUMBER_NOT_MULTIPLE = auto()
    STRING_TOO_SHORT = auto()
    STRING_TOO_LONG = auto()
    PATTERN_MISMATCH = auto()
    FORMAT_INVALID = auto()
    REQUIRED_PROPERTY_MISSING = auto()
    ADDITIONAL_PROPERTY_NOT_ALLOWED = auto()
    OBJECT_TOO_FEW_PROPERTIES = auto()
    OBJECT_TOO_MANY_PROPERTIES = auto()
    ARRAY_TOO_SHORT = auto()
    ARRAY_TOO_LONG = auto()
    ARRAY_ITEMS_NOT_UNIQUE = auto()
    COMPOSITION_FAILED = auto()
    REFERENCE_RESOLUTION_FAILED = auto()


@dataclass(frozen=True)
class ValidationError:
    """
    Base class of the closed validation error taxonomy.

    Every variant carries the JSON Pointer ``path`` of the offending value,
    a class-level ``code`` and a human-readable ``message``.
    """
    code: ClassVar[ErrorCode]

    def __str__(self) -> str:
        return f"Error at '{self.path}': {self.message}"


@dataclass(frozen=True)
class TypeMismatch(ValidationError):
    """The value has the wrong JSON kind, or misses a const/enum pin."""
    expected: str
    actual: str
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.TYPE_ERROR

    @property
    def message(self) -> str:
        return f"Expected {self.expected}, got {self.actual}"


@dataclass(frozen=True)
class OutOfRange(ValidationError):
    """
    A number lies outside one of its bounds.

    Only the violated bound is set; ``exclusive`` marks exclusiveMinimum and
    exclusiveMaximum violations.
    """
    minimum: Optional[float]
    maximum: Optional[float]
    actual: float
    path: str
    exclusive: bool = False
    code: ClassVar[ErrorCode] = ErrorCode.NUMBER_OUT_OF_RANGE

    @property
    def message(self) -> str:
        if self.minimum is not None:
            if self.exclusive:
                return f"Value {self.actual} must be greater than {self.minimum}"
            return f"Value {self.actual} must be greater than or equal to {self.minimum}"
        if self.exclusive:
            return f"Value {self.actual} must be less than {self.maximum}"
        return f"Value {self.actual} must be less than or equal to {self.maximum}"


@dataclass(frozen=True)
class MinLengthViolation(ValidationError):
    min_length: int
    actual: int
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.STRING_TOO_SHORT

    @property
    def message(self) -> str:
        return f"String length is {self.actual}, but minimum is {self.min_length}"


@dataclass(frozen=True)
class MaxLengthViolation(ValidationError):
    max_length: int
    actual: int
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.STRING_TOO_LONG

    @property
    def message(self) -> str:
        return f"String length is {self.actual}, but maximum is {self.max_length}"


@dataclass(frozen=True)
class PatternMismatch(ValidationError):
    pattern: str
    value: str
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.PATTERN_MISMATCH

    @property
    def message(self) -> str:
        return f"String '{self.value}' does not match pattern '{self.pattern}'"


@dataclass(frozen=True)
class InvalidFormat(ValidationError):
    format_name: str
    value: str
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.FORMAT_INVALID

    @property
    def message(self) -> str:
        return f"String '{self.value}' is not a valid {self.format_name}"


@dataclass(frozen=True)
class MultipleOfViolation(ValidationError):
    multiple_of: float
    value: float
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.NUMBER_NOT_MULTIPLE

    @property
    def message(self) -> str:
        return f"Value {self.value} is not a multiple of {self.multiple_of}"


@dataclass(frozen=True)
class MissingField(ValidationError):
    name: str
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.REQUIRED_PROPERTY_MISSING

    @property
    def message(self) -> str:
        return f"Missing required property '{self.name}'"


@dataclass(frozen=True)
class AdditionalProperty(ValidationError):
    name: str
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED

    @property
    def message(self) -> str:
        return f"Additional property '{self.name}' not allowed"


@dataclass(frozen=True)
class CompositionError(ValidationError):
    """A composition keyword (anyOf, oneOf, not, contains) was not satisfied."""
    message: str
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.COMPOSITION_FAILED


@dataclass(frozen=True)
class MinItemsViolation(ValidationError):
    min_items: int
    actual: int
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.ARRAY_TOO_SHORT

    @property
    def message(self) -> str:
        return f"Array has {self.actual} items, but minimum is {self.min_items}"


@dataclass(frozen=True)
class MaxItemsViolation(ValidationError):
    max_items: int
    actual: int
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.ARRAY_TOO_LONG

    @property
    def message(self) -> str:
        return f"Array has {self.actual} items, but maximum is {self.max_items}"


@dataclass(frozen=True)
class UniqueViolation(ValidationError):
    index: int
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.ARRAY_ITEMS_NOT_UNIQUE

    @property
    def message(self) -> str:
        return f"Array items must be unique (duplicate at index {self.index})"


@dataclass(frozen=True)
class MinPropertiesViolation(ValidationError):
    min_properties: int
    actual: int
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.OBJECT_TOO_FEW_PROPERTIES

    @property
    def message(self) -> str:
        return f"Object has {self.actual} properties, but minimum is {self.min_properties}"


@dataclass(frozen=True)
class MaxPropertiesViolation(ValidationError):
    max_properties: int
    actual: int
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.OBJECT_TOO_MANY_PROPERTIES

    @property
    def message(self) -> str:
        return f"Object has {self.actual} properties, but maximum is {self.max_properties}"


@dataclass(frozen=True)
class UnresolvedReference(ValidationError):
    ref: str
    path: str
    code: ClassVar[ErrorCode] = ErrorCode.REFERENCE_RESOLUTION_FAILED

    @property
    def message(self) -> str:
        return f"Could not resolve reference '{self.ref}'"


class ValidationResult:
    """
    Result of schema validation: either ``Valid`` or ``Invalid(errors)``.

    Results form a monoid under ``combine``. ``Valid`` is the identity and
    combining two ``Invalid`` results concatenates their errors in order.
    """
    errors: Tuple[ValidationError, ...]

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.valid

    def combine(self, other: "ValidationResult") -> "ValidationResult":
        """
        Combine two results, keeping errors in discovery order.

        Args:
            other: Result to append

        Returns:
            The combined result
        """
        if not self.errors:
            return other
        if not other.errors:
            return self
        return Invalid(self.errors + other.errors)

    @staticmethod
    def of(errors: Iterable[ValidationError]) -> "ValidationResult":
        """Build ``Valid`` for no errors, ``Invalid`` otherwise."""
        errors = tuple(errors)
        return Invalid(errors) if errors else VALID

    @staticmethod
    def combine_all(results: Iterable["ValidationResult"]) -> "ValidationResult":
        """Fold results left to right with ``combine``."""
        combined: ValidationResult = VALID
        for result in results:
            combined = combined.combine(result)
        return combined


@dataclass(frozen=True)
class Valid(ValidationResult):
    errors: ClassVar[Tuple[ValidationError, ...]] = ()

    def __repr__(self) -> str:
        return "Valid()"


@dataclass(frozen=True)
class Invalid(ValidationResult):
    errors: Tuple[ValidationError, ...]

    def __post_init__(self):
        object.__setattr__(self, "errors", tuple(self.errors))
        if not self.errors:
            raise ValueError("Invalid requires at least one error")


VALID = Valid()


class SchemaError(ValueError):
    """Raised when a schema or schema document is malformed."""


class SchemaDerivationError(SchemaError):
    """
    Raised when a schema cannot be derived from a Python type.

    Attributes:
        issues: One message per offending type or field
    """

    def __init__(self, issues: Union[str, List[str]]):
        self.issues = [issues] if isinstance(issues, str) else list(issues)
        super().__init__("Cannot derive schema: " + "; ".join(self.issues))


class JsonValidator:
    """
    Main entrypoint class for JSON validation.

    This class validates JSON data against either a Schema value or a JSON
    Schema document, compiling documents before validation.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize a new JSON validator.

        Args:
            verbose: Whether to log every validation error at debug level
        """
        from .schema_compiler import SchemaCompiler
        from .validator import Validator

        self.verbose = verbose
        self.schema_compiler = SchemaCompiler()
        self.validator = Validator(verbose=verbose)

    def validate(self, data: Any, schema: Union["Schema", Dict[str, Any], bool]) -> ValidationResult:
        """
        Validate data against a schema.

        Args:
            data: The data to validate
            schema: A Schema value or a JSON Schema document

        Returns:
            ValidationResult containing validation status and any errors
        """
        if isinstance(schema, (dict, bool)):
            schema = self.schema_compiler.compile(schema)

        return self.validator.validate(data, schema)
