#!/usr/bin/env python3
"""
typeschema

Immutable JSON Schema 2020-12 values that validate JSON documents with
exact JSON Pointer error paths, serialize to canonical schema documents,
and can be derived from Python dataclasses, TypedDicts, enums and
collection types.
"""

import logging

from .api import (
    ErrorCode,
    ValidationError,
    TypeMismatch,
    OutOfRange,
    MinLengthViolation,
    MaxLengthViolation,
    PatternMismatch,
    InvalidFormat,
    MultipleOfViolation,
    MissingField,
    AdditionalProperty,
    CompositionError,
    MinItemsViolation,
    MaxItemsViolation,
    UniqueViolation,
    MinPropertiesViolation,
    MaxPropertiesViolation,
    UnresolvedReference,
    ValidationResult,
    Valid,
    Invalid,
    VALID,
    SchemaError,
    SchemaDerivationError,
    JsonValidator,
)
from .schemas import *  # noqa: F401,F403
from .schemas import __all__ as _schema_exports
from .validator import Validator, validate
from .schema_compiler import SchemaCompiler
from .derivation import derive, derive_structure, apply_metadata, schema_metadata
from .version import __version__

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("typeschema")

# Export public classes and functions
__all__ = [
    "ErrorCode",
    "ValidationError",
    "TypeMismatch",
    "OutOfRange",
    "MinLengthViolation",
    "MaxLengthViolation",
    "PatternMismatch",
    "InvalidFormat",
    "MultipleOfViolation",
    "MissingField",
    "AdditionalProperty",
    "CompositionError",
    "MinItemsViolation",
    "MaxItemsViolation",
    "UniqueViolation",
    "MinPropertiesViolation",
    "MaxPropertiesViolation",
    "UnresolvedReference",
    "ValidationResult",
    "Valid",
    "Invalid",
    "VALID",
    "SchemaError",
    "SchemaDerivationError",
    "JsonValidator",
    "Validator",
    "validate",
    "SchemaCompiler",
    "derive",
    "derive_structure",
    "apply_metadata",
    "schema_metadata",
    "__version__",
] + list(_schema_exports)
