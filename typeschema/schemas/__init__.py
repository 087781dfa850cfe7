"""
Schema package initialization.
"""

from .base import Schema, TypedSchema, ValidationContext
from .strings import StringSchema
from .numbers import NumberSchema, IntegerSchema
from .booleans import BooleanSchema
from .nulls import NullSchema
from .enums import EnumSchema
from .types import AnySchema
from .arrays import ArraySchema
from .objects import ObjectSchema
from .logical import AllOfSchema, AnyOfSchema, OneOfSchema, NotSchema
from .conditional import IfThenElseSchema
from .references import RefSchema
from .modifiers import (
    ModifierSchema,
    OptionalSchema,
    NullableSchema,
    DefaultSchema,
    TitleSchema,
    DescriptionSchema,
    ExamplesSchema,
    DeprecatedSchema,
    ReadOnlySchema,
    WriteOnlySchema,
    DefsSchema,
    IdSchema,
    DialectSchema,
)

__all__ = [
    "Schema",
    "TypedSchema",
    "ValidationContext",
    "StringSchema",
    "NumberSchema",
    "IntegerSchema",
    "BooleanSchema",
    "NullSchema",
    "EnumSchema",
    "AnySchema",
    "ArraySchema",
    "ObjectSchema",
    "AllOfSchema",
    "AnyOfSchema",
    "OneOfSchema",
    "NotSchema",
    "IfThenElseSchema",
    "RefSchema",
    "ModifierSchema",
    "OptionalSchema",
    "NullableSchema",
    "DefaultSchema",
    "TitleSchema",
    "DescriptionSchema",
    "ExamplesSchema",
    "DeprecatedSchema",
    "ReadOnlySchema",
    "WriteOnlySchema",
    "DefsSchema",
    "IdSchema",
    "DialectSchema",
]
