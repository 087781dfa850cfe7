"""
Schema derivation from Python types.

Derivation runs in two phases: ``derive_structure`` maps the shape of a
type to a schema, then ``apply_metadata`` overlays the annotations declared
on it. ``derive`` runs both.
"""

import logging
from typing import Any

from ..schemas import Schema
from .annotations import (
    SchemaAnnotation,
    ConstraintAnnotation,
    MetadataAnnotation,
    Title,
    Description,
    Format,
    MinLength,
    MaxLength,
    Pattern,
    Minimum,
    Maximum,
    ExclusiveMinimum,
    ExclusiveMaximum,
    MultipleOf,
    MinItems,
    MaxItems,
    UniqueItems,
    EnumValues,
    Const,
    Default,
    Examples,
    Deprecated,
    ReadOnly,
    WriteOnly,
    schema_metadata,
)
from .structural import derive_structure
from .overlay import apply_metadata

logger = logging.getLogger("typeschema")


def derive(tp: Any) -> Schema:
    """
    Derive the schema of a Python type.

    Args:
        tp: A dataclass, TypedDict, Enum, Literal, collection or primitive type

    Returns:
        The derived schema, metadata included

    Raises:
        SchemaDerivationError: If the type is unsupported or carries
            annotations incompatible with its fields
    """
    logger.debug(f"Deriving schema for {tp!r}")
    return apply_metadata(derive_structure(tp), tp)


__all__ = [
    "derive",
    "derive_structure",
    "apply_metadata",
    "schema_metadata",
    "SchemaAnnotation",
    "ConstraintAnnotation",
    "MetadataAnnotation",
    "Title",
    "Description",
    "Format",
    "MinLength",
    "MaxLength",
    "Pattern",
    "Minimum",
    "Maximum",
    "ExclusiveMinimum",
    "ExclusiveMaximum",
    "MultipleOf",
    "MinItems",
    "MaxItems",
    "UniqueItems",
    "EnumValues",
    "Const",
    "Default",
    "Examples",
    "Deprecated",
    "ReadOnly",
    "WriteOnly",
]
