"""
Local reference ($ref) schema implementation.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from .base import Schema, ValidationContext
from ..api import Invalid, UnresolvedReference, ValidationResult

logger = logging.getLogger("typeschema")


@dataclass(frozen=True)
class RefSchema(Schema):
    """
    Reference to another schema in the same document.

    Only local references are supported: "#" for the root schema and
    "#/$defs/<name>" for a definition on the root schema.
    """
    ref: str

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        target = context.resolve_ref(self.ref)
        if target is None:
            logger.debug(f"Unresolved reference {self.ref} at {context.path}")
            return Invalid((UnresolvedReference(self.ref, context.path),))
        return target.validate(value, context)

    def to_json_schema(self) -> Dict[str, Any]:
        return {"$ref": self.ref}
