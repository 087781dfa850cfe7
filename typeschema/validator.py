"""
Validation engine entry point.
"""

import logging
from typing import Any, Optional

from .schemas import Schema, ValidationContext
from .api import ValidationResult

logger = logging.getLogger("typeschema")


def validate(schema: Schema, value: Any, context: Optional[ValidationContext] = None) -> ValidationResult:
    """
    Validate a JSON value against a schema.

    Args:
        schema: Schema to validate against
        value: JSON value (as produced by ``json.loads``)
        context: Starting context, defaults to the document root

    Returns:
        ValidationResult with every violation in discovery order
    """
    if context is None:
        context = ValidationContext(root_schema=schema)
    return schema.validate(value, context)


class Validator:
    """
    Validates data against schemas.

    Validation itself is pure; this class only adds logging around it.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize a new validator.

        Args:
            verbose: Whether to log every validation error at debug level
        """
        self.verbose = verbose

        if verbose:
            logger.setLevel(logging.DEBUG)

    def validate(self, data: Any, schema: Schema) -> ValidationResult:
        """
        Validate data against a schema.

        Args:
            data: Data to validate
            schema: Schema to validate against

        Returns:
            ValidationResult containing validation status and errors
        """
        result = validate(schema, data)

        if not result.valid:
            logger.debug(f"Validation failed with {len(result.errors)} error(s)")
            if self.verbose:
                for error in result.errors:
                    logger.debug(f"  - {error}")

        return result
