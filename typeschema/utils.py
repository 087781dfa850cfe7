"""
Utility classes and functions for typeschema.
"""

import ipaddress
import re
import uuid
from datetime import date, datetime, time
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlparse


class JsonPointer:
    """
    Utility class for handling JSON Pointers (RFC 6901).

    Validation paths are JSON Pointers rooted at "/", so the document root
    itself is reported as "/" and nested locations as "/a/0/b".
    """

    ROOT = "/"

    @staticmethod
    def from_parts(parts: List[Any]) -> str:
        """
        Create a JSON Pointer from path parts.

        Args:
            parts: List of path segments

        Returns:
            JSON Pointer string, "/" for an empty list
        """
        if not parts:
            return JsonPointer.ROOT

        return "/" + "/".join(JsonPointer.escape_part(part) for part in parts)

    @staticmethod
    def append(pointer: str, part: Any) -> str:
        """
        Append one segment to an existing pointer.

        Args:
            pointer: Base JSON Pointer
            part: Property name or array index to append

        Returns:
            Extended JSON Pointer string
        """
        escaped = JsonPointer.escape_part(part)
        if not pointer or pointer == JsonPointer.ROOT:
            return "/" + escaped
        return f"{pointer}/{escaped}"

    @staticmethod
    def escape_part(part: Any) -> str:
        """
        Escape a JSON Pointer path segment.

        Args:
            part: Path segment to escape

        Returns:
            Escaped path segment
        """
        # Replace ~ with ~0 and / with ~1
        return str(part).replace("~", "~0").replace("/", "~1")

    @staticmethod
    def unescape_part(part: str) -> str:
        """
        Unescape a JSON Pointer path segment.

        Args:
            part: Escaped path segment

        Returns:
            Unescaped path segment
        """
        return part.replace("~1", "/").replace("~0", "~")

    @staticmethod
    def to_parts(pointer: str) -> List[str]:
        """
        Split a JSON Pointer into its component parts.

        Args:
            pointer: JSON Pointer string

        Returns:
            List of path segments

        Raises:
            ValueError: If the pointer does not start with "/"
        """
        if not pointer or pointer == JsonPointer.ROOT:
            return []

        if not pointer.startswith("/"):
            raise ValueError(f"Invalid JSON Pointer: {pointer}")

        return [JsonPointer.unescape_part(part) for part in pointer[1:].split("/")]


class TypeUtils:
    """Utilities for working with JSON value kinds."""

    @staticmethod
    def get_json_type(value: Any) -> str:
        """
        Get the JSON Schema type for a Python value.

        Args:
            value: Python value

        Returns:
            JSON Schema type name
        """
        if value is None:
            return "null"
        elif isinstance(value, bool):
            return "boolean"
        elif isinstance(value, int):
            return "integer"
        elif isinstance(value, float):
            return "number"
        elif isinstance(value, str):
            return "string"
        elif isinstance(value, list):
            return "array"
        elif isinstance(value, dict):
            return "object"
        else:
            return "unknown"

    @staticmethod
    def is_number(value: Any) -> bool:
        """Check for a JSON number, which a Python bool never is."""
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    @staticmethod
    def json_equal(left: Any, right: Any) -> bool:
        """
        Compare two JSON values structurally.

        Booleans never equal numbers, while integers and floats compare by
        numeric value (1 == 1.0).

        Args:
            left: First JSON value
            right: Second JSON value

        Returns:
            True if the values are the same JSON value
        """
        if isinstance(left, bool) or isinstance(right, bool):
            return isinstance(left, bool) and isinstance(right, bool) and left == right

        if TypeUtils.is_number(left) and TypeUtils.is_number(right):
            return left == right

        if isinstance(left, list) and isinstance(right, list):
            return len(left) == len(right) and all(
                TypeUtils.json_equal(a, b) for a, b in zip(left, right)
            )

        if isinstance(left, dict) and isinstance(right, dict):
            return left.keys() == right.keys() and all(
                TypeUtils.json_equal(left[key], right[key]) for key in left
            )

        return type(left) is type(right) and left == right

    @staticmethod
    def describe(value: Any) -> str:
        """Render a JSON value the way it would appear in a document."""
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return f'"{value}"'
        return str(value)


class SchemaKeywords:
    """Constants for JSON Schema keywords."""

    TYPE = "type"

    # Number keywords
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MINIMUM = "exclusiveMinimum"
    EXCLUSIVE_MAXIMUM = "exclusiveMaximum"
    MULTIPLE_OF = "multipleOf"

    # String keywords
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    FORMAT = "format"

    # Array keywords
    ITEMS = "items"
    PREFIX_ITEMS = "prefixItems"
    MIN_ITEMS = "minItems"
    MAX_ITEMS = "maxItems"
    UNIQUE_ITEMS = "uniqueItems"
    CONTAINS = "contains"
    MIN_CONTAINS = "minContains"
    MAX_CONTAINS = "maxContains"

    # Object keywords
    PROPERTIES = "properties"
    PATTERN_PROPERTIES = "patternProperties"
    ADDITIONAL_PROPERTIES = "additionalProperties"
    REQUIRED = "required"
    PROPERTY_NAMES = "propertyNames"
    MIN_PROPERTIES = "minProperties"
    MAX_PROPERTIES = "maxProperties"
    DEPENDENT_REQUIRED = "dependentRequired"
    DEPENDENCIES = "dependencies"

    # Schema composition
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    NOT = "not"
    IF = "if"
    THEN = "then"
    ELSE = "else"

    ENUM = "enum"
    CONST = "const"

    # References
    REF = "$ref"
    DEFS = "$defs"
    DEFINITIONS = "definitions"

    # Schema metadata
    ID = "$id"
    SCHEMA = "$schema"
    TITLE = "title"
    DESCRIPTION = "description"
    DEFAULT = "default"
    EXAMPLES = "examples"
    DEPRECATED = "deprecated"
    READ_ONLY = "readOnly"
    WRITE_ONLY = "writeOnly"

    NUMBER_KEYWORDS = frozenset({
        MINIMUM, MAXIMUM, EXCLUSIVE_MINIMUM, EXCLUSIVE_MAXIMUM, MULTIPLE_OF
    })
    STRING_KEYWORDS = frozenset({MIN_LENGTH, MAX_LENGTH, PATTERN, FORMAT})
    ARRAY_KEYWORDS = frozenset({
        ITEMS, PREFIX_ITEMS, MIN_ITEMS, MAX_ITEMS, UNIQUE_ITEMS,
        CONTAINS, MIN_CONTAINS, MAX_CONTAINS
    })
    OBJECT_KEYWORDS = frozenset({
        PROPERTIES, PATTERN_PROPERTIES, ADDITIONAL_PROPERTIES, REQUIRED,
        PROPERTY_NAMES, MIN_PROPERTIES, MAX_PROPERTIES, DEPENDENT_REQUIRED, DEPENDENCIES
    })

    @staticmethod
    def get_implied_type(keyword: str) -> Optional[str]:
        """
        Get the type implied by a schema keyword.

        Args:
            keyword: Schema keyword

        Returns:
            Implied type, or None if the keyword doesn't imply a type
        """
        if keyword in SchemaKeywords.NUMBER_KEYWORDS:
            return "number"
        if keyword in SchemaKeywords.STRING_KEYWORDS:
            return "string"
        if keyword in SchemaKeywords.ARRAY_KEYWORDS:
            return "array"
        if keyword in SchemaKeywords.OBJECT_KEYWORDS:
            return "object"
        return None


_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\Z")
_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z"
)
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}\Z")
_TIME_RE = re.compile(r"^\d{2}:\d{2}:\d{2}(\.\d+)?(Z|z|[+-]\d{2}:\d{2})?\Z")
_DATE_TIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?(Z|z|[+-]\d{2}:\d{2})?\Z"
)
_HOSTNAME_LABEL_RE = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)\Z")


def _parses(parser: Callable[[str], Any], value: str) -> bool:
    try:
        parser(value)
    except ValueError:
        return False
    return True


def _is_uri(value: str) -> bool:
    # urlparse silently drops tabs and newlines
    if any(c.isspace() for c in value):
        return False
    parsed = urlparse(value)
    return bool(parsed.scheme) and (bool(parsed.netloc) or bool(parsed.path))


def _is_hostname(value: str) -> bool:
    if not value or len(value) > 253:
        return False
    return all(_HOSTNAME_LABEL_RE.match(label) for label in value.rstrip(".").split("."))


def _is_time(value: str) -> bool:
    if not _TIME_RE.match(value):
        return False
    return _parses(time.fromisoformat, value.replace("z", "Z"))


def _is_date_time(value: str) -> bool:
    if not _DATE_TIME_RE.match(value):
        return False
    return _parses(datetime.fromisoformat, value.replace("z", "Z").replace("t", "T"))


FORMAT_CHECKERS: Dict[str, Callable[[str], bool]] = {
    "email": lambda value: bool(_EMAIL_RE.match(value)),
    "uri": _is_uri,
    "uuid": lambda value: bool(_UUID_RE.match(value)) and _parses(uuid.UUID, value),
    "date": lambda value: bool(_DATE_RE.match(value)) and _parses(date.fromisoformat, value),
    "time": _is_time,
    "date-time": _is_date_time,
    "ipv4": lambda value: _parses(ipaddress.IPv4Address, value),
    "ipv6": lambda value: _parses(ipaddress.IPv6Address, value),
    "hostname": _is_hostname,
}


def check_format(format_name: str, value: str) -> bool:
    """
    Check a string against a named format.

    Unknown formats are annotations only and always pass.

    Args:
        format_name: Format name such as "email" or "date-time"
        value: String to check

    Returns:
        True if the value satisfies the format
    """
    checker = FORMAT_CHECKERS.get(format_name)
    if checker is None:
        return True
    return checker(value)
