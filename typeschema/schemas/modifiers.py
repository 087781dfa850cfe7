"""
Modifier wrappers.

Each wrapper owns exactly one underlying schema. It overrides the single
attribute it carries and forwards everything else, including variant
attributes such as ``min_length``, to the schema it wraps.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .base import Schema, ValidationContext
from ..api import VALID, ValidationResult


class ModifierSchema(Schema):
    """Base class for schemas that wrap another schema."""
    underlying: Schema

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("__") or name == "underlying":
            raise AttributeError(name)
        return getattr(self.underlying, name)

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        return self.underlying.validate(value, context)

    def to_json_schema(self) -> Dict[str, Any]:
        schema = self.underlying.to_json_schema()
        self._annotate(schema)
        return schema

    def _annotate(self, schema: Dict[str, Any]) -> None:
        pass

    @property
    def title(self) -> Optional[str]:
        return self.underlying.title

    @property
    def description(self) -> Optional[str]:
        return self.underlying.description

    @property
    def default(self) -> Any:
        return self.underlying.default

    @property
    def has_default(self) -> bool:
        return self.underlying.has_default

    @property
    def examples(self) -> Optional[Tuple[Any, ...]]:
        return self.underlying.examples

    @property
    def deprecated(self) -> Optional[bool]:
        return self.underlying.deprecated

    @property
    def read_only(self) -> Optional[bool]:
        return self.underlying.read_only

    @property
    def write_only(self) -> Optional[bool]:
        return self.underlying.write_only

    @property
    def id(self) -> Optional[str]:
        return self.underlying.id

    @property
    def dialect(self) -> Optional[str]:
        return self.underlying.dialect

    @property
    def definitions(self) -> Optional[Mapping[str, Schema]]:
        return self.underlying.definitions


@dataclass(frozen=True)
class OptionalSchema(ModifierSchema):
    """
    Marks a property as omissible.

    Validation of a present value is unchanged; only the enclosing object's
    ``required`` set decides whether the property may be absent.
    """
    underlying: Schema


@dataclass(frozen=True)
class NullableSchema(ModifierSchema):
    """Accepts null in addition to whatever the underlying schema accepts."""
    underlying: Schema

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        if value is None:
            return VALID
        return self.underlying.validate(value, context)

    def to_json_schema(self) -> Dict[str, Any]:
        schema = self.underlying.to_json_schema()

        if "const" in schema or ("type" not in schema and "enum" not in schema):
            return {"anyOf": [schema, {"type": "null"}]}

        json_type = schema.get("type")
        if isinstance(json_type, str) and json_type != "null":
            schema["type"] = [json_type, "null"]
        elif isinstance(json_type, list) and "null" not in json_type:
            schema["type"] = json_type + ["null"]

        if "enum" in schema and None not in schema["enum"]:
            schema["enum"] = schema["enum"] + [None]

        return schema


@dataclass(frozen=True)
class DefaultSchema(ModifierSchema):
    underlying: Schema
    value: Any

    @property
    def default(self) -> Any:
        return self.value

    @property
    def has_default(self) -> bool:
        return True

    def _annotate(self, schema: Dict[str, Any]) -> None:
        schema["default"] = self.value


@dataclass(frozen=True)
class TitleSchema(ModifierSchema):
    underlying: Schema
    text: str

    @property
    def title(self) -> Optional[str]:
        return self.text

    def _annotate(self, schema: Dict[str, Any]) -> None:
        schema["title"] = self.text


@dataclass(frozen=True)
class DescriptionSchema(ModifierSchema):
    underlying: Schema
    text: str

    @property
    def description(self) -> Optional[str]:
        return self.text

    def _annotate(self, schema: Dict[str, Any]) -> None:
        schema["description"] = self.text


@dataclass(frozen=True)
class ExamplesSchema(ModifierSchema):
    underlying: Schema
    example_values: Tuple[Any, ...]

    def __post_init__(self):
        object.__setattr__(self, "example_values", tuple(self.example_values))

    @property
    def examples(self) -> Optional[Tuple[Any, ...]]:
        return self.example_values

    def _annotate(self, schema: Dict[str, Any]) -> None:
        schema["examples"] = list(self.example_values)


@dataclass(frozen=True)
class DeprecatedSchema(ModifierSchema):
    underlying: Schema
    flag: bool = True

    @property
    def deprecated(self) -> Optional[bool]:
        return self.flag

    def _annotate(self, schema: Dict[str, Any]) -> None:
        schema["deprecated"] = self.flag


@dataclass(frozen=True)
class ReadOnlySchema(ModifierSchema):
    underlying: Schema
    flag: bool = True

    @property
    def read_only(self) -> Optional[bool]:
        return self.flag

    def _annotate(self, schema: Dict[str, Any]) -> None:
        schema["readOnly"] = self.flag


@dataclass(frozen=True)
class WriteOnlySchema(ModifierSchema):
    underlying: Schema
    flag: bool = True

    @property
    def write_only(self) -> Optional[bool]:
        return self.flag

    def _annotate(self, schema: Dict[str, Any]) -> None:
        schema["writeOnly"] = self.flag


@dataclass(frozen=True)
class DefsSchema(ModifierSchema):
    """
    Carries named definitions reachable through "#/$defs/<name>".

    When validation reaches this wrapper without a root that already holds
    these definitions, the wrapper becomes the root for reference lookup.
    """
    underlying: Schema
    defs: Mapping[str, Schema]

    def __post_init__(self):
        object.__setattr__(self, "defs", MappingProxyType(dict(self.defs)))

    @property
    def definitions(self) -> Optional[Mapping[str, Schema]]:
        return self.defs

    def _validate(self, value: Any, context: ValidationContext) -> ValidationResult:
        root_defs = context.root_schema.definitions if context.root_schema is not None else None
        if root_defs is None or any(name not in root_defs for name in self.defs):
            context = context.with_root_schema(self)
        return self.underlying.validate(value, context)

    def _annotate(self, schema: Dict[str, Any]) -> None:
        schema["$defs"] = {name: definition.to_json_schema() for name, definition in self.defs.items()}


@dataclass(frozen=True)
class IdSchema(ModifierSchema):
    underlying: Schema
    uri: str

    @property
    def id(self) -> Optional[str]:
        return self.uri

    def to_json_schema(self) -> Dict[str, Any]:
        return {"$id": self.uri, **self.underlying.to_json_schema()}


@dataclass(frozen=True)
class DialectSchema(ModifierSchema):
    """Declares the JSON Schema dialect through ``$schema``."""
    underlying: Schema
    uri: str

    @property
    def dialect(self) -> Optional[str]:
        return self.uri

    def to_json_schema(self) -> Dict[str, Any]:
        return {"$schema": self.uri, **self.underlying.to_json_schema()}
