"""
Validation schemas handed to validator providers.

A benchmark never writes schemas by hand: the schema for a format is derived
from the first sample value, the same way a JSON-Schema validator would see
``{"type": typeof value, "format": name}``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import convert_schema_errors

JsonType = Literal["string", "number", "integer", "boolean", "null", "array", "object"]


class FormatSchema(BaseModel):
    """A ``{"type": ..., "format": ...}`` schema."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: JsonType
    format: str = Field(min_length=1)

    @classmethod
    def coerce(cls, schema: FormatSchema | Mapping[str, Any]) -> FormatSchema:
        """
        Accept a FormatSchema or a plain mapping.

        Raises:
            InvalidSchemaError: If the mapping does not have the schema shape
        """
        if isinstance(schema, cls):
            return schema
        try:
            return cls.model_validate(schema)
        except ValidationError as e:
            raise convert_schema_errors(e, schema) from e


def json_type_of(value: Any) -> JsonType:
    """Return the JSON type name of a Python literal (``typeof`` semantics)."""
    # bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        return "array"
    return "object"


def derive_schema(format_name: str, values: Sequence[Any]) -> FormatSchema:
    """
    Build the schema for benchmarking ``format_name`` over ``values``.

    Raises:
        ValueError: If ``values`` is empty
        InvalidSchemaError: If ``format_name`` is empty
    """
    if not values:
        raise ValueError(f"No sample values for format {format_name!r}")
    return FormatSchema.coerce({"type": json_type_of(values[0]), "format": format_name})
