"""
Error types for the format benchmark.

This module provides:
- CompilationError: raised when a validator cannot be built for a schema
- UnsupportedFormatError / InvalidSchemaError: the two ways compilation fails
- Error path formatting for converting Pydantic schema errors
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError


class CompilationError(Exception):
    """
    A format/schema pair that a validator provider cannot compile.

    Compilation errors are fatal for a benchmark run: the runner never retries
    and the report aggregator stops at the first one.

    Attributes:
        format_name: The format keyword being compiled (if known)
        schema: The schema that was passed to the provider
    """

    def __init__(
        self,
        message: str,
        format_name: str | None = None,
        schema: Any | None = None,
    ) -> None:
        self.format_name = format_name
        self.schema = schema
        super().__init__(message)


class UnsupportedFormatError(CompilationError):
    """The format keyword is unknown, or does not apply to the schema's type."""


class InvalidSchemaError(CompilationError):
    """
    The schema does not have the ``{"type": ..., "format": ...}`` shape.

    Attributes:
        messages: Dict of dotted field path -> error messages
    """

    def __init__(
        self,
        message: str,
        format_name: str | None = None,
        schema: Any | None = None,
        messages: dict[str, list[str]] | None = None,
    ) -> None:
        self.messages = messages or {}
        super().__init__(message, format_name, schema)


def build_error_path(loc: tuple[Any, ...]) -> str:
    """
    Build a dotted error path from Pydantic's location tuple.

    Args:
        loc: Pydantic error location tuple (e.g., ('format',))

    Returns:
        Dotted path string, or '_schema' for errors without a location
    """
    if not loc:
        return "_schema"
    return ".".join(str(part) for part in loc)


def convert_schema_errors(
    pydantic_error: PydanticValidationError,
    schema: Any,
) -> InvalidSchemaError:
    """
    Convert a Pydantic ValidationError raised while reading a schema.

    Args:
        pydantic_error: The error raised by ``FormatSchema.model_validate``
        schema: The offending schema object

    Returns:
        InvalidSchemaError with per-field messages
    """
    messages: dict[str, list[str]] = {}
    for error in pydantic_error.errors():
        path = build_error_path(tuple(error.get("loc", ())))
        messages.setdefault(path, []).append(error.get("msg", "Validation error"))

    format_name = schema.get("format") if isinstance(schema, dict) else None
    summary = "; ".join(f"{path}: {', '.join(msgs)}" for path, msgs in messages.items())
    return InvalidSchemaError(
        f"Invalid schema {schema!r}: {summary}",
        format_name=format_name if isinstance(format_name, str) else None,
        schema=schema,
        messages=messages,
    )
