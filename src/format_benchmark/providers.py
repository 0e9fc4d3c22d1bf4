"""
Validator providers: compile a format schema into a ``value -> bool`` callable.

The benchmark only depends on the ValidatorProvider protocol. Two concrete
backends are shipped:

- PydanticValidatorProvider: one ``pydantic.TypeAdapter`` per schema
- MarshmallowValidatorProvider: one unbound ``marshmallow.fields.Field`` per schema

Compiled callables return False for invalid values instead of raising, so the
cost measured per call is the backend's validation work and a type check.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Protocol

from marshmallow import ValidationError as MarshmallowValidationError
from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from pydantic.errors import PydanticUserError

from .errors import CompilationError, UnsupportedFormatError
from .formats import FORMATS, FormatSpec, get_format
from .schema import FormatSchema
from .type_mapping import marshmallow_field_for, pydantic_type_for

logger = logging.getLogger(__name__)

ValidateFn = Callable[[Any], bool]


class ValidatorProvider(Protocol):
    """Anything that can compile a format schema into a validator."""

    def compile(self, schema: FormatSchema | Mapping[str, Any]) -> ValidateFn:
        """Compile ``schema``; raise CompilationError if that is not possible."""
        ...


def _type_guard(json_type: str, spec: FormatSpec) -> Callable[[Any], bool]:
    """Return a predicate checking that a value has the schema's JSON type."""
    if json_type == "string":
        return lambda value: isinstance(value, str)

    # bool is a subclass of int and never counts as a number
    if json_type == "integer" or spec.integral:

        def is_integral(value: Any) -> bool:
            if isinstance(value, bool):
                return False
            if isinstance(value, int):
                return True
            return isinstance(value, float) and value.is_integer()

        return is_integral

    return lambda value: isinstance(value, (int, float)) and not isinstance(value, bool)


class _BaseProvider:
    """Shared schema resolution for the bundled backends."""

    name = "base"

    def __init__(self, formats: Mapping[str, FormatSpec] | None = None) -> None:
        self.formats = FORMATS if formats is None else formats

    def resolve(self, schema: FormatSchema | Mapping[str, Any]) -> tuple[FormatSchema, FormatSpec]:
        """
        Validate the schema shape and find the format it names.

        Raises:
            InvalidSchemaError: If the schema is malformed
            UnsupportedFormatError: If the format is unknown or does not apply
                to the schema's type
        """
        resolved = FormatSchema.coerce(schema)
        spec = get_format(resolved.format, self.formats, resolved)
        if not spec.applies_to(resolved.type):
            raise UnsupportedFormatError(
                f"Format {spec.name!r} applies to {spec.value_type} values, "
                f"schema declares {resolved.type!r}",
                format_name=spec.name,
                schema=resolved,
            )
        return resolved, spec

    def compile(self, schema: FormatSchema | Mapping[str, Any]) -> ValidateFn:
        resolved, spec = self.resolve(schema)
        logger.debug("Compiling %s validator for %s", self.name, resolved)
        return self._compile(resolved, spec)

    def _compile(self, schema: FormatSchema, spec: FormatSpec) -> ValidateFn:
        raise NotImplementedError


class PydanticValidatorProvider(_BaseProvider):
    """Compile schemas into Pydantic ``TypeAdapter`` validators."""

    name = "pydantic"

    def _compile(self, schema: FormatSchema, spec: FormatSpec) -> ValidateFn:
        try:
            adapter: TypeAdapter[Any] = TypeAdapter(pydantic_type_for(spec))
        except (PydanticUserError, ValueError, TypeError) as e:
            raise CompilationError(
                f"Cannot build Pydantic validator for format {spec.name!r}: {e}",
                format_name=spec.name,
                schema=schema,
            ) from e

        has_type = _type_guard(schema.type, spec)
        validate_python = adapter.validate_python

        def validate(value: Any) -> bool:
            if not has_type(value):
                return False
            try:
                validate_python(value)
            except PydanticValidationError:
                return False
            return True

        return validate


class MarshmallowValidatorProvider(_BaseProvider):
    """Compile schemas into unbound Marshmallow field validators."""

    name = "marshmallow"

    def _compile(self, schema: FormatSchema, spec: FormatSpec) -> ValidateFn:
        try:
            field = marshmallow_field_for(spec)
        except (ValueError, TypeError) as e:
            raise CompilationError(
                f"Cannot build Marshmallow field for format {spec.name!r}: {e}",
                format_name=spec.name,
                schema=schema,
            ) from e

        has_type = _type_guard(schema.type, spec)
        deserialize = field.deserialize

        def validate(value: Any) -> bool:
            if not has_type(value):
                return False
            try:
                deserialize(value)
            except MarshmallowValidationError:
                return False
            return True

        return validate


PROVIDERS: dict[str, type[_BaseProvider]] = {
    PydanticValidatorProvider.name: PydanticValidatorProvider,
    MarshmallowValidatorProvider.name: MarshmallowValidatorProvider,
}


def get_provider(name: str) -> ValidatorProvider:
    """
    Create a bundled provider by backend name.

    Raises:
        ValueError: If no backend has that name
    """
    try:
        provider_cls = PROVIDERS[name]
    except KeyError:
        choices = ", ".join(sorted(PROVIDERS))
        raise ValueError(f"Unknown validator backend {name!r} (choose from {choices})") from None
    return provider_cls()
