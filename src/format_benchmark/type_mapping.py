"""
Type mapping utilities for turning format keywords into backend validators.

Formats that Pydantic or Marshmallow already understand (dates, emails, IP
addresses, bounded integers, floats) map onto the library's native types.
Everything else is validated against the anchored pattern or predicate from
the format registry.
"""

from __future__ import annotations

from datetime import date
from ipaddress import IPv4Address, IPv6Address
from typing import Annotated, Any, Callable

from marshmallow import ValidationError as MarshmallowValidationError, fields as ma_fields, validate
from pydantic import AfterValidator, EmailStr, Field

from .formats import FormatSpec

# Native Pydantic types, keyed by format keyword
_PYDANTIC_NATIVE: dict[str, Any] = {
    "date": date,
    "email": EmailStr,
    "ipv4": IPv4Address,
    "ipv6": IPv6Address,
}

# Native Marshmallow field classes, keyed by format keyword
_MARSHMALLOW_NATIVE: dict[str, Callable[[], ma_fields.Field]] = {
    "date": ma_fields.Date,
    "email": ma_fields.Email,
    "ipv4": ma_fields.IPv4,
    "ipv6": ma_fields.IPv6,
}


def _pattern_validator(spec: FormatSpec) -> Callable[[str], str]:
    """Build an AfterValidator function from the format's pattern or predicate."""
    if spec.pattern is not None:
        match = spec.pattern.match

        def check_pattern(value: str) -> str:
            if match(value) is None:
                raise ValueError(f"Not a valid {spec.name}")
            return value

        return check_pattern

    predicate = spec.check
    if predicate is None:
        raise ValueError(f"Format {spec.name!r} has neither a pattern nor a check")

    def check_predicate(value: str) -> str:
        if not predicate(value):
            raise ValueError(f"Not a valid {spec.name}")
        return value

    return check_predicate


def pydantic_type_for(spec: FormatSpec) -> Any:
    """
    Map a format spec to a type annotation usable with ``TypeAdapter``.

    Args:
        spec: The format keyword definition

    Returns:
        A Python type or ``Annotated`` type carrying the format's constraints
    """
    native = _PYDANTIC_NATIVE.get(spec.name)
    if native is not None:
        return native

    if spec.value_type == "number":
        if spec.integral:
            return Annotated[int, Field(ge=spec.minimum, le=spec.maximum)]
        return float

    return Annotated[str, AfterValidator(_pattern_validator(spec))]


def marshmallow_field_for(spec: FormatSpec) -> ma_fields.Field:
    """
    Map a format spec to an unbound Marshmallow field instance.

    Args:
        spec: The format keyword definition

    Returns:
        A Marshmallow field whose ``deserialize`` raises on invalid values
    """
    native = _MARSHMALLOW_NATIVE.get(spec.name)
    if native is not None:
        return native()

    if spec.value_type == "number":
        if spec.integral:
            return ma_fields.Integer(validate=validate.Range(min=spec.minimum, max=spec.maximum))
        return ma_fields.Float()

    if spec.pattern is not None:
        return ma_fields.String(validate=validate.Regexp(spec.pattern))

    predicate = spec.check
    if predicate is None:
        raise ValueError(f"Format {spec.name!r} has neither a pattern nor a check")

    def check_predicate(value: str) -> None:
        if not predicate(value):
            raise MarshmallowValidationError(f"Not a valid {spec.name}.")

    return ma_fields.String(validate=check_predicate)
