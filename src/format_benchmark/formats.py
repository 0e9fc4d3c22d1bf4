"""
Format keyword registry.

Each supported format keyword (the ``format`` of a ``{"type", "format"}``
schema) is described by a FormatSpec: the JSON type it applies to and the rule
a value must satisfy. Backends in ``type_mapping`` turn these specs into
Pydantic types or Marshmallow fields; the FormatSpec entries themselves do no validation
work during a benchmark.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Literal

from .errors import UnsupportedFormatError

ValueType = Literal["string", "number"]


def _anchored(body: str, flags: int = 0) -> re.Pattern[str]:
    """Compile a pattern body so that it must match the whole value."""
    return re.compile(rf"\A(?:{body})\Z", flags)


def _compiles_as_regex(value: str) -> bool:
    try:
        re.compile(value)
    except re.error:
        return False
    return True


def _is_ipv6(value: str) -> bool:
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class FormatSpec:
    """Definition of a single format keyword.

    Attributes:
        name: Format keyword, e.g. ``"date-time"``.
        value_type: JSON type of the values the format constrains.
        pattern: Anchored pattern a string value must match.
        minimum: Inclusive lower bound for number formats.
        maximum: Inclusive upper bound for number formats.
        integral: Whether a number value must have no fractional part.
        check: Predicate for rules that are not expressible as a pattern.
    """

    name: str
    value_type: ValueType
    pattern: re.Pattern[str] | None = None
    minimum: int | None = None
    maximum: int | None = None
    integral: bool = False
    check: Callable[[str], bool] | None = None

    def applies_to(self, json_type: str) -> bool:
        """Whether a schema of ``json_type`` may carry this format."""
        if self.value_type == "number":
            return json_type in ("number", "integer")
        return json_type == self.value_type


_DATE = r"\d\d\d\d-[0-1]\d-[0-3]\d"
_TIME = r"(?:[0-2]\d:[0-5]\d:[0-5]\d|23:59:60)(?:\.\d+)?"
_ZONE = r"(?:z|[+-]\d\d(?::?\d\d)?)"

FORMATS: dict[str, FormatSpec] = {
    spec.name: spec
    for spec in (
        FormatSpec("date", "string", _anchored(_DATE)),
        FormatSpec("time", "string", _anchored(_TIME + _ZONE, re.IGNORECASE)),
        FormatSpec(
            "date-time",
            "string",
            _anchored(_DATE + r"[t\s]" + _TIME + _ZONE, re.IGNORECASE),
        ),
        FormatSpec("iso-time", "string", _anchored(_TIME + _ZONE + "?", re.IGNORECASE)),
        FormatSpec(
            "iso-date-time",
            "string",
            _anchored(_DATE + r"[t\s]" + _TIME + _ZONE + "?", re.IGNORECASE),
        ),
        FormatSpec(
            "duration",
            "string",
            _anchored(
                r"P(?!\Z)(?:(?:\d+Y)?(?:\d+M)?(?:\d+D)?(?:T(?=\d)(?:\d+H)?(?:\d+M)?(?:\d+S)?)?|\d+W)"
            ),
        ),
        FormatSpec(
            "uri",
            "string",
            _anchored(r"[a-z][a-z0-9+\-.]*:(?:/?/)?\S*", re.IGNORECASE),
        ),
        FormatSpec(
            "uri-reference",
            "string",
            _anchored(
                r"(?:(?:[a-z][a-z0-9+\-.]*:)?/?/)?(?:[^\\\s#][^\s#]*)?(?:#[^\\\s]*)?",
                re.IGNORECASE,
            ),
        ),
        FormatSpec(
            "uri-template",
            "string",
            _anchored(
                r"""(?:(?:[^\x00-\x20"'<>%\\^`{|}]|%[0-9a-f]{2})"""
                r"""|\{[+#./;?&=,!@|]?(?:[a-z0-9_]|%[0-9a-f]{2})+(?::[1-9][0-9]{0,3}|\*)?"""
                r"""(?:,(?:[a-z0-9_]|%[0-9a-f]{2})+(?::[1-9][0-9]{0,3}|\*)?)*\})*""",
                re.IGNORECASE,
            ),
        ),
        FormatSpec(
            "url",
            "string",
            _anchored(
                r"(?:https?|ftp)://(?:[^\s:@/]+(?::[^\s:@/]*)?@)?[^\s/?#:]+(?::\d{1,5})?(?:[/?#]\S*)?",
                re.IGNORECASE,
            ),
        ),
        FormatSpec(
            "email",
            "string",
            _anchored(
                r"[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
                r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?",
                re.IGNORECASE,
            ),
        ),
        FormatSpec(
            "hostname",
            "string",
            _anchored(
                r"(?=.{1,253}\.?\Z)[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?"
                r"(?:\.[a-z0-9](?:[-0-9a-z]{0,61}[0-9a-z])?)*\.?",
                re.IGNORECASE,
            ),
        ),
        FormatSpec(
            "ipv4",
            "string",
            _anchored(r"(?:(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)\.){3}(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)"),
        ),
        FormatSpec("ipv6", "string", check=_is_ipv6),
        FormatSpec("regex", "string", check=_compiles_as_regex),
        FormatSpec(
            "uuid",
            "string",
            _anchored(r"(?:urn:uuid:)?[0-9a-f]{8}-(?:[0-9a-f]{4}-){3}[0-9a-f]{12}", re.IGNORECASE),
        ),
        FormatSpec("json-pointer", "string", _anchored(r"(?:/(?:[^~/]|~0|~1)*)*")),
        FormatSpec(
            "json-pointer-uri-fragment",
            "string",
            _anchored(r"#(?:/(?:[a-z0-9_\-.!$&'()*+,;:=@]|%[0-9a-f]{2}|~0|~1)*)*", re.IGNORECASE),
        ),
        FormatSpec(
            "relative-json-pointer",
            "string",
            _anchored(r"(?:0|[1-9][0-9]*)(?:#|(?:/(?:[^~/]|~0|~1)*)*)"),
        ),
        FormatSpec(
            "byte",
            "string",
            _anchored(r"(?:[a-z0-9+/]{4})*(?:[a-z0-9+/]{2}==|[a-z0-9+/]{3}=)?", re.IGNORECASE),
        ),
        FormatSpec("int32", "number", minimum=-(2**31), maximum=2**31 - 1, integral=True),
        FormatSpec("int64", "number", minimum=-(2**63), maximum=2**63 - 1, integral=True),
        FormatSpec("float", "number"),
        FormatSpec("double", "number"),
    )
}


def get_format(
    name: str,
    formats: Mapping[str, FormatSpec] | None = None,
    schema: Any | None = None,
) -> FormatSpec:
    """
    Look up a format keyword.

    Args:
        name: Format keyword to look up
        formats: Table to search. Defaults to FORMATS.
        schema: Schema being compiled, attached to the error

    Raises:
        UnsupportedFormatError: If the keyword is not registered
    """
    table = FORMATS if formats is None else formats
    try:
        return table[name]
    except KeyError:
        raise UnsupportedFormatError(
            f"Unknown format {name!r}", format_name=name, schema=schema
        ) from None
