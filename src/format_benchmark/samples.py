"""
Sample corpus: the literal values replayed for each format.

The default registry is static configuration passed explicitly to the report
aggregator; nothing reads it as ambient state.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Union

from .schema import json_type_of

SampleValue = Union[str, int, float]


@dataclass(frozen=True)
class FormatSample:
    """Representative values for one format.

    Attributes:
        format_name: Format keyword the values are validated against.
        values: Non-empty sequence of literals sharing one JSON type.
    """

    format_name: str
    values: tuple[SampleValue, ...]

    def __post_init__(self) -> None:
        if not self.format_name:
            raise ValueError("Format name must not be empty")
        if isinstance(self.values, (str, bytes)):
            raise ValueError(
                f"Format {self.format_name!r} values must be a sequence of literals, not a single string"
            )
        # Accept any sequence but always store a tuple
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise ValueError(f"Format {self.format_name!r} has no sample values")
        types = {json_type_of(value) for value in self.values}
        if len(types) > 1:
            raise ValueError(
                f"Format {self.format_name!r} mixes value types: {', '.join(sorted(types))}"
            )

    @property
    def value_type(self) -> str:
        """JSON type shared by all values."""
        return json_type_of(self.values[0])


@dataclass(frozen=True)
class SampleRegistry:
    """Ordered, immutable collection of format samples."""

    samples: tuple[FormatSample, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "samples", tuple(self.samples))
        seen: set[str] = set()
        for sample in self.samples:
            if sample.format_name in seen:
                raise ValueError(f"Duplicate format {sample.format_name!r}")
            seen.add(sample.format_name)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Sequence[SampleValue]]) -> SampleRegistry:
        """Create a registry from ``{format_name: values}``, keeping insertion order."""
        return cls(tuple(FormatSample(name, values) for name, values in data.items()))

    def __iter__(self) -> Iterator[FormatSample]:
        return iter(self.samples)

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, format_name: str) -> FormatSample:
        for sample in self.samples:
            if sample.format_name == format_name:
                return sample
        raise KeyError(format_name)

    def __contains__(self, format_name: object) -> bool:
        return any(sample.format_name == format_name for sample in self.samples)

    def names(self) -> list[str]:
        return [sample.format_name for sample in self.samples]

    def select(self, names: Iterable[str]) -> SampleRegistry:
        """
        Return a registry with only the named formats, in registry order.

        Raises:
            KeyError: If a name is not in the registry
        """
        wanted = set(names)
        missing = sorted(wanted.difference(self.names()))
        if missing:
            raise KeyError(", ".join(missing))
        return SampleRegistry(tuple(s for s in self.samples if s.format_name in wanted))


DEFAULT_SAMPLES: dict[str, list[SampleValue]] = {
    "date": ["2023-01-15", "2024-12-31", "2025-06-01"],
    "time": ["12:30:45Z", "23:59:60+00:00", "00:00:00-05:00"],
    "date-time": ["2023-01-15T12:30:45Z", "2024-12-31T23:59:59+00:00"],
    "iso-time": ["12:30:45.123Z", "23:59:60"],
    "iso-date-time": ["2023-01-15T12:30:45.123Z", "2024-12-31 23:59:59Z"],
    "duration": ["P1Y2M3DT4H5M6S", "P3W", "PT1H30M"],
    "uri": ["https://example.com/path", "ftp://files.example.com/file.txt"],
    "uri-reference": ["/path/to/resource", "https://example.com"],
    "uri-template": ["https://example.com/{id}", "http://api.example.com/users{?page,size}"],
    "url": ["https://www.example.com", "http://test.org:8080/path?query=value"],
    "email": ["user@example.com", "test.user+tag@example.co.uk"],
    "hostname": ["example.com", "subdomain.example.com"],
    "ipv4": ["192.168.1.1", "10.0.0.1", "255.255.255.255"],
    "ipv6": ["2001:0db8:85a3:0000:0000:8a2e:0370:7334", "::1", "fe80::1"],
    "regex": ["^[a-z]+$", "\\d{3}-\\d{4}", "[A-Z][a-z]*"],
    "uuid": ["550e8400-e29b-41d4-a716-446655440000", "urn:uuid:f47ac10b-58cc-4372-a567-0e02b2c3d479"],
    "json-pointer": ["/foo/bar", "/items/0", "/"],
    "json-pointer-uri-fragment": ["#/definitions/User", "#/properties/name"],
    "relative-json-pointer": ["0", "1/items", "2#"],
    "byte": ["SGVsbG8gV29ybGQ=", "VGVzdA=="],
    "int32": [0, 2147483647, -2147483648],
    "int64": [0, 9007199254740991, -9007199254740991],
    "float": [3.14, -273.15, 0.0],
    "double": [3.141592653589793, -273.15, 1.7976931348623157e308],
}

DEFAULT_REGISTRY = SampleRegistry.from_mapping(DEFAULT_SAMPLES)
