"""Shared test fixtures for format-benchmark tests.

This module provides deterministic clocks and a recording stub provider so
that timing and call ordering can be asserted exactly. Import fakes from here
rather than redefining them in each test file.
"""

from typing import Any

import pytest

from format_benchmark import BenchmarkConfig, BenchmarkRunner, CompilationError, FormatSchema

MS = 1_000_000  # nanoseconds per millisecond


# =============================================================================
# Fake Clocks
# =============================================================================

class SteppingClock:
    """Advances by a fixed step on every read.

    The runner reads the clock exactly twice per timed phase, so every format
    measures exactly ``step_ns``.
    """

    def __init__(self, step_ns: int, events: list | None = None) -> None:
        self.step_ns = step_ns
        self.current = 0
        self.reads = 0
        self.events = events

    def now(self) -> int:
        value = self.current
        self.current += self.step_ns
        self.reads += 1
        if self.events is not None:
            self.events.append(("clock", value))
        return value


class ScriptedClock:
    """Returns a fixed sequence of timestamps."""

    def __init__(self, timestamps: list[int]) -> None:
        self.timestamps = list(timestamps)

    def now(self) -> int:
        return self.timestamps.pop(0)


# =============================================================================
# Stub Validator Provider
# =============================================================================

class StubProvider:
    """Validator provider whose validators always return True.

    Records every compiled schema and, when ``events`` is given, every
    validator call, so tests can check ordering against clock reads.
    """

    def __init__(self, events: list | None = None, fail_on: set[str] | None = None) -> None:
        self.compiled: list[FormatSchema] = []
        self.calls = 0
        self.events = events
        self.fail_on = fail_on or set()

    def compile(self, schema: Any):
        schema = FormatSchema.coerce(schema)
        if schema.format in self.fail_on:
            raise CompilationError(f"cannot compile {schema.format}", format_name=schema.format)
        self.compiled.append(schema)

        def validate(value: Any) -> bool:
            self.calls += 1
            if self.events is not None:
                self.events.append(("validate", value))
            return True

        return validate


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def stub_provider():
    return StubProvider()


@pytest.fixture
def ten_ms_clock():
    return SteppingClock(10 * MS)


@pytest.fixture
def small_config():
    """Cheap calibration for tests that exercise real backends."""
    return BenchmarkConfig(iterations=5, warmup=2)


@pytest.fixture
def stub_runner(stub_provider, ten_ms_clock):
    return BenchmarkRunner(BenchmarkConfig(warmup=3), provider=stub_provider, clock=ten_ms_clock)
