"""Benchmark runner: warm up, time and score one format.

Usage:
    from format_benchmark import BenchmarkRunner

    runner = BenchmarkRunner()
    result = runner.run("email", ["user@example.com"], iterations=10_000)
    print(result.validations_per_sec)
"""

from __future__ import annotations

import gc
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .clock import Clock, PerfCounterClock, elapsed_ms
from .config import DEFAULT_ITERATIONS, DEFAULT_WARMUP, BenchmarkConfig
from .providers import ValidateFn, ValidatorProvider, get_provider
from .schema import derive_schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BenchmarkResult:
    """Result of benchmarking a single format.

    Attributes:
        format: Format keyword that was benchmarked.
        total_validations: Validator calls made in the timed phase.
        time_ms: Elapsed time of the timed phase in milliseconds.
        validations_per_sec: Rounded throughput.
    """

    format: str
    total_validations: int
    time_ms: float
    validations_per_sec: int


def throughput(total_validations: int, time_ms: float) -> int:
    """
    Validations per second, rounded to an integer.

    A timer that did not advance would make the rate infinite; in that case
    the total itself is reported.
    """
    if time_ms > 0:
        return round(total_validations / time_ms * 1000)
    return total_validations


def _replay(validate: ValidateFn, values: tuple[Any, ...], passes: int) -> None:
    for _ in range(passes):
        for value in values:
            validate(value)


class BenchmarkRunner:
    """Compile, warm up and time validators for one format at a time."""

    def __init__(
        self,
        config: BenchmarkConfig | None = None,
        provider: ValidatorProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            config: Calibration settings. Defaults to BenchmarkConfig().
            provider: Validator provider. Defaults to the configured backend.
            clock: Timestamp source. Defaults to PerfCounterClock.
        """
        self.config = config or BenchmarkConfig()
        self.provider = provider or get_provider(self.config.backend)
        self.clock = clock or PerfCounterClock()

    def run(
        self,
        format_name: str,
        values: Sequence[Any],
        iterations: int | None = None,
    ) -> BenchmarkResult:
        """Benchmark one format.

        Args:
            format_name: Format keyword to compile a validator for.
            values: Non-empty sample values sharing one JSON type.
            iterations: Timed passes over ``values``. Defaults to the config.

        Returns:
            BenchmarkResult for the timed phase.

        Raises:
            CompilationError: If the provider cannot compile the format.
            ValueError: If the inputs are empty or iterations is not positive.
        """
        if iterations is None:
            iterations = self.config.iterations
        if not format_name:
            raise ValueError("Format name must not be empty")
        if iterations < 1:
            raise ValueError(f"Iterations must be positive, got {iterations}")
        if isinstance(values, (str, bytes)):
            raise ValueError("Values must be a sequence of literals, not a single string")
        values = tuple(values)
        schema = derive_schema(format_name, values)

        validate = self.provider.compile(schema)

        logger.debug("Warming up %s: %d passes", format_name, self.config.warmup)
        _replay(validate, values, self.config.warmup)

        if self.config.disable_gc:
            gc.collect()
            gc.disable()
        try:
            start = self.clock.now()
            _replay(validate, values, iterations)
            end = self.clock.now()
        finally:
            if self.config.disable_gc:
                gc.enable()

        time_ms = elapsed_ms(start, end)
        total_validations = iterations * len(values)
        logger.debug("Timed %s: %d validations in %.3f ms", format_name, total_validations, time_ms)

        return BenchmarkResult(
            format=format_name,
            total_validations=total_validations,
            time_ms=time_ms,
            validations_per_sec=throughput(total_validations, time_ms),
        )


def run_benchmark(
    format_name: str,
    values: Sequence[Any],
    iterations: int = DEFAULT_ITERATIONS,
    *,
    provider: ValidatorProvider | None = None,
    clock: Clock | None = None,
    warmup: int = DEFAULT_WARMUP,
) -> BenchmarkResult:
    """Run a single format benchmark with default settings.

    Args:
        format_name: Format keyword to benchmark.
        values: Sample values to replay.
        iterations: Timed passes over ``values``.
        provider: Validator provider (defaults to the Pydantic backend).
        clock: Timestamp source (defaults to PerfCounterClock).
        warmup: Untimed passes before timing.

    Returns:
        BenchmarkResult with the measured throughput.
    """
    runner = BenchmarkRunner(BenchmarkConfig(warmup=warmup), provider=provider, clock=clock)
    return runner.run(format_name, values, iterations)
