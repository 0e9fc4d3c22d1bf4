"""Benchmark calibration settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, NonNegativeInt, PositiveInt

DEFAULT_ITERATIONS = 100_000
DEFAULT_WARMUP = 1_000


class BenchmarkConfig(BaseModel):
    """Settings shared by every format in a run.

    Attributes:
        iterations: Passes over the sample values in the timed phase.
        warmup: Untimed passes over the sample values before timing starts.
        backend: Name of the bundled validator provider to use.
        disable_gc: Collect garbage before, and pause the collector during,
            the timed phase.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    iterations: PositiveInt = DEFAULT_ITERATIONS
    warmup: NonNegativeInt = DEFAULT_WARMUP
    backend: Literal["pydantic", "marshmallow"] = "pydantic"
    disable_gc: bool = True
