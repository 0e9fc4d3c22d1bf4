"""Monotonic clocks used to time the measurement phase."""

from __future__ import annotations

import time
from typing import Protocol

NANOS_PER_MS = 1_000_000


class Clock(Protocol):
    """A monotonic timestamp source with nanosecond units."""

    def now(self) -> int:
        """Return the current timestamp in nanoseconds."""
        ...


class PerfCounterClock:
    """High-resolution monotonic clock backed by ``time.perf_counter_ns``."""

    def now(self) -> int:
        return time.perf_counter_ns()


def elapsed_ms(start: int, end: int) -> float:
    """Convert a pair of nanosecond timestamps to elapsed milliseconds."""
    return (end - start) / NANOS_PER_MS
