"""Report aggregation: run every format in a registry and summarize."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TextIO

from .runner import BenchmarkResult, BenchmarkRunner, throughput
from .samples import DEFAULT_REGISTRY, SampleRegistry

logger = logging.getLogger(__name__)

TITLE = "Format Validation Performance Benchmark"
DIVIDER = "=" * 71


@dataclass(frozen=True)
class SummaryStatistics:
    """Totals over every format in a run."""

    total_validations: int
    total_time_ms: float
    avg_validations_per_sec: int


def summarize(results: Iterable[BenchmarkResult]) -> SummaryStatistics:
    """Reduce per-format results to totals and an overall average."""
    total_validations = 0
    total_time_ms = 0.0
    for result in results:
        total_validations += result.total_validations
        total_time_ms += result.time_ms
    return SummaryStatistics(
        total_validations=total_validations,
        total_time_ms=total_time_ms,
        avg_validations_per_sec=throughput(total_validations, total_time_ms),
    )


def format_header() -> list[str]:
    return [TITLE, DIVIDER, ""]


def format_result_line(result: BenchmarkResult) -> str:
    """Format one per-format line of the report."""
    rate = f"{result.validations_per_sec:,}"
    elapsed = f"{result.time_ms:.2f}"
    return f"{result.format:<25} | {rate:>15} validations/sec | {elapsed:>10} ms"


def format_footer() -> list[str]:
    return ["", DIVIDER, "Benchmark completed successfully", ""]


def format_summary(summary: SummaryStatistics) -> list[str]:
    """Format the summary block."""
    return [
        f"Total validations: {summary.total_validations:,}",
        f"Total time: {summary.total_time_ms:.2f} ms",
        f"Average: {summary.avg_validations_per_sec:,} validations/sec",
    ]


class ReportAggregator:
    """Benchmark every format of a registry and print the report.

    Usage:
        aggregator = ReportAggregator(BenchmarkRunner())
        summary = aggregator.run_all(DEFAULT_REGISTRY)
    """

    def __init__(self, runner: BenchmarkRunner | None = None, out: TextIO | None = None) -> None:
        """Initialize the aggregator.

        Args:
            runner: Runner used for every format. Defaults to BenchmarkRunner().
            out: Stream the report is written to. Defaults to stdout.
        """
        self.runner = runner or BenchmarkRunner()
        self.out = out
        self.last_results: tuple[BenchmarkResult, ...] = ()

    def _emit(self, line: str) -> None:
        print(line, file=self.out, flush=True)

    def run_all(self, registry: SampleRegistry) -> SummaryStatistics:
        """Run every format in registry order and print the report.

        A CompilationError for any format propagates immediately; formats
        after it are not run and no summary is printed.

        Args:
            registry: Formats and sample values to benchmark.

        Returns:
            SummaryStatistics over all formats.
        """
        results: list[BenchmarkResult] = []
        for line in format_header():
            self._emit(line)

        for sample in registry:
            logger.debug("Benchmarking %s (%d values)", sample.format_name, len(sample.values))
            result = self.runner.run(sample.format_name, sample.values)
            results.append(result)
            self._emit(format_result_line(result))

        self.last_results = tuple(results)
        summary = summarize(results)

        for line in format_footer() + format_summary(summary):
            self._emit(line)
        return summary


def run_all(
    registry: SampleRegistry = DEFAULT_REGISTRY,
    runner: BenchmarkRunner | None = None,
    out: TextIO | None = None,
) -> SummaryStatistics:
    """Benchmark every format in ``registry`` and print the report."""
    return ReportAggregator(runner, out).run_all(registry)
