"""
format-benchmark: throughput measurement for format validators.

Measures how many validations per second a compiled format validator
sustains, for every format in a sample corpus, and prints a per-format and
aggregate report.

Core Components:
    BenchmarkRunner: Compile, warm up and time one format
    ReportAggregator: Run a whole SampleRegistry and summarize
    SampleRegistry: Ordered, immutable corpus of sample values
    ValidatorProvider: Protocol for compile(schema) -> validator backends
    Clock: Protocol for the monotonic timestamp source

Basic Usage:
    >>> from format_benchmark import DEFAULT_REGISTRY, run_all
    >>> summary = run_all(DEFAULT_REGISTRY)
    >>> print(summary.avg_validations_per_sec)

Single Format:
    >>> from format_benchmark import run_benchmark
    >>> result = run_benchmark("ipv4", ["192.168.1.1"], iterations=10_000)
    >>> print(result.validations_per_sec)
"""

from importlib.metadata import version as _version

from .clock import Clock, PerfCounterClock
from .config import BenchmarkConfig
from .errors import CompilationError, InvalidSchemaError, UnsupportedFormatError
from .formats import FORMATS, FormatSpec, get_format
from .providers import (
    MarshmallowValidatorProvider,
    PydanticValidatorProvider,
    ValidateFn,
    ValidatorProvider,
    get_provider,
)
from .report import ReportAggregator, SummaryStatistics, run_all, summarize
from .runner import BenchmarkResult, BenchmarkRunner, run_benchmark
from .samples import DEFAULT_REGISTRY, DEFAULT_SAMPLES, FormatSample, SampleRegistry
from .schema import FormatSchema, derive_schema

__version__ = _version("format-benchmark")
__all__ = [
    "DEFAULT_REGISTRY",
    "DEFAULT_SAMPLES",
    "FORMATS",
    "BenchmarkConfig",
    "BenchmarkResult",
    "BenchmarkRunner",
    "Clock",
    "CompilationError",
    "FormatSample",
    "FormatSchema",
    "FormatSpec",
    "InvalidSchemaError",
    "MarshmallowValidatorProvider",
    "PerfCounterClock",
    "PydanticValidatorProvider",
    "ReportAggregator",
    "SampleRegistry",
    "SummaryStatistics",
    "UnsupportedFormatError",
    "ValidateFn",
    "ValidatorProvider",
    "derive_schema",
    "get_format",
    "get_provider",
    "run_all",
    "run_benchmark",
    "summarize",
]
