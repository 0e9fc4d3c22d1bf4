"""
Command-line entry point for the format benchmark.

Usage:
    # Benchmark every format with the default calibration
    python -m format_benchmark

    # Quick run of a few formats on the Marshmallow backend
    python -m format_benchmark --format email ipv4 --iterations 1000 --backend marshmallow
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from .config import DEFAULT_ITERATIONS, DEFAULT_WARMUP, BenchmarkConfig
from .providers import PROVIDERS
from .report import ReportAggregator
from .runner import BenchmarkRunner
from .samples import DEFAULT_REGISTRY


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="format-benchmark",
        description="Measure validation throughput for each format keyword",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=DEFAULT_ITERATIONS,
        help=f"Timed passes over each format's sample values (default: {DEFAULT_ITERATIONS})",
    )
    parser.add_argument(
        "--warmup",
        type=int,
        default=DEFAULT_WARMUP,
        help=f"Untimed passes before timing (default: {DEFAULT_WARMUP})",
    )
    parser.add_argument(
        "--backend",
        choices=sorted(PROVIDERS),
        default="pydantic",
        help="Validator backend (default: pydantic)",
    )
    parser.add_argument(
        "--format",
        nargs="+",
        choices=DEFAULT_REGISTRY.names(),
        metavar="NAME",
        dest="formats",
        help="Only benchmark these formats",
    )
    parser.add_argument(
        "--no-gc-disable",
        action="store_true",
        help="Leave the garbage collector running during the timed phase",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log compilation and timing details",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the benchmark report from the command line."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = BenchmarkConfig(
            iterations=args.iterations,
            warmup=args.warmup,
            backend=args.backend,
            disable_gc=not args.no_gc_disable,
        )
    except ValidationError as e:
        parser.error(str(e))
    registry = DEFAULT_REGISTRY.select(args.formats) if args.formats else DEFAULT_REGISTRY

    ReportAggregator(BenchmarkRunner(config)).run_all(registry)
    return 0
