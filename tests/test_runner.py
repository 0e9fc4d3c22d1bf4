"""Tests for the benchmark runner.

Features tested:
- Total validation count and throughput formula
- Zero-duration timer guard
- Warm-up ordering relative to the timed phase
- Schema derivation from the sample values
- Input validation and compilation failures
"""

import gc

import pytest

from format_benchmark import (
    BenchmarkConfig,
    BenchmarkResult,
    BenchmarkRunner,
    CompilationError,
    run_benchmark,
)
from format_benchmark.runner import throughput

from conftest import MS, ScriptedClock, SteppingClock, StubProvider


class TestResultFormula:
    """Test the counts and throughput of a single run."""

    def test_fixed_ten_ms_run(self, stub_provider, ten_ms_clock):
        """Stub provider + 10 ms clock: 200 validations in 10 ms is 20000/s."""
        result = run_benchmark(
            "date", ["a", "b"], iterations=100, provider=stub_provider, clock=ten_ms_clock
        )

        assert result.format == "date"
        assert result.total_validations == 200
        assert result.time_ms == pytest.approx(10.0)
        assert f"{result.time_ms:.2f}" == "10.00"
        assert result.validations_per_sec == 20000

    @pytest.mark.parametrize("iterations,values", [
        (1, ["x"]),
        (7, ["a", "b", "c"]),
        (250, ["a", "b"]),
    ])
    def test_total_validations_is_exact(self, stub_runner, iterations, values):
        """total_validations == iterations * len(values)."""
        result = stub_runner.run("email", values, iterations=iterations)
        assert result.total_validations == iterations * len(values)

    def test_timed_calls_match_total(self):
        """The validator is called warmup + iterations times per value."""
        provider = StubProvider()
        runner = BenchmarkRunner(BenchmarkConfig(warmup=4), provider=provider, clock=SteppingClock(MS))

        result = runner.run("uuid", ["a", "b", "c"], iterations=10)

        assert provider.calls == (4 + 10) * 3
        assert result.total_validations == 30

    def test_default_iterations_from_config(self, stub_provider, ten_ms_clock):
        runner = BenchmarkRunner(
            BenchmarkConfig(iterations=12, warmup=0), provider=stub_provider, clock=ten_ms_clock
        )
        assert runner.run("date", ["a"]).total_validations == 12

    def test_throughput_rounds(self):
        assert throughput(1000, 3.0) == round(1000 / 3.0 * 1000)
        assert throughput(200, 10.0) == 20000


class TestDegenerateTiming:
    """Test the zero-duration guard."""

    def test_zero_elapsed_reports_total(self, stub_provider):
        """A clock that does not advance reports validations_per_sec = total."""
        clock = ScriptedClock([5 * MS, 5 * MS])
        result = run_benchmark("date", ["a", "b"], iterations=100, provider=stub_provider, clock=clock)

        assert result.time_ms == 0
        assert result.validations_per_sec == result.total_validations == 200

    def test_throughput_guard(self):
        assert throughput(42, 0.0) == 42


class TestWarmup:
    """Test that warm-up precedes timing and is never timed."""

    def test_warmup_runs_before_first_clock_read(self):
        events: list = []
        provider = StubProvider(events=events)
        clock = SteppingClock(MS, events=events)
        runner = BenchmarkRunner(BenchmarkConfig(warmup=5), provider=provider, clock=clock)

        runner.run("date", ["a", "b"], iterations=3)

        clock_positions = [i for i, event in enumerate(events) if event[0] == "clock"]
        assert len(clock_positions) == 2
        start, end = clock_positions
        # 5 warm-up passes over 2 values happen before the clock is read
        assert start == 5 * 2
        # Only the timed passes fall between the two reads
        assert end - start - 1 == 3 * 2
        assert end == len(events) - 1

    def test_warmup_does_not_change_timing(self, stub_provider):
        """Elapsed time comes only from the timed-phase clock reads."""
        short = BenchmarkRunner(
            BenchmarkConfig(warmup=0), provider=stub_provider, clock=SteppingClock(10 * MS)
        ).run("date", ["a"], iterations=10)
        long = BenchmarkRunner(
            BenchmarkConfig(warmup=500), provider=stub_provider, clock=SteppingClock(10 * MS)
        ).run("date", ["a"], iterations=10)

        assert short.time_ms == long.time_ms == pytest.approx(10.0)

    def test_default_warmup_is_1000_passes(self, stub_provider, ten_ms_clock):
        run_benchmark("date", ["a"], iterations=1, provider=stub_provider, clock=ten_ms_clock)
        assert stub_provider.calls == 1000 + 1


class TestCompilation:
    """Test schema derivation and compilation failures."""

    def test_schema_derived_from_first_value(self, stub_provider, stub_runner):
        stub_runner.run("email", ["user@example.com"], iterations=1)
        stub_runner.run("int32", [1, 2], iterations=1)

        assert [(s.type, s.format) for s in stub_provider.compiled] == [
            ("string", "email"),
            ("number", "int32"),
        ]

    def test_compiled_once_per_run(self, stub_provider, stub_runner):
        stub_runner.run("date", ["a", "b"], iterations=50)
        assert len(stub_provider.compiled) == 1

    def test_compilation_failure_propagates(self, ten_ms_clock):
        provider = StubProvider(fail_on={"bogus"})
        runner = BenchmarkRunner(provider=provider, clock=ten_ms_clock)

        with pytest.raises(CompilationError):
            runner.run("bogus", ["a"], iterations=10)
        # No timing happened
        assert ten_ms_clock.current == 0
        assert provider.calls == 0

    def test_real_provider_rejects_unknown_format(self, ten_ms_clock):
        with pytest.raises(CompilationError):
            run_benchmark("not-a-format", ["a"], iterations=1, clock=ten_ms_clock)


class TestInputValidation:
    """Test rejected inputs."""

    def test_empty_values(self, stub_runner):
        with pytest.raises(ValueError):
            stub_runner.run("date", [], iterations=1)

    def test_empty_format_name(self, stub_runner):
        with pytest.raises(ValueError):
            stub_runner.run("", ["a"], iterations=1)

    @pytest.mark.parametrize("values", ["2023-01-15", b"2023-01-15"])
    def test_single_string_values(self, stub_runner, stub_provider, values):
        """A bare string is rejected rather than replayed character by character."""
        with pytest.raises(ValueError, match="not a single string"):
            stub_runner.run("date", values, iterations=1)
        assert stub_provider.compiled == []

    @pytest.mark.parametrize("iterations", [0, -1])
    def test_non_positive_iterations(self, stub_runner, iterations):
        with pytest.raises(ValueError):
            stub_runner.run("date", ["a"], iterations=iterations)


class TestGarbageCollection:
    """Test the collector is paused only during the timed phase."""

    def test_gc_reenabled_after_run(self, stub_runner):
        stub_runner.run("date", ["a"], iterations=1)
        assert gc.isenabled()

    def test_gc_reenabled_after_error(self, stub_provider):
        class BrokenClock:
            def now(self):
                raise RuntimeError("clock failure")

        runner = BenchmarkRunner(BenchmarkConfig(warmup=0), provider=stub_provider, clock=BrokenClock())
        with pytest.raises(RuntimeError):
            runner.run("date", ["a"], iterations=1)
        assert gc.isenabled()

    def test_gc_disabled_during_timed_phase(self):
        states: list[bool] = []

        class RecordingProvider(StubProvider):
            def compile(self, schema):
                def validate(value):
                    states.append(gc.isenabled())
                    return True
                return validate

        runner = BenchmarkRunner(
            BenchmarkConfig(warmup=1), provider=RecordingProvider(), clock=SteppingClock(MS)
        )
        runner.run("date", ["a"], iterations=2)

        assert states == [True, False, False]


class TestBenchmarkResult:
    """Test BenchmarkResult."""

    def test_immutable(self):
        result = BenchmarkResult("ipv4", 300, 12.5, 24000)
        with pytest.raises(AttributeError):
            result.time_ms = 1.0
