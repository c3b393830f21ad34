"""Benchmark engine: timed benchmarks grouped into event-emitting suites."""

from benchbridge.engine.benchmark import Benchmark, BenchmarkStats, BenchmarkTimes
from benchbridge.engine.events import Event, EventEmitter
from benchbridge.engine.suite import Suite

__all__ = [
    "Benchmark",
    "BenchmarkStats",
    "BenchmarkTimes",
    "Event",
    "EventEmitter",
    "Suite",
]
