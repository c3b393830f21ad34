"""benchbridge public API."""

from benchbridge.bridge import BenchmarkDescriptor, bench, run, suite
from benchbridge.config import BenchConfig, EngineConfig, load_bench_config
from benchbridge.engine import Benchmark, Event, Suite
from benchbridge.loader import build_suites, resolve_target

__all__ = [
    "BenchConfig",
    "Benchmark",
    "BenchmarkDescriptor",
    "EngineConfig",
    "Event",
    "Suite",
    "bench",
    "build_suites",
    "load_bench_config",
    "resolve_target",
    "run",
    "suite",
]
