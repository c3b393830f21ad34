"""Single benchmark: timing loop, calibration and summary statistics.

The timing loop itself is ``timeit.Timer``; this module decides how many
loops make a meaningful sample, how many samples to take, and turns the
samples into a rate with a relative margin of error.
"""

from __future__ import annotations

import logging
import math
import time
import timeit
from statistics import fmean, variance
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from benchbridge.config import EngineConfig

logger = logging.getLogger(__name__)

# Two-tailed 95% critical values of Student's t distribution by degrees of freedom.
T_TABLE: dict[int, float] = {
    1: 12.706, 2: 4.303, 3: 3.182, 4: 2.776, 5: 2.571, 6: 2.447,
    7: 2.365, 8: 2.306, 9: 2.262, 10: 2.228, 11: 2.201, 12: 2.179,
    13: 2.16, 14: 2.145, 15: 2.131, 16: 2.12, 17: 2.11, 18: 2.101,
    19: 2.093, 20: 2.086, 21: 2.08, 22: 2.074, 23: 2.069, 24: 2.064,
    25: 2.06, 26: 2.056, 27: 2.052, 28: 2.048, 29: 2.045, 30: 2.042,
}  # fmt: skip
T_INFINITY = 1.96


class BenchmarkStats(BaseModel):
    sample: list[float] = Field(default_factory=list)
    mean: float = 0.0
    variance: float = 0.0
    deviation: float = 0.0
    sem: float = 0.0
    moe: float = 0.0
    rme: float = 0.0


class BenchmarkTimes(BaseModel):
    cycle: float = 0.0
    elapsed: float = 0.0
    period: float = 0.0
    timestamp: float = 0.0


def critical_value(df: int) -> float:
    return T_TABLE.get(max(df, 1), T_INFINITY)


def summarize(sample: list[float]) -> BenchmarkStats:
    """Summary statistics over per-operation times (seconds)."""
    if not sample:
        return BenchmarkStats()
    mean = fmean(sample)
    var = variance(sample, mean) if len(sample) > 1 else 0.0
    deviation = math.sqrt(var)
    sem = deviation / math.sqrt(len(sample))
    moe = sem * critical_value(len(sample) - 1)
    rme = (moe / mean) * 100.0 if mean > 0 else 0.0
    return BenchmarkStats(
        sample=list(sample),
        mean=mean,
        variance=var,
        deviation=deviation,
        sem=sem,
        moe=moe,
        rme=rme,
    )


def _format_hz(hz: float) -> str:
    return f"{hz:,.2f}" if hz < 100 else f"{hz:,.0f}"


class Benchmark:
    def __init__(
        self, name: str, fn: Callable[[], Any], options: Optional[EngineConfig] = None
    ) -> None:
        self.name = name
        self.fn = fn
        self.options = options or EngineConfig()
        self.reset()

    def reset(self) -> "Benchmark":
        self.count = 0
        self.cycles = 0
        self.hz = 0.0
        self.stats = BenchmarkStats()
        self.times = BenchmarkTimes()
        self.error: Optional[BaseException] = None
        self.aborted = False
        return self

    def run(self, options: Optional[EngineConfig] = None) -> "Benchmark":
        opts = options or self.options
        self.reset()
        self.times.timestamp = time.time()
        started = time.perf_counter()
        try:
            timer = timeit.Timer(self.fn, timer=time.perf_counter)
            self.count = self._calibrate(timer, opts.min_time)
            for _ in range(opts.warmup_rounds):
                timer.timeit(self.count)
            sample = self._collect(timer, opts)
        except Exception as exc:
            logger.debug("Benchmark %r failed: %s", self.name, exc)
            self.error = exc
            self.aborted = True
            self.times.elapsed = time.perf_counter() - started
            return self

        self.cycles = len(sample)
        self.stats = summarize(sample)
        self.hz = 1.0 / self.stats.mean if self.stats.mean > 0 else 0.0
        self.times.period = self.stats.mean
        self.times.cycle = self.stats.mean * self.count
        self.times.elapsed = time.perf_counter() - started
        logger.debug(
            "Benchmark %r: %d loops x %d samples, %.3g ops/sec",
            self.name,
            self.count,
            self.cycles,
            self.hz,
        )
        return self

    @staticmethod
    def _calibrate(timer: timeit.Timer, min_time: float) -> int:
        # Same 1, 2, 5, 10, 20, ... progression as Timer.autorange, with a configurable floor.
        scale = 1
        while True:
            for step in (1, 2, 5):
                number = scale * step
                if timer.timeit(number) >= min_time:
                    return number
            scale *= 10

    def _collect(self, timer: timeit.Timer, opts: EngineConfig) -> list[float]:
        sample: list[float] = []
        started = time.perf_counter()
        while len(sample) < opts.max_samples:
            sample.append(timer.timeit(self.count) / self.count)
            if len(sample) >= opts.min_samples and time.perf_counter() - started >= opts.max_time:
                break
        return sample

    def __repr__(self) -> str:
        return f"Benchmark(name={self.name!r}, hz={self.hz:.6g}, cycles={self.cycles})"

    def __str__(self) -> str:
        if self.error is not None:
            return f"{self.name}: {type(self.error).__name__}: {self.error}"
        size = len(self.stats.sample)
        return (
            f"{self.name} x {_format_hz(self.hz)} ops/sec "
            f"±{self.stats.rme:.2f}% ({size} {'run' if size == 1 else 'runs'} sampled)"
        )


__all__ = [
    "Benchmark",
    "BenchmarkStats",
    "BenchmarkTimes",
    "T_INFINITY",
    "T_TABLE",
    "critical_value",
    "summarize",
]
