"""Configuration models for benchmark runs."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from omegaconf import OmegaConf
from pydantic import BaseModel, Field, model_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EngineConfig(BaseModel):
    min_time: float = Field(
        0.05, gt=0.0, description="Minimum seconds a single timed sample must take during calibration."
    )
    max_time: float = Field(
        1.0,
        ge=0.0,
        description="Keep sampling a benchmark until this many seconds have passed (after min_samples).",
    )
    min_samples: int = Field(5, ge=1, description="Samples always collected per benchmark.")
    max_samples: int = Field(100, ge=1, description="Hard cap on samples per benchmark.")
    warmup_rounds: int = Field(1, ge=0, description="Discarded timings run before sampling.")

    @model_validator(mode="after")
    def _check_sample_bounds(self) -> "EngineConfig":
        if self.max_samples < self.min_samples:
            raise ValueError("max_samples must be >= min_samples")
        return self


class BenchmarkEntry(BaseModel):
    name: str
    target: str = Field(..., description="Callable reference in 'module:attr.path' form.")


class SuiteEntry(BaseModel):
    name: str
    benchmarks: list[BenchmarkEntry] = Field(default_factory=list)


class BenchConfig(BaseModel):
    engine: EngineConfig = Field(default_factory=EngineConfig)
    asynchronous: bool = Field(
        False, description="Start suites on the running asyncio loop instead of blocking."
    )
    log_level: LogLevel = "WARNING"
    suites: list[SuiteEntry] = Field(default_factory=list)


def load_bench_config(path: Path | str) -> BenchConfig:
    """Load a benchmark run description from YAML (interpolations resolved)."""
    data = OmegaConf.to_container(OmegaConf.load(Path(path)), resolve=True)
    if not isinstance(data, dict):
        raise ValueError(f"Invalid benchmark config file: {path}")
    return BenchConfig.model_validate(data)


__all__ = [
    "BenchConfig",
    "BenchmarkEntry",
    "EngineConfig",
    "LogLevel",
    "SuiteEntry",
    "load_bench_config",
]
