#!/usr/bin/env python3
"""Run benchmark suites and stream progress to the console.

Usage:
    python scripts/run_benchmarks.py                       # built-in demo suites
    python scripts/run_benchmarks.py --suite config/suites/stdlib.yaml --async
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from benchbridge import BenchConfig, EngineConfig, Suite, bench, build_suites, load_bench_config
from benchbridge import run as run_suites
from benchbridge import suite as make_suite

logger = logging.getLogger(__name__)


def _default_suites(options: EngineConfig) -> list[Suite]:
    data = list(range(256))
    text = "the quick brown fox jumps over the lazy dog " * 16
    return [
        make_suite(
            "containers",
            [
                bench("list(range)", lambda: list(data)),
                bench("tuple(range)", lambda: tuple(data)),
                bench("set(range)", lambda: set(data)),
            ],
            options=options,
        ),
        make_suite(
            "strings",
            [
                bench("str.split", text.split),
                bench("str.upper", text.upper),
                bench("join", lambda: "-".join(text.split())),
            ],
            options=options,
        ),
    ]


def _apply_overrides(config: BenchConfig, args: argparse.Namespace) -> BenchConfig:
    updates: dict[str, object] = {}
    if args.min_time is not None:
        updates["min_time"] = args.min_time
    if args.max_time is not None:
        updates["max_time"] = args.max_time
    if args.min_samples is not None:
        updates["min_samples"] = args.min_samples
        updates["max_samples"] = max(config.engine.max_samples, args.min_samples)
    if updates:
        # Round-trip through validation so CLI values get the same bounds checks.
        config.engine = EngineConfig.model_validate({**config.engine.model_dump(), **updates})
    if args.asynchronous:
        config.asynchronous = True
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


async def _run_async(suites: list[Suite]) -> None:
    run_suites(suites, None, asynchronous=True)
    for current in suites:
        await current.wait()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run benchmark suites.")
    parser.add_argument(
        "--suite",
        type=Path,
        default=None,
        help="YAML file describing engine options and suites (default: built-in demo suites).",
    )
    parser.add_argument("--min-time", type=float, default=None, help="Calibration floor in seconds.")
    parser.add_argument(
        "--max-time", type=float, default=None, help="Sampling budget per benchmark in seconds."
    )
    parser.add_argument("--min-samples", type=int, default=None)
    parser.add_argument(
        "--async",
        dest="asynchronous",
        action="store_true",
        help="Start all suites on an asyncio loop and let them interleave.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    config = load_bench_config(args.suite) if args.suite is not None else BenchConfig()
    config = _apply_overrides(config, args)

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )

    suites = build_suites(config) if args.suite is not None else _default_suites(config.engine)
    logger.info("Running %d suite(s)", len(suites))
    if config.asynchronous:
        asyncio.run(_run_async(suites))
    else:
        run_suites(suites, None)


if __name__ == "__main__":
    main()
