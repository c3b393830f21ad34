"""Build suites from named callables and run them with console progress."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TextIO, TypeVar

from benchbridge.config import EngineConfig
from benchbridge.engine.events import Event
from benchbridge.engine.suite import Suite

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class BenchmarkDescriptor:
    name: str
    fn: Callable[[], Any]


def bench(name: str, fn: Callable[[], Any]) -> BenchmarkDescriptor:
    return BenchmarkDescriptor(name=name, fn=fn)


def suite(
    name: str,
    descriptors: Iterable[BenchmarkDescriptor],
    options: Optional[EngineConfig] = None,
) -> Suite:
    """Create a suite and register each descriptor in order (no dedup, no validation)."""
    built = Suite(name, options)
    for descriptor in descriptors:
        built = built.add(descriptor.name, descriptor.fn)
    return built


def run(
    suites: Iterable[Suite],
    passthrough: T,
    *,
    asynchronous: bool = False,
    stream: Optional[TextIO] = None,
) -> T:
    """Start every suite in order with console observers and hand back ``passthrough``.

    Each suite prints ``Benchmarking <name>`` on start, the engine's rendering
    of every finished benchmark, and ``Done`` on completion. In asynchronous
    mode the suites are only started here; they finish on the running loop.
    """

    def write(line: str) -> None:
        print(line, file=stream if stream is not None else sys.stdout)

    def on_start(event: Event) -> None:
        write(f"Benchmarking {event.current_target.name}")

    def on_cycle(event: Event) -> None:
        write(str(event.target))

    def on_complete(event: Event) -> None:
        write("Done")

    for current in suites:
        logger.debug("Starting suite %r (asynchronous=%s)", current.name, asynchronous)
        current.on("start", on_start).on("cycle", on_cycle).on("complete", on_complete).run(
            asynchronous=asynchronous
        )
    return passthrough


__all__ = ["BenchmarkDescriptor", "bench", "run", "suite"]
