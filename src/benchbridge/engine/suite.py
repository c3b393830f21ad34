"""Ordered benchmark collections with lifecycle events."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterator, Optional, Union

from benchbridge.config import EngineConfig
from benchbridge.engine.benchmark import Benchmark
from benchbridge.engine.events import EventEmitter

logger = logging.getLogger(__name__)

Criterion = Union[str, Callable[[Benchmark], bool]]


class Suite(EventEmitter):
    """Named, ordered benchmarks run together.

    Events: ``add``, ``start``, ``cycle`` (once per benchmark), ``error``
    (before ``cycle`` when a benchmark failed), ``abort``, ``complete``
    and ``reset``. Listeners receive an :class:`~benchbridge.engine.events.Event`
    whose ``current_target`` is the suite; for ``add``/``cycle``/``error``
    the ``target`` is the benchmark.
    """

    def __init__(self, name: str, options: Optional[EngineConfig] = None) -> None:
        super().__init__()
        self.name = name
        self.options = options or EngineConfig()
        self.benchmarks: list[Benchmark] = []
        self.running = False
        self.aborted = False
        self._done: Optional[asyncio.Future[Suite]] = None
        self._generation = 0

    def __len__(self) -> int:
        return len(self.benchmarks)

    def __iter__(self) -> Iterator[Benchmark]:
        return iter(self.benchmarks)

    def __getitem__(self, index: int) -> Benchmark:
        return self.benchmarks[index]

    def __repr__(self) -> str:
        return f"Suite(name={self.name!r}, benchmarks={[b.name for b in self.benchmarks]!r})"

    def add(self, name: str, fn: Callable[[], Any]) -> "Suite":
        benchmark = Benchmark(name, fn, self.options)
        self.benchmarks.append(benchmark)
        self.emit("add", target=benchmark)
        return self

    def run(self, asynchronous: bool = False) -> "Suite":
        """Run every benchmark in order.

        With ``asynchronous=True`` each benchmark is scheduled as its own
        callback on the running asyncio loop and this returns right after
        ``start`` fires; ``await suite.wait()`` to block until completion.

        Running a suite that is already running aborts the active run first;
        anyone waiting on it is released with the suite.
        """
        loop = asyncio.get_running_loop() if asynchronous else None
        if self.running:
            self.abort()
            self.running = False
            if self._done is not None and not self._done.done():
                self._done.set_result(self)
        self.reset()
        self._generation += 1
        generation = self._generation
        self.running = True
        queue = list(self.benchmarks)
        logger.debug("Suite %r starting with %d benchmark(s)", self.name, len(queue))
        try:
            self.emit("start")
        except Exception:
            self.running = False
            raise
        if loop is not None:
            self._done = loop.create_future()
            loop.call_soon(self._step, queue, loop, self._done, generation)
            return self
        try:
            while self._cycle_next(queue, generation):
                pass
        finally:
            if generation == self._generation:
                self.running = False
        # A listener may have restarted the suite; that run owns completion.
        if generation == self._generation:
            self._finish()
        return self

    async def wait(self) -> "Suite":
        if self._done is None:
            return self
        return await self._done

    def abort(self) -> "Suite":
        if self.running:
            self.aborted = True
            self.emit("abort")
        return self

    def reset(self) -> "Suite":
        if self.running:
            return self
        self.aborted = False
        self._done = None
        for benchmark in self.benchmarks:
            benchmark.reset()
        self.emit("reset")
        return self

    def filter(self, criterion: Criterion) -> "Suite":
        """Return a new suite holding the benchmarks selected by ``criterion``."""
        if callable(criterion):
            selected = [b for b in self.benchmarks if criterion(b)]
        elif criterion == "successful":
            selected = [b for b in self.benchmarks if b.cycles and b.error is None]
        elif criterion in ("fastest", "slowest"):
            candidates = [b for b in self.benchmarks if b.cycles and b.error is None]
            if candidates:
                pick = max if criterion == "fastest" else min
                best = pick(b.hz for b in candidates)
                selected = [b for b in candidates if b.hz == best]
            else:
                selected = []
        else:
            raise ValueError(f"Unknown filter criterion: {criterion!r}")
        result = Suite(self.name, self.options)
        result.benchmarks = selected
        return result

    def _cycle_next(self, queue: list[Benchmark], generation: int) -> bool:
        if generation != self._generation or self.aborted or not queue:
            return False
        benchmark = queue.pop(0)
        benchmark.run(self.options)
        if benchmark.error is not None:
            self.emit("error", target=benchmark)
        self.emit("cycle", target=benchmark)
        return True

    def _step(
        self,
        queue: list[Benchmark],
        loop: asyncio.AbstractEventLoop,
        done: asyncio.Future[Suite],
        generation: int,
    ) -> None:
        if generation != self._generation:
            return
        try:
            if self._cycle_next(queue, generation):
                loop.call_soon(self._step, queue, loop, done, generation)
                return
            if generation != self._generation:
                return
            self.running = False
            self._finish()
        except Exception as exc:
            self.running = False
            if done is not None and not done.done():
                done.set_exception(exc)
                return
            raise
        if done is not None and not done.done():
            done.set_result(self)

    def _finish(self) -> None:
        if self.aborted:
            logger.debug("Suite %r aborted", self.name)
            return
        self.emit("complete")


__all__ = ["Criterion", "Suite"]
