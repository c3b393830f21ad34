"""Minimal event emitter shared by suites."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

Listener = Callable[["Event"], Any]


@dataclass
class Event:
    type: str
    target: Any = None
    current_target: Any = None
    timestamp: float = field(default_factory=time.time)


class EventEmitter:
    """Register listeners per event type and call them in registration order."""

    def __init__(self) -> None:
        self._events: dict[str, list[Listener]] = {}

    def on(self, types: str, listener: Listener) -> "EventEmitter":
        for name in types.split():
            self._events.setdefault(name, []).append(listener)
        return self

    def off(self, types: Optional[str] = None, listener: Optional[Listener] = None) -> "EventEmitter":
        if types is None:
            if listener is None:
                self._events.clear()
                return self
            names = list(self._events)
        else:
            names = types.split()
        for name in names:
            registered = self._events.get(name)
            if not registered:
                continue
            if listener is None:
                del self._events[name]
                continue
            self._events[name] = [fn for fn in registered if fn is not listener]
        return self

    def emit(self, event: Event | str, target: Any = None) -> Event:
        if isinstance(event, str):
            event = Event(type=event, target=self if target is None else target)
        event.current_target = self
        # Copy so a listener can detach itself mid-dispatch.
        for listener in list(self._events.get(event.type, ())):
            listener(event)
        return event

    def listeners(self, type: str) -> list[Listener]:
        return list(self._events.get(type, ()))


__all__ = ["Event", "EventEmitter", "Listener"]
