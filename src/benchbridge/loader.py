"""Turn declarative suite entries into engine suites."""

from __future__ import annotations

import importlib
from typing import Any

from benchbridge.bridge import bench, suite
from benchbridge.config import BenchConfig
from benchbridge.engine.suite import Suite


def resolve_target(reference: str) -> Any:
    """Resolve ``"package.module:attr.path"`` to the object it names."""
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Invalid target {reference!r}; expected 'module:attribute'")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Cannot import module {module_name!r} for target {reference!r}") from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ValueError(f"Target {reference!r} has no attribute {part!r}") from exc
    return obj


def build_suites(config: BenchConfig) -> list[Suite]:
    return [
        suite(
            entry.name,
            [bench(item.name, resolve_target(item.target)) for item in entry.benchmarks],
            options=config.engine,
        )
        for entry in config.suites
    ]


__all__ = ["build_suites", "resolve_target"]
