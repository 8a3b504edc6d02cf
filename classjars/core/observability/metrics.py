"""
Metrics — what the query services did, kept in memory.

Two kinds of series:

    counts    ``resolver.strategy{strategy=full_scan}``,
              ``staleness.verdict{reason=unsaved_edits,result=stale}``
    timings   ``resolver.duration_ms`` (count, total, slowest)

Nothing is exported. ``--debug`` logs a snapshot when a command ends,
and tests read counts to see which branch answered.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


def series(name: str, **labels: str) -> str:
    """Render a series key: ``name{k=v,...}`` with labels sorted."""
    if not labels:
        return name
    return name + "{" + ",".join(f"{k}={v}" for k, v in sorted(labels.items())) + "}"


@dataclass
class Timing:
    """Aggregate of observed durations in milliseconds."""

    count: int = 0
    total_ms: float = 0.0
    slowest_ms: float = 0.0

    def observe(self, elapsed_ms: float) -> None:
        self.count += 1
        self.total_ms += elapsed_ms
        self.slowest_ms = max(self.slowest_ms, elapsed_ms)

    @property
    def mean_ms(self) -> float:
        return self.total_ms / self.count if self.count else 0.0


class MetricsRegistry:
    """Labelled counts and named timings, safe to share between threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}
        self._timings: dict[str, Timing] = {}

    def inc(self, name: str, n: int = 1, **labels: str) -> None:
        key = series(name, **labels)
        with self._lock:
            self._counts[key] = self._counts.get(key, 0) + n

    def count(self, name: str, **labels: str) -> int:
        """Current value of a series, 0 if it was never incremented."""
        return self._counts.get(series(name, **labels), 0)

    def timing(self, name: str) -> Timing:
        with self._lock:
            return self._timings.setdefault(name, Timing())

    @contextmanager
    def timed(self, name: str) -> Iterator[None]:
        """Record the duration of the ``with`` body under ``name``."""
        start = time.monotonic()
        try:
            yield
        finally:
            elapsed_ms = (time.monotonic() - start) * 1000
            timing = self.timing(name)
            with self._lock:
                timing.observe(elapsed_ms)

    def snapshot(self) -> dict[str, dict]:
        with self._lock:
            return {
                "counts": dict(sorted(self._counts.items())),
                "timings": {
                    name: {
                        "count": t.count,
                        "total_ms": round(t.total_ms, 3),
                        "mean_ms": round(t.mean_ms, 3),
                        "slowest_ms": round(t.slowest_ms, 3),
                    }
                    for name, t in sorted(self._timings.items())
                },
            }

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()
            self._timings.clear()


# Shared by the services unless a registry is injected.
metrics = MetricsRegistry()
