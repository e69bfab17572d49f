"""Metric helpers: gauges, scoped gauge counting and path normalisation."""

from __future__ import annotations

import contextlib
import threading
from collections.abc import Iterator


class Gauge:
    """A thread-safe value that can go up and down."""

    def __init__(self, name: str = "", description: str = "") -> None:
        self.name = name
        self.description = description
        self._value = 0.0
        self._lock = threading.Lock()

    @property
    def value(self) -> float:
        with self._lock:
            return self._value

    def set(self, value: float) -> None:
        with self._lock:
            self._value = float(value)

    def inc(self) -> None:
        with self._lock:
            self._value += 1

    def dec(self) -> None:
        with self._lock:
            self._value -= 1


@contextlib.contextmanager
def scoped_inc(gauge: Gauge) -> Iterator[Gauge]:
    """Increment the gauge for the duration of a ``with`` block."""
    gauge.inc()
    try:
        yield gauge
    finally:
        gauge.dec()


def cleanup_path(path: str) -> str:
    """Reduce a request path to a low-cardinality label.

    Paths naming a file (containing a dot) become ``<static>``; others keep
    at most their first two segments.
    """
    if not path:
        return path
    if not path.startswith("/"):
        path = "/" + path
    if "." in path:
        return "<static>"
    return "/".join(path.split("/")[:3])