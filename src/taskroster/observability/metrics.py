"""In-process metrics for TaskRoster."""

from dataclasses import dataclass
from threading import Lock
from typing import Any


@dataclass
class Counter:
    value: int = 0

    def inc(self, amount: int = 1) -> None:
        self.value += amount


@dataclass
class Gauge:
    value: float = 0.0

    def add(self, delta: float) -> None:
        self.value += delta


@dataclass
class Timing:
    count: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    def record(self, duration_ms: float) -> None:
        self.count += 1
        self.total_ms += duration_ms
        self.max_ms = max(self.max_ms, duration_ms)

    def snapshot(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "total_ms": self.total_ms,
            "max_ms": self.max_ms,
            "avg_ms": self.total_ms / self.count if self.count else 0.0,
        }


class MetricsRegistry:
    """Thread-safe registry; audit dispatch threads write to it too."""

    def __init__(self) -> None:
        self._lock = Lock()
        self.counters: dict[str, Counter] = {}
        self.gauges: dict[str, Gauge] = {}
        self.timings: dict[str, Timing] = {}

    def inc_counter(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self.counters.setdefault(name, Counter()).inc(amount)

    def adjust_gauge(self, name: str, delta: float) -> None:
        with self._lock:
            self.gauges.setdefault(name, Gauge()).add(delta)

    def observe(self, name: str, duration_ms: float) -> None:
        with self._lock:
            self.timings.setdefault(name, Timing()).record(duration_ms)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": {name: c.value for name, c in self.counters.items()},
                "gauges": {name: g.value for name, g in self.gauges.items()},
                "timings": {name: t.snapshot() for name, t in self.timings.items()},
            }

    def reset(self) -> None:
        with self._lock:
            self.counters.clear()
            self.gauges.clear()
            self.timings.clear()


metrics = MetricsRegistry()
