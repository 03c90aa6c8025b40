from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field


class Counter:
    def __init__(self) -> None:
        self.value = 0

    def inc(self, n: int = 1) -> None:
        self.value += n


class Gauge:
    def __init__(self) -> None:
        self.value = 0

    def set(self, v: int) -> None:
        self.value = v


class Timer:
    def __init__(self) -> None:
        self.last_ms: float | None = None
        self.total_ms = 0.0
        self._start: float | None = None

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> float | None:
        if self._start is None:
            return None
        end = time.perf_counter()
        self.last_ms = (end - self._start) * 1000
        self.total_ms += self.last_ms
        self._start = None
        return self.last_ms

    @contextmanager
    def time(self):  # noqa: ANN201 (to keep it lightweight)
        self.start()
        try:
            yield
        finally:
            self.stop()


@dataclass
class DispatchMetrics:
    """Per-dispatcher counters, kept in process and never exported."""

    events_queued_total: Counter = field(default_factory=Counter)
    events_fired_total: Counter = field(default_factory=Counter)
    events_delivered_total: Counter = field(default_factory=Counter)
    handler_calls_total: Counter = field(default_factory=Counter)
    pending_depth: Gauge = field(default_factory=Gauge)
    cycle_ms: Timer = field(default_factory=Timer)
