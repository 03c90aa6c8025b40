import json
import logging
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from frame_events.logging import configure_logging
from frame_events.metrics import Counter, DispatchMetrics, Gauge, Timer


def test_json_logging_structure(monkeypatch, capsys):
    monkeypatch.setenv("LOG_FORMAT", "json")
    configure_logging()
    logging.getLogger(__name__).info(
        "sample",
        extra={
            "event_tag": "damage",
            "handler": "on_damage",
            "batch_size": 3,
            "cycle": 7,
            "elapsed_ms": 1.2,
            "category": "handler",
        },
    )
    captured = capsys.readouterr().err.strip().splitlines()[-1]
    data = json.loads(captured)
    assert data["message"] == "sample"
    assert data["level"] == "info"
    for key in ["event_tag", "handler", "batch_size", "cycle", "elapsed_ms", "category"]:
        assert key in data
    assert data["cycle"] == 7


def test_configure_logging_accepts_lowercase_level(monkeypatch):
    monkeypatch.setenv("LOG_FORMAT", "plain")
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("INFO")
    assert logging.getLogger().level == logging.INFO


def test_counter_gauge_and_timer_update():
    counter = Counter()
    counter.inc()
    counter.inc(2)
    assert counter.value == 3

    gauge = Gauge()
    gauge.set(5)
    assert gauge.value == 5

    timer = Timer()
    with timer.time():
        time.sleep(0.001)
    assert timer.last_ms is not None and timer.last_ms > 0
    assert timer.total_ms >= timer.last_ms
    assert Timer().stop() is None


def test_dispatch_metrics_are_per_instance():
    a, b = DispatchMetrics(), DispatchMetrics()
    a.events_queued_total.inc()
    assert b.events_queued_total.value == 0
