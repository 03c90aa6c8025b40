import json

from frame_events import app
from frame_events.config import Settings
from frame_events.dispatcher import Dispatcher
from frame_events.events import Event


def test_demo_run_resolves_to_death():
    settings = Settings(frame_rate_hz=0, max_frames=100, demo_health=30, demo_damage=10)
    # 4 hits and 3 damage events before the death event.
    assert app.run(settings) == 8


def test_demo_respects_max_frames():
    settings = Settings(frame_rate_hz=0, max_frames=2, demo_health=30, demo_damage=10)
    assert app.run(settings) == 1


def test_combat_unsubscribes_after_death():
    dispatcher = Dispatcher()
    target = app.Target(name="dummy", health=5)
    combat = app.Combat(dispatcher, target, damage=10)

    dispatcher.fire(Event(app.GameEvent.HIT))
    dispatcher.process_events()
    assert target.health == -5
    dispatcher.process_events()

    assert combat.deaths == ["dummy"]
    assert not dispatcher.has_handlers(app.GameEvent.HIT)
    assert dispatcher.has_handlers(app.GameEvent.DEATH)


def test_demo_start_log_carries_settings(monkeypatch, capsys):
    monkeypatch.setenv("LOG_FORMAT", "json")
    settings = Settings(frame_rate_hz=0, max_frames=3, demo_health=40, demo_damage=7)

    app.run(settings)

    lines = [json.loads(line) for line in capsys.readouterr().err.strip().splitlines()]
    start = next(line for line in lines if line["message"].startswith("demo starting"))
    assert "health=40" in start["message"]
    assert "damage=7" in start["message"]
    assert "max_frames=3" in start["message"]
