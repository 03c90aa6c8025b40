from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .config import Settings, get_settings
from .dispatcher import Dispatcher
from .events import Event
from .logging import configure_logging
from .loop import FrameLoop


class GameEvent(Enum):
    HIT = "hit"
    DAMAGE = "damage"
    DEATH = "death"


@dataclass
class Target:
    name: str
    health: int

    @property
    def alive(self) -> bool:
        return self.health > 0


class Combat:
    """Demo subscriber: hits become damage, lethal damage becomes death.

    Each step is queued, so a hit takes two frames to turn into a death.
    """

    def __init__(self, dispatcher: Dispatcher, target: Target, damage: int) -> None:
        self.dispatcher = dispatcher
        self.target = target
        self.damage = damage
        self.deaths: list[str] = []
        dispatcher.register(GameEvent.HIT, self.on_hit)
        dispatcher.register(GameEvent.DAMAGE, self.on_damage)
        dispatcher.register(GameEvent.DEATH, self.on_death)

    def on_hit(self, event: Event) -> None:
        if self.target.alive:
            self.dispatcher.queue(Event(GameEvent.DAMAGE, self.damage))

    def on_damage(self, event: Event) -> None:
        if not self.target.alive:
            return
        self.target.health -= event.data
        if not self.target.alive:
            self.dispatcher.queue(Event(GameEvent.DEATH, self.target.name))

    def on_death(self, event: Event) -> None:
        self.deaths.append(event.data)
        # Nothing else listens once the target is gone.
        self.dispatcher.remove(GameEvent.HIT, self.on_hit)
        self.dispatcher.remove(GameEvent.DAMAGE, self.on_damage)


def run(settings: Settings | None = None) -> int:
    """Run the demo and return the number of events delivered."""

    settings = settings or get_settings()
    configure_logging(settings.log_level)
    log = logging.getLogger(__name__)

    dispatcher = Dispatcher()
    loop = FrameLoop(
        dispatcher,
        frame_rate_hz=settings.frame_rate_hz,
        max_frames=settings.max_frames,
    )
    target = Target(name="dummy", health=settings.demo_health)
    combat = Combat(dispatcher, target, settings.demo_damage)

    @loop.on_frame
    def shoot(frame: int) -> None:
        if target.alive:
            dispatcher.queue(Event(GameEvent.HIT, frame))
        elif combat.deaths and not dispatcher.pending:
            loop.stop()

    log.info(
        "demo starting rate=%sHz max_frames=%s health=%s damage=%s",
        settings.frame_rate_hz,
        settings.max_frames,
        settings.demo_health,
        settings.demo_damage,
    )
    frames = loop.run()
    log.info(
        "demo finished",
        extra={
            "cycle": frames,
            "batch_size": loop.delivered_total,
            "elapsed_ms": dispatcher.metrics.cycle_ms.total_ms,
        },
    )
    return loop.delivered_total


def main() -> None:
    run()
