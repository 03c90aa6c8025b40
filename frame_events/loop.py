"""Reference host loop that drives a dispatcher once per frame."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class FrameLoop:
    """Fixed-rate loop calling :meth:`Dispatcher.process_events` each frame.

    ``on_frame`` hooks run after the dispatcher has processed the frame's
    events and receive the frame number. They are the place for game logic
    that produces new events. ``clock`` and ``sleep`` are injectable so tests
    can run without real time passing.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        frame_rate_hz: int = 60,
        max_frames: int | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if frame_rate_hz < 0:
            raise ValueError("frame_rate_hz must be >= 0")
        self.dispatcher = dispatcher
        self.frame_budget = 1.0 / frame_rate_hz if frame_rate_hz else 0.0
        self.max_frames = max_frames
        self.frame = 0
        self.delivered_total = 0
        self._running = False
        self._clock = clock
        self._sleep = sleep
        self._hooks: list[Callable[[int], None]] = []

    def on_frame(self, hook: Callable[[int], None]) -> Callable[[int], None]:
        self._hooks.append(hook)
        return hook

    def tick(self) -> int:
        """Run a single frame and return the number of events delivered."""

        self.frame += 1
        delivered = self.dispatcher.process_events()
        self.delivered_total += delivered
        for hook in list(self._hooks):
            hook(self.frame)
        if delivered:
            logger.debug("frame", extra={"cycle": self.frame, "batch_size": delivered})
        return delivered

    def stop(self) -> None:
        self._running = False

    def run(self) -> int:
        """Tick until ``max_frames`` is reached or :meth:`stop` is called.

        Returns the number of frames run by this call.
        """

        self._running = True
        frames = 0
        try:
            while self._running:
                if self.max_frames is not None and self.frame >= self.max_frames:
                    break
                started = self._clock()
                self.tick()
                frames += 1
                if self.frame_budget:
                    remaining = self.frame_budget - (self._clock() - started)
                    if remaining > 0:
                        self._sleep(remaining)
        finally:
            self._running = False
        return frames
