from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass

from .errors import ErrorCategory, InvalidEventError, InvalidHandlerError, InvalidTagError
from .events import EventTag, Handler, SupportsTag, get_tag
from .metrics import DispatchMetrics

logger = logging.getLogger(__name__)

HandlerKey = Hashable


def handler_key(handler: Handler) -> HandlerKey:
    """Return the identity used to de-duplicate and remove ``handler``.

    Attribute access such as ``obj.method`` or ``items.append`` builds a new
    bound method each time, but bound methods compare equal and hash alike
    when they wrap the same function on the same instance. Hashable handlers
    are therefore their own key; unhashable ones fall back to ``id``.
    """

    try:
        hash(handler)
    except TypeError:
        return ("id", id(handler))
    return handler


def _describe(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


def _check_tag(tag: object) -> None:
    if tag is None:
        raise InvalidTagError("event tag must not be None")
    try:
        hash(tag)
    except TypeError as exc:
        raise InvalidTagError(f"event tag must be hashable, got {type(tag).__name__}") from exc


def _check_handler(handler: object) -> None:
    if not callable(handler):
        raise InvalidHandlerError(f"handler must be callable, got {type(handler).__name__}")


def _check_event(event: object) -> EventTag:
    if event is None:
        raise InvalidEventError("event must not be None")
    tag = get_tag(event)
    try:
        _check_tag(tag)
    except InvalidTagError as exc:
        raise InvalidEventError(f"event has no usable tag: {exc}") from exc
    return tag


@dataclass(frozen=True)
class Subscription:
    """Handle returned by :meth:`Dispatcher.register`."""

    dispatcher: Dispatcher
    tag: EventTag
    handler: Handler

    def cancel(self) -> bool:
        return self.dispatcher.remove(self.tag, self.handler)


class Dispatcher:
    """Synchronous event dispatcher driven by a host update loop.

    Events are delivered in one of two ways:

    * :meth:`queue` stores the event; it is delivered by the next call to
      :meth:`process_events`, normally made once per frame.
    * :meth:`fire` delivers the event before returning.

    :meth:`process_events` only delivers events queued before it was called.
    Events queued by handlers while a batch is delivered wait for the next
    call, so a chain of N events queuing further events takes N cycles to
    resolve instead of one unbounded pass. Use :meth:`fire` sparingly: it
    bypasses that limit.

    Handlers for a tag run in registration order. Registering the same
    handler twice keeps a single entry, moved to the end. Registering or
    removing handlers while an event is delivered takes effect with the next
    delivery.

    Unknown tags and unknown handlers are ignored. Invalid arguments (a
    ``None`` or unhashable tag, a non callable handler, an event without a
    tag) raise a :class:`~frame_events.errors.DispatchError` subclass at the
    call site. Exceptions raised by handlers are logged and propagate to the
    caller unchanged; the rest of a batch being processed is dropped.

    Subscribers either keep the :class:`Subscription` returned by
    :meth:`register` and cancel it later, or decorate a function with
    :meth:`on`, which hands the function back untouched::

        @dispatcher.on(GameEvent.DAMAGE)
        def apply_damage(event): ...

        dispatcher.remove(GameEvent.DAMAGE, apply_damage)
    """

    def __init__(self) -> None:
        self._handlers: dict[EventTag, list[tuple[HandlerKey, Handler]]] = {}
        self._pending: deque[SupportsTag] = deque()
        self.cycle = 0
        self.metrics = DispatchMetrics()

    # Registration ------------------------------------------------------------

    def register(self, tag: EventTag, handler: Handler) -> Subscription:
        """Register ``handler`` for events tagged ``tag``."""

        _check_tag(tag)
        _check_handler(handler)
        key = handler_key(handler)
        entries = self._handlers.get(tag)
        if entries is None:
            self._handlers[tag] = [(key, handler)]
        else:
            # Drop an existing entry first so the handler is never called twice.
            entries[:] = [entry for entry in entries if entry[0] != key]
            entries.append((key, handler))
        logger.debug("register", extra={"event_tag": tag, "handler": _describe(handler)})
        return Subscription(self, tag, handler)

    def on(
        self, tag: EventTag, handler: Handler | None = None
    ) -> Handler | Callable[[Handler], Handler]:
        """Register ``handler`` for ``tag``.

        If ``handler`` is ``None`` this functions as a decorator factory.
        """

        if handler is not None:
            self.register(tag, handler)
            return handler

        def decorator(func: Handler) -> Handler:
            self.register(tag, func)
            return func

        return decorator

    def remove(self, tag: EventTag, handler: Handler) -> bool:
        """Remove ``handler`` from ``tag``. Returns whether it was registered."""

        _check_tag(tag)
        _check_handler(handler)
        entries = self._handlers.get(tag)
        if not entries:
            return False
        key = handler_key(handler)
        kept = [entry for entry in entries if entry[0] != key]
        if len(kept) == len(entries):
            return False
        if kept:
            entries[:] = kept
        else:
            del self._handlers[tag]
        logger.debug("remove", extra={"event_tag": tag, "handler": _describe(handler)})
        return True

    # Delivery ----------------------------------------------------------------

    def queue(self, event: SupportsTag) -> None:
        """Store ``event`` for delivery by the next :meth:`process_events`."""

        _check_event(event)
        self._pending.append(event)
        self.metrics.events_queued_total.inc()
        self.metrics.pending_depth.set(len(self._pending))

    def fire(self, event: SupportsTag) -> None:
        """Deliver ``event`` to its handlers before returning."""

        tag = _check_event(event)
        self.metrics.events_fired_total.inc()
        self._deliver(tag, event)

    def process_events(self) -> int:
        """Deliver the events queued so far and return how many there were."""

        batch, self._pending = self._pending, deque()
        self.metrics.pending_depth.set(0)
        self.cycle += 1
        with self.metrics.cycle_ms.time():
            for event in batch:
                self._deliver(get_tag(event), event)
        self.metrics.pending_depth.set(len(self._pending))
        logger.debug(
            "process_events",
            extra={
                "cycle": self.cycle,
                "batch_size": len(batch),
                "elapsed_ms": self.metrics.cycle_ms.last_ms,
            },
        )
        return len(batch)

    def _deliver(self, tag: EventTag, event: SupportsTag) -> None:
        entries = self._handlers.get(tag)
        if not entries:
            return
        self.metrics.events_delivered_total.inc()
        # Iterate a snapshot; handlers may register or remove while we run.
        for _key, handler in tuple(entries):
            self.metrics.handler_calls_total.inc()
            try:
                handler(event)
            except Exception:
                logger.error(
                    "handler_failed",
                    exc_info=True,
                    extra={
                        "event_tag": tag,
                        "handler": _describe(handler),
                        "category": ErrorCategory.HANDLER.value,
                    },
                )
                raise

    # Introspection -----------------------------------------------------------

    @property
    def pending(self) -> int:
        return len(self._pending)

    def handlers(self, tag: EventTag) -> tuple[Handler, ...]:
        return tuple(handler for _key, handler in self._handlers.get(tag, ()))

    def has_handlers(self, tag: EventTag) -> bool:
        return bool(self._handlers.get(tag))

    def tags(self) -> Iterator[EventTag]:
        return iter(tuple(self._handlers))
