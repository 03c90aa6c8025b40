from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any, Protocol

EventTag = Hashable


class SupportsTag(Protocol):
    """Anything the dispatcher can route: a ``tag`` plus optional ``data``."""

    @property
    def tag(self) -> EventTag: ...

    @property
    def data(self) -> Any: ...


Handler = Callable[[Any], None]


@dataclass(frozen=True)
class Event:
    """Immutable event record.

    ``tag`` identifies the event category and may be any hashable value;
    enums are the most maintainable choice in larger code bases. ``data`` is
    an opaque payload and defaults to ``None`` for events that carry none.
    """

    tag: EventTag
    data: Any = None


def get_tag(ev: object) -> EventTag:
    return getattr(ev, "tag", None)
