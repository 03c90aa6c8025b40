import dataclasses
from enum import Enum

import pytest

from frame_events.events import Event, get_tag


class Tag(Enum):
    FIRE = 1


def test_event_is_immutable_and_data_defaults_to_none():
    ev = Event(Tag.FIRE)
    assert ev.data is None
    with pytest.raises(dataclasses.FrozenInstanceError):
        ev.tag = Tag.FIRE  # type: ignore[misc]


def test_events_compare_by_value():
    assert Event("damage", 10) == Event("damage", 10)
    assert Event("damage", 10) != Event("damage", 5)


def test_get_tag_handles_missing_attribute():
    assert get_tag(Event(Tag.FIRE)) is Tag.FIRE
    assert get_tag(object()) is None
    assert get_tag(None) is None
