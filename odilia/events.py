"""Events that can be sent to the screen reader through its external API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Union

from odilia.modes import ScreenReaderMode
from odilia.roles import Role


class Feature(Enum):
    """Features supported natively by the screen reader."""

    Speech = "Speech"
    Braille = "Braille"


class Direction(Enum):
    """Direction of structural navigation."""

    Forward = "Forward"
    Backward = "Backward"


@dataclass(frozen=True)
class StopSpeech:
    """Stop all current speech."""


@dataclass(frozen=True)
class Enable:
    """Enable a feature."""

    feature: Feature


@dataclass(frozen=True)
class Disable:
    """Disable a feature."""

    feature: Feature


@dataclass(frozen=True)
class ChangeMode:
    """Change the mode of the screen reader."""

    mode: ScreenReaderMode


@dataclass(frozen=True)
class StructuralNavigation:
    """Navigate to the next item with a role, in a direction."""

    direction: Direction
    role: Role


@dataclass(frozen=True)
class Quit:
    """Quit the screen reader."""


ScreenReaderEvent = Union[StopSpeech, Enable, Disable, ChangeMode, StructuralNavigation, Quit]


class ScreenReaderEventType(IntEnum):
    """The kind of a screen reader event, ordered as declared."""

    StopSpeech = 0
    Enable = 1
    Disable = 2
    ChangeMode = 3
    StructuralNavigation = 4
    Quit = 5

    def __str__(self) -> str:
        return self.name


_CLASSES: dict[ScreenReaderEventType, type] = {
    ScreenReaderEventType.StopSpeech: StopSpeech,
    ScreenReaderEventType.Enable: Enable,
    ScreenReaderEventType.Disable: Disable,
    ScreenReaderEventType.ChangeMode: ChangeMode,
    ScreenReaderEventType.StructuralNavigation: StructuralNavigation,
    ScreenReaderEventType.Quit: Quit,
}
_TYPES: dict[type, ScreenReaderEventType] = {cls: kind for kind, cls in _CLASSES.items()}


def event_type(event: ScreenReaderEvent) -> ScreenReaderEventType:
    """Return the kind of the given event."""
    try:
        return _TYPES[type(event)]
    except KeyError:
        raise TypeError(f"not a screen reader event: {event!r}") from None


def _payload(event: ScreenReaderEvent) -> Any:
    if isinstance(event, (StopSpeech, Quit)):
        return None
    if isinstance(event, (Enable, Disable)):
        return event.feature.name
    if isinstance(event, ChangeMode):
        return event.mode.name
    return [{"direction": event.direction.name}, event.role.name]


def to_json(event: ScreenReaderEvent) -> str:
    """Serialize an event to its compact JSON form."""
    kind = event_type(event)
    return json.dumps({kind.name: _payload(event)}, separators=(",", ":"))


def _member(enum_cls: type[Enum], name: Any) -> Any:
    if not isinstance(name, str):
        raise ValueError(f"expected a {enum_cls.__name__} name, got {name!r}")
    try:
        return enum_cls[name]
    except KeyError:
        raise ValueError(f"unknown {enum_cls.__name__}: {name!r}") from None


def from_json(text: str) -> ScreenReaderEvent:
    """Parse an event from its JSON form."""
    data = json.loads(text)
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError("an event must be an object with exactly one key")
    ((name, payload),) = data.items()
    kind = _member(ScreenReaderEventType, name)
    if kind in (ScreenReaderEventType.StopSpeech, ScreenReaderEventType.Quit):
        if payload is not None:
            raise ValueError(f"{kind} takes no data")
        return _CLASSES[kind]()
    if kind in (ScreenReaderEventType.Enable, ScreenReaderEventType.Disable):
        return _CLASSES[kind](_member(Feature, payload))
    if kind is ScreenReaderEventType.ChangeMode:
        return ChangeMode(_member(ScreenReaderMode, payload))
    if not isinstance(payload, list) or len(payload) != 2:
        raise ValueError("StructuralNavigation expects a direction and a role")
    direction, role = payload
    if not isinstance(direction, dict) or set(direction) != {"direction"}:
        raise ValueError(f"invalid direction: {direction!r}")
    return StructuralNavigation(
        _member(Direction, direction["direction"]), _member(Role, role)
    )