"""Commands that the screen reader carries out, and conversions into them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Iterator, Union

from odilia.errors import OdiliaError
from odilia.primitive import AccessiblePrimitive


class Priority(Enum):
    """Priority of a spoken message."""

    Important = "important"
    Message = "message"
    Text = "text"
    Notification = "notification"
    Progress = "progress"


class CommandType(IntEnum):
    """The kind of a command, ordered as declared."""

    Speak = 0
    Focus = 1
    CaretPos = 2
    SetState = 3

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CaretPos:
    """Move the caret to a position."""

    position: int

    def __post_init__(self) -> None:
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise TypeError(f"caret position must be an int, got {self.position!r}")
        if self.position < 0:
            raise ValueError(f"caret position must not be negative: {self.position}")


@dataclass(frozen=True)
class Speak:
    """Speak a piece of text with a priority."""

    text: str
    priority: Priority


@dataclass(frozen=True)
class Focus:
    """Move focus to an accessible."""

    item: AccessiblePrimitive


@dataclass(frozen=True)
class SetState:
    """Turn a state of an accessible on or off."""

    item: AccessiblePrimitive
    state: str
    enabled: bool


OdiliaCommand = Union[Speak, Focus, CaretPos, SetState]

_TYPES: dict[type, CommandType] = {
    Speak: CommandType.Speak,
    Focus: CommandType.Focus,
    CaretPos: CommandType.CaretPos,
    SetState: CommandType.SetState,
}


def command_type(command: OdiliaCommand) -> CommandType:
    """Return the kind of the given command."""
    try:
        return _TYPES[type(command)]
    except KeyError:
        raise TypeError(f"not a command: {command!r}") from None


def _is_command(value: Any) -> bool:
    return type(value) in _TYPES


def _expand(value: Any) -> Iterator[OdiliaCommand]:
    if _is_command(value):
        yield value
    elif isinstance(value, tuple):
        if len(value) == 2 and isinstance(value[0], Priority) and isinstance(value[1], str):
            yield Speak(value[1], value[0])
        else:
            for part in value:
                yield from _expand(part)
    elif isinstance(value, list):
        for item in value:
            if not _is_command(item):
                raise TypeError(f"not a command: {item!r}")
            yield item
    else:
        raise TypeError(f"cannot be turned into commands: {value!r}")


def into_commands(value: Any) -> Iterator[OdiliaCommand]:
    """Turn a value into an iterator of commands.

    Accepted are single commands, ``(Priority, str)`` pairs (spoken text),
    lists of commands, and tuples of any of these, which are chained in order.
    The empty tuple yields nothing.
    """
    return iter(list(_expand(value)))


def try_into_commands(value: Any) -> Iterator[OdiliaCommand]:
    """Like :func:`into_commands`, but raise if ``value`` is an exception.

    Exceptions that are not already :class:`OdiliaError` are wrapped in one.
    """
    if isinstance(value, OdiliaError):
        raise value
    if isinstance(value, BaseException):
        raise OdiliaError(str(value)) from value
    return into_commands(value)