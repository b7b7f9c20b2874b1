"""Keyboard keys, raw input events, and ordered sets of keys used as bindings."""

from __future__ import annotations

import functools
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Optional, Union


class Key(Enum):
    """A named keyboard key. Keys without a name are plain ``int`` codes."""

    Alt = 1
    AltGr = 2
    Backspace = 3
    CapsLock = 4
    ControlLeft = 5
    ControlRight = 6
    Delete = 7
    DownArrow = 8
    End = 9
    Escape = 10
    F1 = 11
    F10 = 12
    F11 = 13
    F12 = 14
    F2 = 15
    F3 = 16
    F4 = 17
    F5 = 18
    F6 = 19
    F7 = 20
    F8 = 21
    F9 = 22
    Home = 23
    LeftArrow = 24
    MetaLeft = 25
    MetaRight = 26
    PageDown = 27
    PageUp = 28
    Return = 29
    RightArrow = 30
    ShiftLeft = 31
    ShiftRight = 32
    Space = 33
    Tab = 34
    UpArrow = 35
    PrintScreen = 36
    ScrollLock = 37
    Pause = 38
    NumLock = 39
    BackQuote = 40
    Num1 = 41
    Num2 = 42
    Num3 = 43
    Num4 = 44
    Num5 = 45
    Num6 = 46
    Num7 = 47
    Num8 = 48
    Num9 = 49
    Num0 = 50
    Minus = 51
    Equal = 52
    KeyQ = 53
    KeyW = 54
    KeyE = 55
    KeyR = 56
    KeyT = 57
    KeyY = 58
    KeyU = 59
    KeyI = 60
    KeyO = 61
    KeyP = 62
    LeftBracket = 63
    RightBracket = 64
    KeyA = 65
    KeyS = 66
    KeyD = 67
    KeyF = 68
    KeyG = 69
    KeyH = 70
    KeyJ = 71
    KeyK = 72
    KeyL = 73
    SemiColon = 74
    Quote = 75
    BackSlash = 76
    IntlBackslash = 77
    KeyZ = 78
    KeyX = 79
    KeyC = 80
    KeyV = 81
    KeyB = 82
    KeyN = 83
    KeyM = 84
    Comma = 85
    Dot = 86
    Slash = 87
    Insert = 88
    KpReturn = 89
    KpMinus = 90
    KpPlus = 91
    KpMultiply = 92
    KpDivide = 93
    Kp0 = 94
    Kp1 = 95
    Kp2 = 96
    Kp3 = 97
    Kp4 = 98
    Kp5 = 99
    Kp6 = 100
    Kp7 = 101
    Kp8 = 102
    Kp9 = 103
    KpDelete = 104
    Function = 105


class Button(Enum):
    """A named mouse button. Other buttons are plain ``int`` codes (0-255)."""

    Left = "Left"
    Right = "Right"
    Middle = "Middle"


AnyKey = Union[Key, int]
AnyButton = Union[Button, int]

ACTIVATION_KEY: Key = Key.CapsLock
"""The fixed activation key for all keybindings."""

_U32_LIMIT = 1 << 32


def _check_key(key: Any) -> AnyKey:
    if isinstance(key, Key):
        return key
    if isinstance(key, bool) or not isinstance(key, int):
        raise TypeError(f"not a key: {key!r}")
    if not 0 <= key < _U32_LIMIT:
        raise ValueError(f"unknown key code out of range: {key}")
    return key


def _check_button(button: Any) -> AnyButton:
    if isinstance(button, Button):
        return button
    if isinstance(button, bool) or not isinstance(button, int):
        raise TypeError(f"not a button: {button!r}")
    if not 0 <= button <= 255:
        raise ValueError(f"unknown button code out of range: {button}")
    return button


def key_value(key: AnyKey) -> int:
    """Return the sort value of a key.

    Named keys sort after every unnamed key code, in declaration order.
    """
    key = _check_key(key)
    if isinstance(key, Key):
        return key.value << 32
    return key


@dataclass(frozen=True)
class KeyPress:
    """A key went down."""

    key: AnyKey

    def __post_init__(self) -> None:
        _check_key(self.key)


@dataclass(frozen=True)
class KeyRelease:
    """A key went up."""

    key: AnyKey

    def __post_init__(self) -> None:
        _check_key(self.key)


@dataclass(frozen=True)
class ButtonPress:
    """A mouse button went down."""

    button: AnyButton

    def __post_init__(self) -> None:
        _check_button(self.button)


@dataclass(frozen=True)
class ButtonRelease:
    """A mouse button went up."""

    button: AnyButton

    def __post_init__(self) -> None:
        _check_button(self.button)


@dataclass(frozen=True)
class MouseMove:
    """The pointer moved to a position."""

    x: float
    y: float


@dataclass(frozen=True)
class Wheel:
    """The scroll wheel moved."""

    delta_x: int
    delta_y: int


EventType = Union[KeyPress, KeyRelease, ButtonPress, ButtonRelease, MouseMove, Wheel]


@dataclass(frozen=True)
class InputEvent:
    """A raw input event with the time it happened and an optional name."""

    event_type: EventType
    time: float = field(default_factory=time.time)
    name: Optional[str] = None


class KeySetError(ValueError):
    """A key could not be added to a :class:`KeySet`.

    ``reason`` is ``"activation_key"`` when the key is :data:`ACTIVATION_KEY`,
    or ``"already_contains"`` when the set already holds ``key``.
    """

    ACTIVATION_KEY = "activation_key"
    ALREADY_CONTAINS = "already_contains"

    def __init__(self, reason: str, key: AnyKey) -> None:
        self.reason = reason
        self.key = key
        if reason == self.ACTIVATION_KEY:
            text = "the activation key can not be part of a key set"
        else:
            text = f"key already in the set: {key!r}"
        super().__init__(text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeySetError):
            return NotImplemented
        return (self.reason, self.key) == (other.reason, other.key)

    def __hash__(self) -> int:
        return hash((self.reason, self.key))


@functools.total_ordering
class KeySet:
    """An ordered set of keys to be pressed, in order, for a binding."""

    def __init__(self) -> None:
        self._keys: list[AnyKey] = []

    @classmethod
    def from_keys(cls, keys: Iterable[AnyKey]) -> KeySet:
        """Build a set from keys in order; raises :class:`KeySetError` on a bad key."""
        this = cls()
        for key in keys:
            this.insert(key)
        return this

    def insert(self, key: AnyKey) -> None:
        """Append a key; the activation key and repeated keys are refused."""
        key = _check_key(key)
        if key == ACTIVATION_KEY:
            raise KeySetError(KeySetError.ACTIVATION_KEY, key)
        if key in self._keys:
            raise KeySetError(KeySetError.ALREADY_CONTAINS, key)
        self._keys.append(key)

    def starts_with(self, prefix: Iterable[AnyKey]) -> bool:
        """Return True if this set begins with the keys of ``prefix``, in order."""
        head = tuple(prefix)
        return tuple(self._keys[: len(head)]) == head

    def copy(self) -> KeySet:
        """Return an independent copy."""
        other = KeySet()
        other._keys = list(self._keys)
        return other

    def __iter__(self) -> Iterator[AnyKey]:
        return iter(list(self._keys))

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeySet):
            return self._keys == other._keys
        if isinstance(other, (list, tuple)):
            return tuple(self._keys) == tuple(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, KeySet):
            return NotImplemented
        return [key_value(k) for k in self._keys] < [key_value(k) for k in other._keys]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return repr(self._keys)