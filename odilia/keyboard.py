"""Keybinding state machine: combos of keys, the modes they apply in, and the key callback."""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional

from odilia.events import (
    ChangeMode,
    Direction,
    Quit,
    ScreenReaderEvent,
    StopSpeech,
    StructuralNavigation,
)
from odilia.keys import ACTIVATION_KEY, InputEvent, Key, KeyPress, KeyRelease, KeySet
from odilia.modes import ScreenReaderMode
from odilia.roles import Role

_log = logging.getLogger(__name__)


class ComboError(ValueError):
    """A combo could not be added to a :class:`ComboSet`.

    ``reason`` is ``"identical"`` when an equal key set exists (``new`` holds it),
    or ``"same_prefix"`` when one of the sets starts with the other
    (``original`` is the existing set, ``new`` the attempted one).
    """

    IDENTICAL = "identical"
    SAME_PREFIX = "same_prefix"

    def __init__(self, reason: str, new: KeySet, original: Optional[KeySet] = None) -> None:
        self.reason = reason
        self.new = new
        self.original = original
        if reason == self.IDENTICAL:
            text = f"an identical combo already exists: {new!r}"
        else:
            text = f"combo {new!r} shares a prefix with existing combo {original!r}"
        super().__init__(text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComboError):
            return NotImplemented
        return (self.reason, self.new, self.original) == (other.reason, other.new, other.original)

    def __hash__(self) -> int:
        return hash((self.reason, repr(self.new), repr(self.original)))


class SetError(ValueError):
    """A combo set could not be added to a :class:`ComboSets`.

    Reasons:

    - ``"identical_combo"``: ``mode`` is the attempted mode, ``keys`` the clashing set.
    - ``"same_prefix_combo"``: ``original`` and ``attempted`` are ``(mode, keys)`` pairs.
    - ``"unpressable_key"``: a combo has no keys.
    - ``"unreachable_mode"``: no existing combo changes to ``mode``.
    """

    IDENTICAL_COMBO = "identical_combo"
    SAME_PREFIX_COMBO = "same_prefix_combo"
    UNPRESSABLE_KEY = "unpressable_key"
    UNREACHABLE_MODE = "unreachable_mode"

    def __init__(
        self,
        reason: str,
        *,
        mode: Optional[ScreenReaderMode] = None,
        keys: Optional[KeySet] = None,
        original: Optional[tuple[Optional[ScreenReaderMode], KeySet]] = None,
        attempted: Optional[tuple[Optional[ScreenReaderMode], KeySet]] = None,
    ) -> None:
        self.reason = reason
        self.mode = mode
        self.keys = keys
        self.original = original
        self.attempted = attempted
        if reason == self.IDENTICAL_COMBO:
            text = f"identical combo already set for mode {mode!r}: {keys!r}"
        elif reason == self.SAME_PREFIX_COMBO:
            text = f"combo {attempted!r} shares a prefix with {original!r}"
        elif reason == self.UNPRESSABLE_KEY:
            text = "a combo has no keys"
        else:
            text = f"mode is not reachable by any existing combo: {mode!r}"
        super().__init__(text)

    def _fields(self) -> tuple[Any, ...]:
        return (self.reason, self.mode, self.keys, self.original, self.attempted)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SetError):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash((self.reason, self.mode))


class ComboSet:
    """Key combos and the event each one triggers."""

    def __init__(self) -> None:
        self._combos: list[tuple[KeySet, ScreenReaderEvent]] = []

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[KeySet, ScreenReaderEvent]]) -> ComboSet:
        """Build from ``(keys, event)`` pairs; raises :class:`ComboError` on a clash."""
        this = cls()
        for keys, event in pairs:
            this.insert(keys, event)
        return this

    def keys(self) -> Iterator[KeySet]:
        """Iterate over the key sets, in insertion order."""
        return iter([keys for keys, _event in self._combos])

    def insert(self, keys: KeySet, event: ScreenReaderEvent) -> None:
        """Add a combo; identical or prefix-sharing key sets are refused."""
        for existing in self.keys():
            if existing == keys:
                raise ComboError(ComboError.IDENTICAL, keys.copy())
            if existing.starts_with(keys) or keys.starts_with(existing):
                raise ComboError(ComboError.SAME_PREFIX, keys.copy(), existing.copy())
        self._combos.append((keys.copy(), event))

    def __iter__(self) -> Iterator[tuple[KeySet, ScreenReaderEvent]]:
        return iter(list(self._combos))

    def __len__(self) -> int:
        return len(self._combos)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComboSet):
            return NotImplemented
        return self._combos == other._combos

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return repr(self._combos)


class ComboSets:
    """Combo sets, each active globally (mode ``None``) or in one mode."""

    def __init__(self) -> None:
        self._sets: list[tuple[Optional[ScreenReaderMode], ComboSet]] = []

    @classmethod
    def from_pairs(
        cls, pairs: Iterable[tuple[Optional[ScreenReaderMode], ComboSet]]
    ) -> ComboSets:
        """Build from ``(mode, combos)`` pairs; raises :class:`SetError` on a problem."""
        this = cls()
        for mode, combos in pairs:
            this.insert(mode, combos)
        return this

    def _reachable(self, mode: ScreenReaderMode) -> bool:
        return any(
            isinstance(event, ChangeMode) and event.mode == mode
            for _mode, combos in self._sets
            for _keys, event in combos
        )

    def insert(self, mode: Optional[ScreenReaderMode], combos: ComboSet) -> None:
        """Add a set of combos for ``mode`` (``None`` for all modes)."""
        if mode is not None and not self._reachable(mode):
            raise SetError(SetError.UNREACHABLE_MODE, mode=mode)
        if any(len(keys) == 0 for keys in combos.keys()):
            raise SetError(SetError.UNPRESSABLE_KEY)
        for existing_mode, existing in self._sets:
            if not (mode is None or existing_mode == mode or existing_mode is None):
                continue
            for old_keys, _old_event in existing:
                for new_keys, _new_event in combos:
                    if old_keys == new_keys:
                        raise SetError(SetError.IDENTICAL_COMBO, mode=mode, keys=new_keys.copy())
                    if old_keys.starts_with(new_keys) or new_keys.starts_with(old_keys):
                        raise SetError(
                            SetError.SAME_PREFIX_COMBO,
                            original=(existing_mode, old_keys.copy()),
                            attempted=(mode, new_keys.copy()),
                        )
        self._sets.append((mode, combos))

    @classmethod
    def default(cls) -> ComboSets:
        """The built-in keybindings."""
        forward, backward = Direction.Forward, Direction.Backward
        shift = Key.ShiftLeft
        global_combos = ComboSet.from_pairs(
            [
                (KeySet.from_keys([Key.KeyF]), ChangeMode(ScreenReaderMode.Focus)),
                (KeySet.from_keys([Key.KeyG]), StopSpeech()),
                (KeySet.from_keys([Key.KeyB]), ChangeMode(ScreenReaderMode.Browse)),
                (KeySet.from_keys([shift, Key.KeyQ]), Quit()),
            ]
        )
        browse_pairs = []
        for key, role in (
            (Key.KeyT, Role.Table),
            (Key.KeyH, Role.Header),
            (Key.KeyI, Role.Image),
            (Key.KeyK, Role.Link),
        ):
            browse_pairs.append((KeySet.from_keys([key]), StructuralNavigation(forward, role)))
            browse_pairs.append(
                (KeySet.from_keys([shift, key]), StructuralNavigation(backward, role))
            )
        return cls.from_pairs(
            [(None, global_combos), (ScreenReaderMode.Browse, ComboSet.from_pairs(browse_pairs))]
        )

    def __iter__(self) -> Iterator[tuple[Optional[ScreenReaderMode], ComboSet]]:
        return iter(list(self._sets))

    def __len__(self) -> int:
        return len(self._sets)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComboSets):
            return NotImplemented
        return self._sets == other._sets

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return repr(self._sets)


@dataclass
class State:
    """All keybinding state of the daemon.

    ``pressed`` holds the keys held down since activation; ``tx`` receives the
    triggered events through its ``put`` method.
    """

    mode: ScreenReaderMode = ScreenReaderMode.Focus
    activation_key_pressed: bool = False
    pressed: list[Any] = field(default_factory=list)
    combos: ComboSets = field(default_factory=ComboSets)
    tx: Any = field(default_factory=queue.Queue)


def callback(event: InputEvent, state: State) -> Optional[InputEvent]:
    """Process one input event.

    Returns ``None`` to swallow the event, or the event itself to pass it through.
    """
    _log.debug("Callback called for %r", event)
    kind = event.event_type
    if isinstance(kind, KeyPress) and kind.key == ACTIVATION_KEY:
        if not state.activation_key_pressed:
            state.activation_key_pressed = True
            _log.debug("Activation enabled!")
        return None
    if isinstance(kind, KeyRelease) and kind.key == ACTIVATION_KEY:
        if not state.activation_key_pressed:
            # Released after being pressed before we started: let applications see it.
            return event
        state.activation_key_pressed = False
        _log.debug("Activation disabled!")
        return None
    if isinstance(kind, KeyPress) and state.activation_key_pressed:
        if kind.key in state.pressed:
            return None
        state.pressed.append(kind.key)
        for mode, combos in state.combos:
            if mode is not None and mode != state.mode:
                continue
            for keys, combo_event in combos:
                if keys == state.pressed:
                    _log.debug("Combo found for %r", combo_event)
                    if isinstance(combo_event, ChangeMode):
                        state.mode = combo_event.mode
                    state.tx.put(combo_event)
                    return None
        return None
    if isinstance(kind, KeyRelease):
        if kind.key in state.pressed:
            state.pressed.remove(kind.key)
            return None
        return event
    return event