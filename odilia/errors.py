"""Errors raised across the screen reader."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Optional

from odilia.primitive import AccessiblePrimitive


class OdiliaError(Exception):
    """Base class of all screen reader errors."""


class CacheError(OdiliaError):
    """An error from the accessible cache."""

    default_message = "Cache error."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class CacheNotAvailable(CacheError):
    """The cache is no longer available."""

    default_message = (
        "The cache has been dropped from memory. This never happens under normal "
        "circumstances, and should never happen. Please send a detailed bug report "
        "if this ever happens."
    )


class NoItem(CacheError):
    """The item is not in the cache."""

    default_message = "Item not found in cache."


class NoLock(CacheError):
    """A lock on a cache item could not be acquired."""

    default_message = "It was not possible to get a lock on this item from the cache."


class TextBoundsError(CacheError):
    """A requested text range has invalid bounds."""

    default_message = (
        "The range asked for in a call to a get_string_*_offset function has invalid bounds."
    )


class DuplicateItem(CacheError):
    """The item is already in the cache, at ``node_id``."""

    def __init__(self, node_id: Any) -> None:
        self.node_id = node_id
        super().__init__(f"The cache requires more data to be in a consistent state: {node_id!r}")


class MoreData(CacheError):
    """The item was added but the cache needs ``keys`` to be consistent."""

    def __init__(self, keys: Iterable[AccessiblePrimitive]) -> None:
        self.keys = list(keys)
        super().__init__(f"This item is already in the cache: {self.keys!r}")


class NodeErrorKind(Enum):
    """Ways a tree operation can be invalid."""

    AppendSelf = "AppendSelf"
    PrependSelf = "PrependSelf"
    InsertBeforeSelf = "InsertBeforeSelf"
    InsertAfterSelf = "InsertAfterSelf"
    Removed = "Removed"
    AppendAncestor = "AppendAncestor"
    PrependAncestor = "PrependAncestor"


class NodeError(CacheError):
    """An invalid operation on the cache's tree."""

    def __init__(self, kind: NodeErrorKind) -> None:
        self.kind = kind
        super().__init__(f"Indextree: {kind.name}")


class ConversionErrorKind(Enum):
    """Reasons an accessible primitive could not be built."""

    ParseError = "ParseError"
    ObjectConversionError = "ObjectConversionError"
    NoPathId = "NoPathId"
    InvalidPath = "InvalidPath"
    NoFirstSectionOfSender = "NoFirstSectionOfSender"
    NoSecondSectionOfSender = "NoSecondSectionOfSender"
    NoSender = "NoSender"
    ErrSender = "ErrSender"


class AccessiblePrimitiveConversionError(OdiliaError):
    """An accessible could not be turned into a primitive."""

    def __init__(self, kind: ConversionErrorKind, detail: Optional[str] = None) -> None:
        self.kind = kind
        self.detail = detail
        text = kind.name if detail is None else f"{kind.name}({detail!r})"
        super().__init__(text)


class KeyFromStrErrorKind(Enum):
    """Reasons a key binding could not be parsed."""

    EmptyString = "Empty key binding"
    NoKey = "No key was provided"
    EmptyKey = "Empty key"
    InvalidKey = "Invalid key"
    InvalidRepeat = "Invalid repeat"
    InvalidModifier = "Invalid modifier"
    InvalidMode = "Invalid mode"


class KeyFromStrError(ValueError):
    """A key binding string could not be parsed."""

    def __init__(self, kind: KeyFromStrErrorKind, value: Optional[str] = None) -> None:
        self.kind = kind
        self.value = value
        text = kind.value if value is None else f'{kind.value}: "{value}"'
        super().__init__(text)


class ModeFromStrError(ValueError):
    """A mode name was not recognised."""

    def __init__(self) -> None:
        super().__init__("Mode not found")