"""The minimal identity of an accessible object, used as a cache key."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class AccessiblePrimitive:
    """A bus sender and object path that together identify an accessible."""

    sender: str
    id: str

    @classmethod
    def from_event(cls, event: Any) -> AccessiblePrimitive:
        """Build from any event exposing ``sender`` and ``path``."""
        return cls(sender=str(event.sender), id=str(event.path))

    @classmethod
    def from_object_ref(cls, name: str, path: str) -> AccessiblePrimitive:
        """Build from a bus name and object path pair."""
        return cls(sender=str(name), id=str(path))

    def to_dict(self) -> dict[str, str]:
        """Return the serializable form."""
        return {"sender": self.sender, "id": self.id}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AccessiblePrimitive:
        """Build from the serializable form."""
        try:
            sender, ident = data["sender"], data["id"]
        except (KeyError, TypeError):
            raise ValueError(f"invalid accessible primitive: {data!r}") from None
        if not isinstance(sender, str) or not isinstance(ident, str):
            raise ValueError(f"invalid accessible primitive: {data!r}")
        return cls(sender=sender, id=ident)