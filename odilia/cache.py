"""An in-memory cache of accessible objects, arranged as a tree."""

from __future__ import annotations

import abc
import copy
import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from odilia.errors import DuplicateItem, MoreData, NodeError, NodeErrorKind, OdiliaError
from odilia.primitive import AccessiblePrimitive
from odilia.roles import Role

_log = logging.getLogger(__name__)

CacheKey = AccessiblePrimitive
NodeId = int


@dataclass(frozen=True)
class Linked:
    """A relation target that has been resolved to a node in the cache."""

    node_id: NodeId


@dataclass(frozen=True)
class Unlinked:
    """A relation target that is not (yet) in the cache."""

    key: CacheKey


Link = Union[Linked, Unlinked]


def _link_to_value(link: Link) -> dict[str, Any]:
    if isinstance(link, Linked):
        return {"Linked": link.node_id}
    return {"Unlinked": link.key.to_dict()}


def _link_from_value(value: Any) -> Link:
    if isinstance(value, Mapping) and len(value) == 1:
        ((kind, data),) = value.items()
        if kind == "Linked" and isinstance(data, int) and not isinstance(data, bool):
            return Linked(data)
        if kind == "Unlinked":
            return Unlinked(AccessiblePrimitive.from_dict(data))
    raise ValueError(f"invalid link: {value!r}")


@dataclass
class RelationSet:
    """Relations from one accessible to others, grouped by relation type."""

    relations: list[tuple[str, list[Link]]] = field(default_factory=list)

    @classmethod
    def from_primitives(
        cls, pairs: Iterable[tuple[str, Iterable[AccessiblePrimitive]]]
    ) -> RelationSet:
        """Build a set whose targets are all still unlinked."""
        return cls([(rt, [Unlinked(key) for key in keys]) for rt, keys in pairs])

    def unchecked_into_cache_items(self, cache: Cache) -> list[tuple[str, list[CacheItem]]]:
        """Resolve linked targets into cache items; unlinked ones are skipped."""
        result = []
        for relation_type, links in self.relations:
            items = []
            for link in links:
                if isinstance(link, Linked):
                    item = cache.get_id(link.node_id)
                    if item is not None:
                        items.append(item)
            result.append((relation_type, items))
        return result

    def _try_link_values(self, lookup: Mapping[CacheKey, NodeId]) -> list[CacheKey]:
        """Link every target found in ``lookup``; return the keys left unlinked."""
        unlinked: list[CacheKey] = []
        for _relation_type, links in self.relations:
            for position, link in enumerate(links):
                if isinstance(link, Unlinked):
                    node_id = lookup.get(link.key)
                    if node_id is None:
                        unlinked.append(link.key)
                    else:
                        links[position] = Linked(node_id)
        return unlinked

    def _to_value(self) -> list[Any]:
        return [[rt, [_link_to_value(link) for link in links]] for rt, links in self.relations]

    @classmethod
    def _from_value(cls, value: Any) -> RelationSet:
        if not isinstance(value, list):
            raise ValueError(f"invalid relation set: {value!r}")
        relations = []
        for entry in value:
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise ValueError(f"invalid relation: {entry!r}")
            relation_type, links = entry
            if not isinstance(relation_type, str) or not isinstance(links, list):
                raise ValueError(f"invalid relation: {entry!r}")
            relations.append((relation_type, [_link_from_value(link) for link in links]))
        return cls(relations)


def _role_from_value(value: Any) -> Role:
    if isinstance(value, str):
        try:
            return Role[value]
        except KeyError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return Role(value)
        except ValueError:
            pass
    raise ValueError(f"invalid role: {value!r}")


def _optional(value: Any, kind: type, name: str) -> Any:
    if value is None:
        return None
    if not isinstance(value, kind) or isinstance(value, bool):
        raise ValueError(f"{name} must be {kind.__name__} or null, got {value!r}")
    return value


def _names(value: Any, name: str) -> frozenset[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{name} must be a list of strings, got {value!r}")
    return frozenset(value)


@dataclass
class CacheItem:
    """The cached information about one accessible."""

    object: AccessiblePrimitive
    app: AccessiblePrimitive
    parent: AccessiblePrimitive
    index: Optional[int] = None
    children_num: Optional[int] = None
    interfaces: frozenset[str] = frozenset()
    role: Role = Role.Unknown
    states: frozenset[str] = frozenset()
    text: str = ""
    description: Optional[str] = None
    name: Optional[str] = None
    children: list[AccessiblePrimitive] = field(default_factory=list)
    relation_set: RelationSet = field(default_factory=RelationSet)

    def to_dict(self) -> dict[str, Any]:
        """Return the serializable form."""
        return {
            "object": self.object.to_dict(),
            "app": self.app.to_dict(),
            "parent": self.parent.to_dict(),
            "index": self.index,
            "children_num": self.children_num,
            "interfaces": sorted(self.interfaces),
            "role": self.role.name,
            "states": sorted(self.states),
            "text": self.text,
            "description": self.description,
            "name": self.name,
            "children": [child.to_dict() for child in self.children],
            "relation_set": self.relation_set._to_value(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CacheItem:
        """Build from the serializable form."""
        if not isinstance(data, Mapping):
            raise ValueError(f"a cache item must be a mapping, got {data!r}")
        try:
            text = data["text"]
            if not isinstance(text, str):
                raise ValueError(f"text must be a string, got {text!r}")
            children = data["children"]
            if not isinstance(children, list):
                raise ValueError(f"children must be a list, got {children!r}")
            return cls(
                object=AccessiblePrimitive.from_dict(data["object"]),
                app=AccessiblePrimitive.from_dict(data["app"]),
                parent=AccessiblePrimitive.from_dict(data["parent"]),
                index=_optional(data["index"], int, "index"),
                children_num=_optional(data["children_num"], int, "children_num"),
                interfaces=_names(data["interfaces"], "interfaces"),
                role=_role_from_value(data["role"]),
                states=_names(data["states"], "states"),
                text=text,
                description=_optional(data["description"], str, "description"),
                name=_optional(data["name"], str, "name"),
                children=[AccessiblePrimitive.from_dict(child) for child in children],
                relation_set=RelationSet._from_value(data["relation_set"]),
            )
        except KeyError as missing:
            raise ValueError(f"cache item is missing field {missing}") from None

    @classmethod
    async def from_atspi_event(cls, event: Any, driver: CacheDriver) -> CacheItem:
        """Look up the item an event refers to through ``driver``."""
        return await driver.lookup_external(AccessiblePrimitive.from_event(event))


class CacheDriver(abc.ABC):
    """Performs the outside lookups the cache needs for items it lacks."""

    @abc.abstractmethod
    async def lookup_external(self, key: CacheKey) -> CacheItem:
        """Fetch the item for ``key``, which was not found in the cache."""


@dataclass
class _Node:
    item: CacheItem
    parent: Optional[NodeId] = None
    children: list[NodeId] = field(default_factory=list)
    removed: bool = False


class Cache:
    """Accessibles keyed by their primitive, linked into a tree by parentage."""

    def __init__(self, driver: CacheDriver) -> None:
        self.driver = driver
        self._lock = threading.RLock()
        self._nodes: dict[NodeId, _Node] = {}
        self._lookup: dict[CacheKey, NodeId] = {}
        self._next_id: NodeId = 0

    def __repr__(self) -> str:
        # Counts removed nodes too; they are only marked as removed.
        with self._lock:
            return f"Cache(tree=...{len(self._nodes)} nodes..., ...)"

    def __len__(self) -> int:
        with self._lock:
            return len(self._lookup)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._lookup

    # --- tree primitives -------------------------------------------------

    def _live(self, node_id: NodeId) -> Optional[_Node]:
        node = self._nodes.get(node_id)
        if node is None or node.removed:
            return None
        return node

    def _new_node(self, item: CacheItem) -> NodeId:
        node_id = self._next_id
        self._next_id += 1
        self._nodes[node_id] = _Node(item)
        return node_id

    def _is_ancestor(self, candidate: NodeId, node_id: NodeId) -> bool:
        current: Optional[NodeId] = node_id
        while current is not None:
            if current == candidate:
                return True
            current = self._nodes[current].parent
        return False

    def _detach(self, node_id: NodeId) -> None:
        node = self._nodes[node_id]
        if node.parent is not None:
            self._nodes[node.parent].children.remove(node_id)
            node.parent = None

    def _attach(
        self,
        parent_id: NodeId,
        child_id: NodeId,
        position: Optional[int],
        self_kind: NodeErrorKind,
        ancestor_kind: NodeErrorKind,
    ) -> None:
        if parent_id == child_id:
            raise NodeError(self_kind)
        if self._live(parent_id) is None or self._live(child_id) is None:
            raise NodeError(NodeErrorKind.Removed)
        if self._is_ancestor(child_id, parent_id):
            raise NodeError(ancestor_kind)
        self._detach(child_id)
        siblings = self._nodes[parent_id].children
        siblings.insert(len(siblings) if position is None else position, child_id)
        self._nodes[child_id].parent = parent_id

    def _prepend(self, parent_id: NodeId, child_id: NodeId) -> None:
        self._attach(
            parent_id, child_id, 0, NodeErrorKind.PrependSelf, NodeErrorKind.PrependAncestor
        )

    def _append(self, parent_id: NodeId, child_id: NodeId) -> None:
        self._attach(
            parent_id, child_id, None, NodeErrorKind.AppendSelf, NodeErrorKind.AppendAncestor
        )

    def _insert_after(self, sibling_id: NodeId, new_id: NodeId) -> None:
        if sibling_id == new_id:
            raise NodeError(NodeErrorKind.InsertAfterSelf)
        sibling = self._live(sibling_id)
        if sibling is None or self._live(new_id) is None:
            raise NodeError(NodeErrorKind.Removed)
        self._detach(new_id)
        if sibling.parent is not None:
            siblings = self._nodes[sibling.parent].children
            siblings.insert(siblings.index(sibling_id) + 1, new_id)
            self._nodes[new_id].parent = sibling.parent

    def _remove_node(self, node_id: NodeId) -> None:
        node = self._nodes[node_id]
        children = node.children
        if node.parent is not None:
            siblings = self._nodes[node.parent].children
            position = siblings.index(node_id)
            siblings[position : position + 1] = children
        for child in children:
            self._nodes[child].parent = node.parent
        node.children = []
        node.parent = None
        node.removed = True

    # --- public API ------------------------------------------------------

    def add(self, item: CacheItem) -> None:
        """Add an item and attach it to its parent.

        Raises :class:`DuplicateItem` if the key is already cached, and
        :class:`MoreData` (after storing the item) when its parent, relation
        targets or left sibling are missing.
        """
        with self._lock:
            existing = self._lookup.get(item.object)
            if existing is not None:
                raise DuplicateItem(existing)
            item = copy.deepcopy(item)
            unlinked = item.relation_set._try_link_values(self._lookup)
            node_id = self._new_node(item)
            self._lookup[item.object] = node_id
            # The first item has nothing to connect to.
            if len(self._lookup) == 1:
                return
            parent_id = self._lookup.get(item.parent)
            if parent_id is None:
                raise MoreData([item.parent])
            if unlinked:
                raise MoreData(unlinked)
            if item.index is None:
                return
            siblings = self._nodes[parent_id].children
            if item.index == 0:
                self._prepend(parent_id, node_id)
            elif item.index == len(siblings):
                self._append(parent_id, node_id)
            elif item.index < len(siblings):
                self._insert_after(siblings[item.index], node_id)
            else:
                raise MoreData(list(item.children))

    def remove(self, key: CacheKey) -> None:
        """Remove an item; its children take its place under its parent."""
        with self._lock:
            node_id = self._lookup.pop(key, None)
            if node_id is None:
                _log.warning("Attempted to remove an item that doesn't exist: %r", key)
                return
            self._remove_node(node_id)

    def get_id(self, node_id: NodeId) -> Optional[CacheItem]:
        """Return a copy of the item at ``node_id``, or None."""
        with self._lock:
            node = self._live(node_id)
            return None if node is None else copy.deepcopy(node.item)

    def get(self, key: CacheKey) -> Optional[CacheItem]:
        """Return a copy of the item for ``key``, or None."""
        with self._lock:
            node_id = self._lookup.get(key)
            return None if node_id is None else self.get_id(node_id)

    def get_all(self, keys: Iterable[CacheKey]) -> list[Optional[CacheItem]]:
        """Return copies of the items for ``keys``, None where missing."""
        with self._lock:
            return [self.get(key) for key in keys]

    def add_all(self, items: Iterable[CacheItem]) -> None:
        """Add many items, ignoring the errors of individual additions."""
        for item in items:
            try:
                self.add(item)
            except OdiliaError:
                pass

    def remove_all(self, keys: Iterable[CacheKey]) -> None:
        """Remove every item in ``keys``."""
        for key in keys:
            self.remove(key)

    def modify_item(self, key: CacheKey, modify: Callable[[CacheItem], Any]) -> bool:
        """Apply ``modify`` to the stored item in place; False if not cached."""
        with self._lock:
            node_id = self._lookup.get(key)
            if node_id is None:
                _log.warning("The lookup table does not contain this item: %r", key)
                return False
            node = self._live(node_id)
            if node is None:
                _log.warning("The tree cache does not contain this item: %r", node_id)
                return False
            modify(node.item)
            return True

    async def get_or_create(self, key: CacheKey) -> CacheItem:
        """Return the cached item, or fetch it and whatever it needs through the driver."""
        cached = self.get(key)
        if cached is not None:
            return cached
        pending: deque[CacheKey] = deque([key])
        first: Optional[CacheItem] = None
        while pending:
            item = await self.driver.lookup_external(pending.popleft())
            if first is None:
                first = copy.deepcopy(item)
            try:
                self.add(item)
            except MoreData as more:
                pending.extend(more.keys)
            except OdiliaError:
                pass
        assert first is not None
        return first

    def clear(self) -> None:
        """Empty the cache."""
        with self._lock:
            self._nodes.clear()
            self._lookup.clear()

    def node_id(self, key: CacheKey) -> Optional[NodeId]:
        """Return the node id stored for ``key``, or None."""
        with self._lock:
            return self._lookup.get(key)

    def children(self, node_id: NodeId) -> list[NodeId]:
        """Return the ids of the node's children, in order."""
        with self._lock:
            node = self._live(node_id)
            return [] if node is None else list(node.children)

    def descendants(self, node_id: NodeId) -> list[NodeId]:
        """Return the node and its descendants in tree order."""
        with self._lock:
            if self._live(node_id) is None:
                return []
            result = []
            stack = [node_id]
            while stack:
                current = stack.pop()
                result.append(current)
                stack.extend(reversed(self._nodes[current].children))
            return result

    def ancestors(self, node_id: NodeId) -> list[NodeId]:
        """Return the node and its ancestors, nearest first."""
        with self._lock:
            if self._live(node_id) is None:
                return []
            result = []
            current: Optional[NodeId] = node_id
            while current is not None:
                result.append(current)
                current = self._nodes[current].parent
            return result