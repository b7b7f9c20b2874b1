from dataclasses import dataclass
from typing import Optional

import pytest

from odilia.cache import (
    Cache,
    CacheDriver,
    CacheItem,
    Linked,
    RelationSet,
    Unlinked,
)
from odilia.errors import DuplicateItem, MoreData, NodeError, NodeErrorKind
from odilia.primitive import AccessiblePrimitive
from odilia.roles import Role

SENDER = ":1.30"
ROOT_PATH = "/org/a11y/atspi/accessible/root"


def key(path: str) -> AccessiblePrimitive:
    return AccessiblePrimitive(sender=SENDER, id=path)


ROOT = key(ROOT_PATH)


def make_item(path, parent=ROOT, index: Optional[int] = None, children=(), relations=None):
    return CacheItem(
        object=key(path),
        app=ROOT,
        parent=parent,
        index=index,
        children_num=len(children),
        interfaces=frozenset({"Accessible"}),
        role=Role.Panel,
        states=frozenset({"Visible"}),
        text=path,
        name=path,
        children=list(children),
        relation_set=relations if relations is not None else RelationSet(),
    )


class DictDriver(CacheDriver):
    def __init__(self, items):
        self.items = {item.object: item for item in items}
        self.calls = []

    async def lookup_external(self, key):
        self.calls.append(key)
        return self.items[key]


class FailingDriver(CacheDriver):
    async def lookup_external(self, key):
        raise AssertionError("driver must not be called")


@pytest.fixture
def cache():
    c = Cache(FailingDriver())
    c.add(make_item(ROOT_PATH, parent=key("/null")))
    return c


def test_first_item_is_stored(cache):
    stored = cache.get(ROOT)
    assert stored == make_item(ROOT_PATH, parent=key("/null"))


def test_duplicate_raises_with_existing_node(cache):
    with pytest.raises(DuplicateItem) as info:
        cache.add(make_item(ROOT_PATH))
    assert info.value.node_id == cache.node_id(ROOT)


def test_missing_parent_reports_parent_but_stores_item(cache):
    orphan_parent = key("/missing")
    with pytest.raises(MoreData) as info:
        cache.add(make_item("/orphan", parent=orphan_parent, index=0))
    assert info.value.keys == [orphan_parent]
    assert cache.get(key("/orphan")).name == "/orphan"


def test_sibling_ordering(cache):
    root_id = cache.node_id(ROOT)
    cache.add(make_item("/a", index=0))
    cache.add(make_item("/b", index=1))
    cache.add(make_item("/c", index=0))
    cache.add(make_item("/d", index=1))
    order = [cache.get_id(n).object.id for n in cache.children(root_id)]
    assert order == ["/c", "/a", "/d", "/b"]


def test_index_beyond_children_reports_children(cache):
    wanted = [key("/x"), key("/y")]
    with pytest.raises(MoreData) as info:
        cache.add(make_item("/far", index=5, children=wanted))
    assert info.value.keys == wanted


def test_item_without_index_is_not_attached(cache):
    cache.add(make_item("/free"))
    assert cache.children(cache.node_id(ROOT)) == []
    assert cache.get(key("/free")) is not None


def test_self_parent_is_node_error(cache):
    with pytest.raises(NodeError) as info:
        cache.add(make_item("/loop", parent=key("/loop"), index=0))
    assert info.value.kind is NodeErrorKind.PrependSelf


def test_unlinked_relation_reports_target(cache):
    target = key("/target")
    relations = RelationSet.from_primitives([("LabelledBy", [target])])
    with pytest.raises(MoreData) as info:
        cache.add(make_item("/labelled", index=0, relations=relations))
    assert info.value.keys == [target]
    stored = cache.get(key("/labelled"))
    assert stored.relation_set.relations == [("LabelledBy", [Unlinked(target)])]


def test_linked_relation_resolves(cache):
    cache.add(make_item("/target", index=0))
    target_id = cache.node_id(key("/target"))
    relations = RelationSet.from_primitives([("LabelledBy", [key("/target")])])
    cache.add(make_item("/labelled", index=1, relations=relations))
    stored = cache.get(key("/labelled"))
    assert stored.relation_set.relations == [("LabelledBy", [Linked(target_id)])]
    resolved = stored.relation_set.unchecked_into_cache_items(cache)
    assert resolved == [("LabelledBy", [cache.get(key("/target"))])]


def test_add_does_not_mutate_argument(cache):
    cache.add(make_item("/target", index=0))
    relations = RelationSet.from_primitives([("LabelledBy", [key("/target")])])
    item = make_item("/labelled", index=1, relations=relations)
    cache.add(item)
    assert item.relation_set.relations == [("LabelledBy", [Unlinked(key("/target"))])]


def test_get_returns_copy(cache):
    fetched = cache.get(ROOT)
    fetched.text = "changed"
    assert cache.get(ROOT).text == ROOT_PATH


def test_remove_moves_children_into_place(cache):
    root_id = cache.node_id(ROOT)
    cache.add(make_item("/a", index=0))
    cache.add(make_item("/b", index=1))
    cache.add(make_item("/a1", parent=key("/a"), index=0))
    cache.add(make_item("/a2", parent=key("/a"), index=1))
    cache.remove(key("/a"))
    assert cache.get(key("/a")) is None
    order = [cache.get_id(n).object.id for n in cache.children(root_id)]
    assert order == ["/a1", "/a2", "/b"]
    assert cache.ancestors(cache.node_id(key("/a1"))) == [cache.node_id(key("/a1")), root_id]


def test_remove_unknown_key_is_harmless(cache):
    cache.remove(key("/nothing"))
    assert len(cache) == 1


def test_get_all_and_remove_all(cache):
    cache.add(make_item("/a", index=0))
    result = cache.get_all([key("/a"), key("/none"), ROOT])
    assert [r.object if r else None for r in result] == [key("/a"), None, ROOT]
    cache.remove_all([key("/a"), ROOT])
    assert cache.get_all([key("/a"), ROOT]) == [None, None]


def test_add_all_ignores_errors():
    c = Cache(FailingDriver())
    items = [
        make_item(ROOT_PATH, parent=key("/null")),
        make_item("/a", index=0),
        make_item("/a", index=0),
        make_item("/orphan", parent=key("/gone"), index=0),
    ]
    c.add_all(items)
    assert len(c) == 3
    assert c.children(c.node_id(ROOT)) == [c.node_id(key("/a"))]


def test_modify_item(cache):
    def rename(item):
        item.name = "renamed"

    assert cache.modify_item(ROOT, rename) is True
    assert cache.get(ROOT).name == "renamed"
    assert cache.modify_item(key("/none"), rename) is False


def test_clear(cache):
    root_id = cache.node_id(ROOT)
    cache.clear()
    assert len(cache) == 0
    assert cache.get_id(root_id) is None


def test_descendants_in_tree_order(cache):
    cache.add(make_item("/a", index=0))
    cache.add(make_item("/b", index=1))
    cache.add(make_item("/a1", parent=key("/a"), index=0))
    ids = cache.descendants(cache.node_id(ROOT))
    assert [cache.get_id(n).object.id for n in ids] == [ROOT_PATH, "/a", "/a1", "/b"]


@pytest.mark.asyncio
async def test_get_or_create_returns_cached_without_driver(cache):
    item = await cache.get_or_create(ROOT)
    assert item.object == ROOT


@pytest.mark.asyncio
async def test_get_or_create_fetches_missing_parents():
    parent = make_item("/parent", index=0)
    child = make_item("/child", parent=key("/parent"), index=0)
    driver = DictDriver([parent, child])
    c = Cache(driver)
    c.add(make_item(ROOT_PATH, parent=key("/null")))
    result = await c.get_or_create(key("/child"))
    assert result == child
    assert driver.calls == [key("/child"), key("/parent")]
    assert c.children(c.node_id(ROOT)) == [c.node_id(key("/parent"))]
    assert c.get(key("/child")) == child


@dataclass
class Event:
    sender: str
    path: str


@pytest.mark.asyncio
async def test_from_atspi_event_uses_driver():
    item = make_item("/evented", index=0)
    driver = DictDriver([item])
    result = await CacheItem.from_atspi_event(Event(SENDER, "/evented"), driver)
    assert result == item
    assert driver.calls == [key("/evented")]


def test_dict_round_trip():
    relations = RelationSet(
        [("LabelledBy", [Linked(3), Unlinked(key("/other"))]), ("ControllerFor", [])]
    )
    item = make_item("/rt", index=2, children=[key("/k")], relations=relations)
    item.description = "desc"
    data = item.to_dict()
    assert data["role"] == "Panel"
    assert data["relation_set"][0][1][0] == {"Linked": 3}
    assert CacheItem.from_dict(data) == item


def test_from_dict_rejects_bad_role():
    data = make_item("/bad").to_dict()
    data["role"] = "NoSuchRole"
    with pytest.raises(ValueError):
        CacheItem.from_dict(data)


def test_from_dict_rejects_missing_field():
    data = make_item("/bad").to_dict()
    del data["text"]
    with pytest.raises(ValueError):
        CacheItem.from_dict(data)