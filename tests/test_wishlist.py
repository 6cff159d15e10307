import json

import pytest

from eliteshop.db.storage import MemoryStorage
from eliteshop.store.wishlist import WishlistStore


def test_toggle_adds_then_removes(wishlist):
    assert wishlist.toggle("a") is True
    assert wishlist.contains("a")
    assert wishlist.toggle("a") is False
    assert not wishlist.contains("a")


def test_toggle_twice_restores_membership(wishlist):
    wishlist.toggle("keep")
    for item_id in ("keep", "other"):
        before = item_id in wishlist
        wishlist.toggle(item_id)
        wishlist.toggle(item_id)
        assert (item_id in wishlist) == before


def test_toggle_persists_every_time(wishlist, storage):
    wishlist.toggle("a")
    wishlist.toggle("b")
    assert json.loads(storage.data["wishlist"]) == ["a", "b"]
    wishlist.toggle("a")
    assert json.loads(storage.data["wishlist"]) == ["b"]


def test_restore_from_storage(storage):
    WishlistStore(storage, "wishlist").toggle("a")
    restored = WishlistStore(storage, "wishlist")
    assert restored.items == ["a"]


def test_restore_drops_duplicates():
    w = WishlistStore(MemoryStorage({"wishlist": '["a", "b", "a"]'}), "wishlist")
    assert w.items == ["a", "b"]
    assert len(w) == 2


def test_malformed_snapshot_starts_empty():
    for raw in ("{", '{"a": 1}', "[1, 2]"):
        w = WishlistStore(MemoryStorage({"wishlist": raw}), "wishlist")
        assert len(w) == 0


@pytest.mark.parametrize("bad_id", ["", 42])
def test_toggle_rejects_bad_id(wishlist, storage, bad_id):
    wishlist.toggle("a")
    with pytest.raises(ValueError):
        wishlist.toggle(bad_id)
    assert WishlistStore(storage, "wishlist").items == ["a"]


def test_restore_with_blank_id_starts_empty():
    storage = MemoryStorage({"wishlist": json.dumps(["a", ""])})
    assert WishlistStore(storage, "wishlist").items == []
