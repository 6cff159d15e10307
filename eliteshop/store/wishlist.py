from __future__ import annotations

import logging
from typing import Iterator, List

from eliteshop.db.storage import Storage, encode_snapshot, read_list
from eliteshop.errors import PersistenceReadError
from eliteshop.utils.validators import require_id

logger = logging.getLogger(__name__)


class WishlistStore:
    """Set of product ids, persisted as a JSON array in insertion order."""

    def __init__(self, storage: Storage, key: str = "eliteShopWishlist") -> None:
        self._storage = storage
        self._key = key
        self._ids: List[str] = self._restore()

    def _restore(self) -> List[str]:
        try:
            records = read_list(self._storage, self._key)
        except PersistenceReadError as e:
            logger.warning("Starting with an empty wishlist: %s", e)
            return []
        if records is None:
            return []
        try:
            records = [require_id(r) for r in records]
        except ValueError as e:
            logger.warning("Starting with an empty wishlist: %s under %r", e, self._key)
            return []
        # drop duplicates, keep first occurrence
        return list(dict.fromkeys(records))

    def _save(self) -> None:
        self._storage.save(self._key, encode_snapshot(self._ids))

    @property
    def items(self) -> List[str]:
        return list(self._ids)

    def contains(self, item_id: str) -> bool:
        return item_id in self._ids

    def toggle(self, item_id: str) -> bool:
        """Flip membership of ``item_id``. Returns True if it was added."""
        item_id = require_id(item_id)
        if item_id in self._ids:
            self._ids.remove(item_id)
            added = False
        else:
            self._ids.append(item_id)
            added = True
        self._save()
        return added

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))
