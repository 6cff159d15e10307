"""Key-value persistence boundary used by the cart and wishlist stores.

A store reads its snapshot once when it is created and writes the whole
snapshot back after every change. Values are JSON text; the storage layer
does not look inside them.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Protocol

from eliteshop.db.sqlite import init_db, kv_get, kv_set
from eliteshop.errors import PersistenceReadError

logger = logging.getLogger(__name__)


class Storage(Protocol):
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage. Lives as long as the object does."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        self.data[key] = value


class SqliteStorage:
    """Storage backed by the ``kv`` table of an sqlite file."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        init_db(db_path)

    def load(self, key: str) -> Optional[str]:
        return kv_get(self.db_path, key)

    def save(self, key: str, value: str) -> None:
        kv_set(self.db_path, key, value)


def decode_snapshot(key: str, raw: Optional[str]) -> Any:
    """Parse a stored value, or raise PersistenceReadError."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise PersistenceReadError(key, f"invalid JSON ({e})")


def encode_snapshot(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def read_list(storage: Storage, key: str) -> Optional[list]:
    """Load a JSON array stored under ``key``.

    Returns None when nothing is stored. A value that is not a JSON array
    raises PersistenceReadError.
    """
    data = decode_snapshot(key, storage.load(key))
    if data is None:
        return None
    if not isinstance(data, list):
        raise PersistenceReadError(key, f"expected a JSON array, got {type(data).__name__}")
    logger.debug("Restored %d records from %s", len(data), key)
    return data
