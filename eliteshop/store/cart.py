"""Cart store: line items kept in insertion order and mirrored to storage.

Every mutation rewrites the whole snapshot under the cart key. The snapshot
is a JSON array of ``{"id", "name", "price", "quantity", "addedAt"}`` objects.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional, Protocol

from eliteshop.db.storage import Storage, encode_snapshot, read_list
from eliteshop.errors import CheckoutInProgressError, EmptyCartError, PersistenceReadError
from eliteshop.utils.formatters import to_money
from eliteshop.utils.validators import require_id, require_positive_int, require_price

logger = logging.getLogger(__name__)

TOTAL_DECIMALS = 2


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class LineItem:
    """One product entry in the cart."""

    id: str
    name: str
    unit_price: Decimal
    quantity: int
    added_at: str = field(default_factory=_now_iso)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.unit_price),
            "quantity": self.quantity,
            "addedAt": self.added_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LineItem:
        return cls(
            id=require_id(data["id"]),
            name=str(data.get("name", "")),
            unit_price=require_price(data["price"]),
            quantity=require_positive_int(data["quantity"], "quantity"),
            added_at=str(data.get("addedAt") or _now_iso()),
        )


@dataclass
class CheckoutSummary:
    items: int
    total_items: int
    total: Decimal
    lines: List[LineItem]
    created_at: str = field(default_factory=_now_iso)


class CheckoutGateway(Protocol):
    async def charge(self, summary: CheckoutSummary) -> None: ...


class CartStore:
    def __init__(self, storage: Storage, key: str = "eliteShopCart") -> None:
        self._storage = storage
        self._key = key
        self._items: List[LineItem] = self._restore()
        self._checking_out = False

    def _restore(self) -> List[LineItem]:
        try:
            records = read_list(self._storage, self._key)
            if records is None:
                return []
            return self._decode(records)
        except PersistenceReadError as e:
            logger.warning("Starting with an empty cart: %s", e)
            return []

    def _decode(self, records: list) -> List[LineItem]:
        items: List[LineItem] = []
        by_id: Dict[str, LineItem] = {}
        for rec in records:
            if not isinstance(rec, dict):
                raise PersistenceReadError(self._key, f"line item is not an object: {rec!r}")
            try:
                item = LineItem.from_dict(rec)
            except (KeyError, TypeError, ValueError) as e:
                raise PersistenceReadError(self._key, f"bad line item {rec!r}: {e}")
            existing = by_id.get(item.id)
            if existing:
                # keep one line per id
                existing.quantity += item.quantity
                continue
            by_id[item.id] = item
            items.append(item)
        return items

    def _save(self) -> None:
        self._storage.save(self._key, encode_snapshot([it.to_dict() for it in self._items]))

    # ---------------- queries ----------------

    @property
    def items(self) -> List[LineItem]:
        return list(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get(self, item_id: str) -> Optional[LineItem]:
        for it in self._items:
            if it.id == item_id:
                return it
        return None

    def total_items(self) -> int:
        return sum(it.quantity for it in self._items)

    def total(self) -> Decimal:
        return to_money(sum((it.line_total for it in self._items), Decimal(0)), TOTAL_DECIMALS)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(list(self._items))

    def __contains__(self, item_id: object) -> bool:
        return any(it.id == item_id for it in self._items)

    # ---------------- mutations ----------------

    def add(self, item_id: str, unit_price, name: str, quantity: int = 1) -> int:
        """Add ``quantity`` of a product and return the new total item count."""
        item_id = require_id(item_id)
        quantity = require_positive_int(quantity, "quantity")
        price = require_price(unit_price, "unit_price")

        existing = self.get(item_id)
        if existing:
            existing.quantity += quantity
        else:
            self._items.append(LineItem(id=item_id, name=name, unit_price=price, quantity=quantity))

        self._save()
        count = self.total_items()
        logger.debug("cart add %s x%d -> %d items", item_id, quantity, count)
        return count

    def remove(self, item_id: str) -> None:
        kept = [it for it in self._items if it.id != item_id]
        if len(kept) == len(self._items):
            return
        self._items = kept
        self._save()

    def update_quantity(self, item_id: str, new_quantity: int) -> None:
        item = self.get(item_id)
        if item is None:
            return
        if new_quantity <= 0:
            self.remove(item_id)
            return
        item.quantity = require_positive_int(new_quantity, "quantity")
        self._save()

    def clear(self) -> None:
        self._items = []
        self._save()

    def summary(self) -> CheckoutSummary:
        return CheckoutSummary(
            items=len(self._items),
            total_items=self.total_items(),
            total=self.total(),
            lines=[
                LineItem(id=it.id, name=it.name, unit_price=it.unit_price, quantity=it.quantity, added_at=it.added_at)
                for it in self._items
            ],
        )

    def _settle(self, summary: CheckoutSummary) -> None:
        """Take the purchased quantities out of the live cart."""
        for bought in summary.lines:
            item = self.get(bought.id)
            if item is None:
                continue
            left = item.quantity - bought.quantity
            if left > 0:
                item.quantity = left
            else:
                self._items.remove(item)
        self._save()

    async def checkout(self, gateway: CheckoutGateway) -> CheckoutSummary:
        """Hand the cart to ``gateway`` and drop what was bought once it returns.

        Raises EmptyCartError on an empty cart and CheckoutInProgressError
        while another checkout is waiting on its gateway. Items added during
        the wait stay in the cart. Exceptions from the gateway propagate and
        leave the cart as it was.
        """
        if self._checking_out:
            raise CheckoutInProgressError()
        if self.is_empty:
            raise EmptyCartError()

        self._checking_out = True
        try:
            summary = self.summary()
            await gateway.charge(summary)
            self._settle(summary)
        finally:
            self._checking_out = False
        logger.info("Checkout complete: %d lines, total %s", summary.items, summary.total)
        return summary
