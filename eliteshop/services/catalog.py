from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from eliteshop.constants import CATEGORIES, CATEGORY_ALL, MIN_SEARCH_LENGTH


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: str
    price: Decimal
    description: str = ""
    badge: Optional[str] = None

    @property
    def category_label(self) -> str:
        return CATEGORIES.get(self.category, self.category.title())


PRODUCTS: List[Product] = [
    Product("ace-headset-pro", "Ace Pro Wireless Headset", "electronics", Decimal("149.99"),
            "7.1 surround, 30h battery, detachable boom mic.", "Bestseller"),
    Product("ace-keyboard-tkl", "Ace TKL Mechanical Keyboard", "electronics", Decimal("119.00"),
            "Hot-swappable switches with per-key RGB."),
    Product("ace-mouse-ultralight", "Ace Ultralight Mouse", "electronics", Decimal("79.50"),
            "58 g shell, 26K DPI optical sensor.", "New"),
    Product("ace-monitor-27", "Ace 27\" 240Hz Monitor", "electronics", Decimal("429.00"),
            "QHD IPS panel, 1 ms response."),
    Product("ace-hoodie", "Ace Team Hoodie", "fashion", Decimal("59.00"),
            "Heavyweight cotton with embroidered logo."),
    Product("ace-jersey", "Ace Pro Jersey", "fashion", Decimal("69.99"),
            "Official tournament cut, breathable mesh.", "Limited"),
    Product("ace-desk-mat", "Ace XXL Desk Mat", "home", Decimal("29.99"),
            "900 x 400 mm, stitched edges."),
    Product("ace-chair", "Ace Ergonomic Gaming Chair", "home", Decimal("349.00"),
            "4D armrests and lumbar support."),
    Product("ace-led-strip", "Ace Ambient LED Strip", "home", Decimal("24.50"),
            "Syncs with screen colours over USB."),
    Product("ace-wrist-rest", "Ace Gel Wrist Rest", "health", Decimal("19.99"),
            "Cooling gel for long sessions."),
    Product("ace-blue-light", "Ace Blue Light Glasses", "health", Decimal("39.00"),
            "Anti-glare lenses, lightweight frame."),
    Product("ace-energy-pack", "Ace Hydration Pack", "health", Decimal("14.99"),
            "Sugar-free electrolyte mix, 20 servings."),
]

_BY_ID = {p.id: p for p in PRODUCTS}


def categories() -> List[str]:
    return list(CATEGORIES.keys())


def get_product(product_id: str) -> Optional[Product]:
    return _BY_ID.get(product_id)


def list_products(category: Optional[str] = None) -> List[Product]:
    if not category or category == CATEGORY_ALL:
        return list(PRODUCTS)
    return [p for p in PRODUCTS if p.category == category]


def search_products(query: Optional[str], category: Optional[str] = None) -> List[Product]:
    """Case-insensitive match on product name or category.

    Queries shorter than MIN_SEARCH_LENGTH do not filter; the current
    category listing is returned instead. A non-empty query searches the
    whole catalog regardless of the category.
    """
    q = (query or "").strip().lower()
    if len(q) < MIN_SEARCH_LENGTH:
        return list_products(category)
    return [
        p for p in PRODUCTS
        if q in p.name.lower() or q in p.category.lower() or q in p.category_label.lower()
    ]
