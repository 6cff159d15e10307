from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../eliteshop checkout
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        raise RuntimeError(f"{keys[0]} must be an integer, got {v!r}")


def _get_float(*keys: str, default: float | None = None) -> float | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    try:
        return float(v.replace(",", "."))
    except ValueError:
        raise RuntimeError(f"{keys[0]} must be a number, got {v!r}")


def _get_path(*keys: str, default: str) -> str:
    v = _get_env(*keys, default=default)
    return str(v)


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    db_path: str
    receipt_dir: str
    currency: str
    decimals: int
    checkout_delay: float
    cart_key: str
    wishlist_key: str
    shop_name: str
    log_level: str


def load_settings() -> Settings:
    s = Settings(
        host=_get_env("HOST", default="0.0.0.0") or "0.0.0.0",
        port=_get_int("PORT", "SHOP_PORT", default=3000),
        db_path=_get_path("DB_PATH", "DATABASE_PATH", default=str(ROOT_DIR / "data" / "shop.db")),
        receipt_dir=_get_path("RECEIPT_DIR", "EXPORT_DIR", default=str(ROOT_DIR / "exports" / "receipts")),
        currency=_get_env("CURRENCY", default="USD") or "USD",
        decimals=_get_int("DECIMALS", default=2),
        checkout_delay=_get_float("CHECKOUT_DELAY", default=1.0),
        cart_key=_get_env("CART_KEY", default="eliteShopCart") or "eliteShopCart",
        wishlist_key=_get_env("WISHLIST_KEY", default="eliteShopWishlist") or "eliteShopWishlist",
        shop_name=_get_env("SHOP_NAME", default="EliteShop") or "EliteShop",
        log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
    )

    if not 0 < s.port < 65536:
        raise RuntimeError(f"PORT out of range: {s.port}")
    if s.decimals < 0:
        raise RuntimeError("DECIMALS must be >= 0")
    if s.checkout_delay < 0:
        raise RuntimeError("CHECKOUT_DELAY must be >= 0")
    if s.cart_key == s.wishlist_key:
        raise RuntimeError("CART_KEY and WISHLIST_KEY must differ")
    return s


settings = load_settings()
