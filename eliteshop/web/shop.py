"""Storefront session: what the page's event handlers act on.

One ShopSession exists per running app. It owns the cart and wishlist
stores plus the bits of page state that outlive a single request (drawer
open flag, active category, pending toasts).
"""
from __future__ import annotations

import logging
from typing import List, Optional

from eliteshop.constants import (
    CATEGORY_ALL,
    NOTIFY_ERROR,
    NOTIFY_INFO,
    NOTIFY_SUCCESS,
    NOTIFY_WARNING,
)
from eliteshop.errors import (
    MSG_ADDED_TO_CART,
    MSG_CHECKOUT_DONE,
    MSG_CHECKOUT_STARTED,
    MSG_CONTACT_EMPTY,
    MSG_CONTACT_THANKS,
    MSG_PRODUCT_NOT_FOUND,
    MSG_REMOVED_FROM_CART,
    MSG_WISHLIST_ADDED,
    MSG_WISHLIST_REMOVED,
    CheckoutInProgressError,
    EmptyCartError,
)
from eliteshop.services.catalog import categories, get_product
from eliteshop.services.notifications import Notification, NotificationQueue
from eliteshop.services.receipt_pdf import generate_receipt_pdf
from eliteshop.store.cart import CartStore, CheckoutGateway, CheckoutSummary
from eliteshop.store.wishlist import WishlistStore

logger = logging.getLogger(__name__)


class ShopSession:
    def __init__(
        self,
        cart: CartStore,
        wishlist: WishlistStore,
        gateway: CheckoutGateway,
        shop_name: str = "EliteShop",
        receipt_dir: Optional[str] = None,
    ) -> None:
        self.cart = cart
        self.wishlist = wishlist
        self.gateway = gateway
        self.shop_name = shop_name
        self.receipt_dir = receipt_dir
        self.cart_open = False
        self.current_filter = CATEGORY_ALL
        self.last_summary: Optional[CheckoutSummary] = None
        self.last_receipt: Optional[str] = None
        self._notifications = NotificationQueue()

    # ---------------- notifications ----------------

    def notify(self, message: str, kind: str = NOTIFY_INFO) -> None:
        self._notifications.push(message, kind)

    def drain_notifications(self) -> List[Notification]:
        return self._notifications.drain()

    # ---------------- drawer / filter ----------------

    def open_cart(self) -> None:
        self.cart_open = True

    def close_cart(self) -> None:
        self.cart_open = False

    def set_filter(self, category: Optional[str]) -> str:
        if category in categories():
            self.current_filter = category
        else:
            self.current_filter = CATEGORY_ALL
        return self.current_filter

    # ---------------- cart ----------------

    def add_to_cart(self, product_id: str, quantity: int = 1) -> Optional[int]:
        product = get_product(product_id)
        if product is None:
            self.notify(MSG_PRODUCT_NOT_FOUND, NOTIFY_ERROR)
            return None
        try:
            count = self.cart.add(product.id, product.price, product.name, quantity)
        except ValueError as e:
            self.notify(str(e), NOTIFY_ERROR)
            return None
        self.notify(MSG_ADDED_TO_CART.format(name=product.name), NOTIFY_SUCCESS)
        self.open_cart()
        return count

    def remove_from_cart(self, product_id: str) -> None:
        self.cart.remove(product_id)
        self.notify(MSG_REMOVED_FROM_CART, NOTIFY_INFO)

    def update_quantity(self, product_id: str, quantity: int) -> None:
        if product_id in self.cart and quantity <= 0:
            self.remove_from_cart(product_id)
            return
        self.cart.update_quantity(product_id, quantity)

    async def checkout(self) -> Optional[CheckoutSummary]:
        try:
            if self.cart.is_empty:
                raise EmptyCartError()
            self.notify(MSG_CHECKOUT_STARTED, NOTIFY_INFO)
            summary = await self.cart.checkout(self.gateway)
        except (EmptyCartError, CheckoutInProgressError) as e:
            self.notify(str(e), NOTIFY_WARNING)
            return None

        self.last_summary = summary
        self.last_receipt = None
        if self.receipt_dir:
            try:
                self.last_receipt = generate_receipt_pdf(summary, self.receipt_dir)
                logger.info("Receipt written to %s", self.last_receipt)
            except OSError:
                # the order already went through
                logger.exception("Could not write receipt to %s", self.receipt_dir)

        self.notify(MSG_CHECKOUT_DONE.format(shop=self.shop_name), NOTIFY_SUCCESS)
        self.close_cart()
        return summary

    # ---------------- wishlist ----------------

    def toggle_wishlist(self, product_id: str) -> Optional[bool]:
        product = get_product(product_id)
        if product is None:
            return None
        added = self.wishlist.toggle(product.id)
        if added:
            self.notify(MSG_WISHLIST_ADDED.format(name=product.name), NOTIFY_SUCCESS)
        else:
            self.notify(MSG_WISHLIST_REMOVED.format(name=product.name), NOTIFY_INFO)
        return added

    # ---------------- contact form ----------------

    def submit_contact(self, name: str, email: str, message: str) -> bool:
        if not (message or "").strip():
            self.notify(MSG_CONTACT_EMPTY, NOTIFY_WARNING)
            return False
        logger.info("Contact form from %s <%s>: %d chars", name.strip() or "anonymous", email.strip(), len(message))
        self.notify(MSG_CONTACT_THANKS, NOTIFY_SUCCESS)
        return True
