"""
Shop errors and the user-facing messages that go with them.
"""

# Cart messages
MSG_ADDED_TO_CART = "{name} added to cart!"
MSG_REMOVED_FROM_CART = "Item removed from cart"
MSG_CART_EMPTY = "Your cart is empty!"
MSG_CHECKOUT_STARTED = "Redirecting to secure checkout..."
MSG_CHECKOUT_BUSY = "Checkout is already in progress"
MSG_CHECKOUT_DONE = "Thank you for shopping with {shop}! (This is a demo - no actual payment processed)"
MSG_CHECKOUT_FAILED = "Checkout failed: {error}"

# Wishlist messages
MSG_WISHLIST_ADDED = "{name} added to wishlist!"
MSG_WISHLIST_REMOVED = "{name} removed from wishlist"

# Contact form
MSG_CONTACT_THANKS = "Thank you for your message! We'll get back to you soon."
MSG_CONTACT_EMPTY = "Please write a message before sending."

# Generic
MSG_PRODUCT_NOT_FOUND = "Product not found"


class ShopError(Exception):
    """Base class for storefront errors."""


class EmptyCartError(ShopError):
    """Checkout was requested on a cart with no items."""

    def __init__(self, message: str = MSG_CART_EMPTY) -> None:
        super().__init__(message)


class CheckoutInProgressError(ShopError):
    """Checkout was requested while another one is still waiting on the gateway."""

    def __init__(self, message: str = MSG_CHECKOUT_BUSY) -> None:
        super().__init__(message)


class PersistenceReadError(ShopError):
    """A stored snapshot could not be decoded.

    Stores catch this while restoring and start empty instead.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"cannot restore {key!r}: {reason}")
        self.key = key
        self.reason = reason
