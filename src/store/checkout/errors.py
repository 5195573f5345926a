"""Checkout failure taxonomy.

Every error carries a machine-readable ``kind`` that the HTTP layer renders
verbatim, the status code that kind maps to, and whether the caller may
safely retry the whole checkout.
"""


class CheckoutError(Exception):
    kind = "INTERNAL"
    http_status = 500
    retryable = False

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "message": self.message,
            "retryable": self.retryable,
        }


class EmptyCartError(CheckoutError):
    """Nothing to purchase. The shopper has to add items first."""

    kind = "EMPTY_CART"
    http_status = 400

    def __init__(self, shopper_id: str):
        super().__init__("The cart is empty. No purchase was made.", shopper_id=shopper_id)


class ShopperNotFoundError(CheckoutError):
    kind = "NOT_FOUND"
    http_status = 404

    def __init__(self, shopper_id: str):
        super().__init__(f"Shopper {shopper_id} not found.", shopper_id=shopper_id)


class PurchaseNotFoundError(CheckoutError):
    kind = "NOT_FOUND"
    http_status = 404

    def __init__(self, purchase_id: str):
        super().__init__(f"Purchase {purchase_id} not found.", purchase_id=purchase_id)


class PersistenceError(CheckoutError):
    """The store could not complete the unit of work. Nothing was committed."""

    http_status = 503
    retryable = True

    def __init__(self, shopper_id: str, reason: str):
        super().__init__(f"Checkout could not be completed: {reason}", shopper_id=shopper_id)


class MissingProductError(CheckoutError):
    """A cart line points at a product the catalogue no longer has."""

    def __init__(self, shopper_id: str, product_id: str):
        super().__init__(
            f"Cart line references unknown product {product_id}.",
            shopper_id=shopper_id,
            product_id=product_id,
        )


class CartConflictError(PersistenceError):
    """The cart changed between reading it and clearing it.

    Another checkout or cart write got there first. The unit of work is
    rolled back; retrying sees the cart as it is now.
    """

    def __init__(self, shopper_id: str, expected: int, removed: int):
        super().__init__(shopper_id, f"cart changed during checkout (expected {expected} lines, cleared {removed})")
        self.context.update(expected=expected, removed=removed)


class InternalCheckoutError(CheckoutError):
    """An unexpected failure inside the checkout. Not offered for retry."""

    def __init__(self, shopper_id: str, reason: str):
        super().__init__(f"Checkout failed: {reason}", shopper_id=shopper_id)
