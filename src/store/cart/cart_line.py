"""CartLine aggregate: one row per (shopper, product) pending purchase.

Lines are transient: the checkout engine deletes all of a shopper's lines in
the same unit of work that records the purchase.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer

from store.cart.events import CartItemAdded
from store.domain import store


@store.aggregate
class CartLine:
    shopper_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def open(cls, shopper_id, product_id, quantity):
        now = datetime.now(UTC)
        line = cls(
            shopper_id=str(shopper_id),
            product_id=str(product_id),
            quantity=quantity,
            added_at=now,
            updated_at=now,
        )
        line._announce(quantity)
        return line

    def increase(self, quantity):
        """Add more of the same product to an existing line."""
        self.quantity += quantity
        self.updated_at = datetime.now(UTC)
        self._announce(quantity)

    def _announce(self, quantity):
        self.raise_(
            CartItemAdded(
                line_id=str(self.id),
                shopper_id=str(self.shopper_id),
                product_id=str(self.product_id),
                quantity=quantity,
                line_quantity=self.quantity,
            )
        )
