"""Domain events for the CartLine aggregate."""

from protean.fields import Identifier, Integer

from store.domain import store


@store.event(part_of="CartLine")
class CartItemAdded:
    """A product was added to a shopper's cart (or its quantity increased)."""

    __version__ = 1

    line_id = Identifier(required=True)
    shopper_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)  # Quantity added by this request
    line_quantity = Integer(required=True)  # Quantity on the line afterwards
