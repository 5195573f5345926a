"""Domain events for the Shopper and Product aggregates."""

from protean.fields import Identifier, String

from store.domain import store


@store.event(part_of="Shopper")
class ShopperRegistered:
    """A shopper was registered with the store."""

    __version__ = 1

    shopper_id = Identifier(required=True)
    name = String(required=True)


@store.event(part_of="Product")
class ProductRegistered:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = String(required=True)  # Two-decimal fixed-point string


@store.event(part_of="Product")
class ProductPriceChanged:
    """The catalogue price of a product changed. Past purchases keep their price."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = String(required=True)
    new_price = String(required=True)
