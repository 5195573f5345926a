"""Product aggregate and the read-only catalogue lookup used at checkout."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String, ValueObject

from store.catalogue.events import ProductPriceChanged, ProductRegistered
from store.domain import store
from store.shared.money import Money


@store.aggregate
class Product:
    name = String(required=True, max_length=255, unique=True)
    price = ValueObject(Money, required=True)

    @invariant.post
    def price_must_not_be_negative(self):
        if self.price is not None and self.price.is_negative:
            raise ValidationError({"price": ["Price cannot be negative"]})

    @classmethod
    def register(cls, name, price):
        product = cls(name=name, price=Money.parse(price))
        product.raise_(
            ProductRegistered(
                product_id=str(product.id),
                name=name,
                price=str(product.price),
            )
        )
        return product

    def change_price(self, new_price):
        new_price = Money.parse(new_price)
        previous_price = self.price
        self.price = new_price

        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=str(previous_price),
                new_price=str(new_price),
            )
        )


@store.repository(part_of=Product)
class ProductCatalog:
    """Catalogue queries. The checkout engine only ever reads through here."""

    def lookup(self, product_ids) -> dict:
        """Map each known product id to its Product; unknown ids are simply absent."""
        wanted = sorted({str(product_id) for product_id in product_ids})
        if not wanted:
            return {}

        products = self._dao.query.filter(id__in=wanted).all().items
        return {str(product.id): product for product in products}

    def listing(self):
        """All products, ordered by name."""
        return self._dao.query.order_by("name").all().items
