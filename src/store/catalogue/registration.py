"""Catalogue maintenance: commands and handlers for shoppers and products."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from store.catalogue.product import Product
from store.catalogue.shopper import Shopper
from store.domain import store


@store.command(part_of="Shopper")
class RegisterShopper:
    name = String(required=True, max_length=255)
    payment_method = String(max_length=100)


@store.command(part_of="Product")
class RegisterProduct:
    name = String(required=True, max_length=255)
    price = String(required=True, max_length=20)  # Decimal string, e.g. "799.90"


@store.command(part_of="Product")
class ChangeProductPrice:
    product_id = Identifier(required=True)
    new_price = String(required=True, max_length=20)


@store.command_handler(part_of=Shopper)
class RegisterShopperHandler:
    @handle(RegisterShopper)
    def register_shopper(self, command):
        shopper = Shopper.register(
            name=command.name,
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Shopper).add(shopper)
        return str(shopper.id)


@store.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(RegisterProduct)
    def register_product(self, command):
        product = Product.register(name=command.name, price=command.price)
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(ChangeProductPrice)
    def change_product_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_price(command.new_price)
        repo.add(product)
