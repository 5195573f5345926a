"""Cart item management: command, handler and the locked dispatch helper."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from store.cart.cart_line import CartLine
from store.cart.locks import DEFAULT_LOCK_TIMEOUT, shopper_locks
from store.catalogue.product import Product
from store.domain import store


@store.command(part_of="CartLine")
class AddToCart:
    shopper_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@store.command_handler(part_of=CartLine)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        try:
            current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError:
            raise ValidationError({"product_id": [f"Unknown product {command.product_id}"]}) from None

        repo = current_domain.repository_for(CartLine)
        line = repo.line_for(command.shopper_id, command.product_id)
        if line is None:
            line = CartLine.open(
                shopper_id=command.shopper_id,
                product_id=command.product_id,
                quantity=command.quantity,
            )
        else:
            line.increase(command.quantity)

        repo.add(line)
        return str(line.id)


def add_to_cart(shopper_id, product_id, quantity=1, locks=shopper_locks, timeout=DEFAULT_LOCK_TIMEOUT):
    """Dispatch AddToCart while holding the shopper's cart lock.

    The handler's unit of work commits before the lock is released, so a
    concurrent checkout sees either none or all of this change.
    """
    with locks.hold(shopper_id, timeout=timeout):
        return current_domain.process(
            AddToCart(
                shopper_id=str(shopper_id),
                product_id=str(product_id),
                quantity=quantity,
            ),
            asynchronous=False,
        )
