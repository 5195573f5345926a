"""Shopper aggregate: the customer identity the cart and ledger refer to."""

from protean.exceptions import ObjectNotFoundError
from protean.fields import String
from protean.utils.globals import current_domain

from store.catalogue.events import ShopperRegistered
from store.checkout.errors import ShopperNotFoundError
from store.domain import store


@store.aggregate
class Shopper:
    name = String(required=True, max_length=255)
    payment_method = String(max_length=100)

    @classmethod
    def register(cls, name, payment_method=None):
        shopper = cls(name=name, payment_method=payment_method)
        shopper.raise_(
            ShopperRegistered(
                shopper_id=str(shopper.id),
                name=name,
            )
        )
        return shopper


@store.repository(part_of=Shopper)
class ShopperDirectory:
    def listing(self):
        """All shoppers, ordered by name."""
        return self._dao.query.order_by("name").all().items


def require_shopper(shopper_id):
    """Load a shopper or fail with ShopperNotFoundError."""
    try:
        return current_domain.repository_for(Shopper).get(str(shopper_id))
    except ObjectNotFoundError:
        raise ShopperNotFoundError(str(shopper_id)) from None
