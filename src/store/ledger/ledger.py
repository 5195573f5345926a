"""Purchase ledger: append-only access to finalized purchases.

The ledger deliberately offers no update or delete: a purchase, once
appended, can only be read back.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from store.checkout.errors import PurchaseNotFoundError
from store.domain import store
from store.ledger.purchase import Purchase

DEFAULT_PAGE_SIZE = 50


@store.repository(part_of=Purchase)
class PurchaseRepository:
    def page_for_shopper(self, shopper_id, offset: int, limit: int) -> list[Purchase]:
        return (
            self._dao.query.filter(shopper_id=str(shopper_id))
            .order_by("created_at")
            .offset(offset)
            .limit(limit)
            .all()
            .items
        )


class PurchaseHistory:
    """A shopper's purchases, oldest first.

    Iterating queries the ledger page by page, and every new iteration starts
    over from the first purchase.
    """

    def __init__(self, shopper_id, page_size: int = DEFAULT_PAGE_SIZE):
        self.shopper_id = str(shopper_id)
        self.page_size = page_size

    def __iter__(self):
        repo = current_domain.repository_for(Purchase)
        offset = 0
        while True:
            page = repo.page_for_shopper(self.shopper_id, offset=offset, limit=self.page_size)
            yield from page
            if len(page) < self.page_size:
                return
            offset += self.page_size


class PurchaseLedger:
    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        self.page_size = page_size

    def append(self, purchase: Purchase) -> str:
        """Persist a new purchase within the caller's unit of work."""
        current_domain.repository_for(Purchase).add(purchase)
        return str(purchase.id)

    def get(self, purchase_id) -> Purchase:
        try:
            return current_domain.repository_for(Purchase).get(str(purchase_id))
        except ObjectNotFoundError:
            raise PurchaseNotFoundError(str(purchase_id)) from None

    def list_by_shopper(self, shopper_id) -> PurchaseHistory:
        return PurchaseHistory(shopper_id, page_size=self.page_size)
