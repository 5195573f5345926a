"""Cart store: repository over a shopper's cart lines.

Every method works through the repository DAO, so when a unit of work is in
progress the reads and deletes join it instead of committing on their own.
"""

from protean.utils.query import Q

from store.cart.cart_line import CartLine
from store.checkout.errors import CartConflictError
from store.domain import store


@store.repository(part_of=CartLine)
class CartStore:
    def read_lines(self, shopper_id) -> list[CartLine]:
        """All lines in the shopper's cart, oldest first."""
        return self._dao.query.filter(shopper_id=str(shopper_id)).order_by("added_at").all().items

    def line_for(self, shopper_id, product_id) -> CartLine | None:
        lines = self._dao.query.filter(shopper_id=str(shopper_id), product_id=str(product_id)).all().items
        return lines[0] if lines else None

    def clear(self, shopper_id, lines=None) -> int:
        """Delete the shopper's cart lines. Returns how many were removed.

        When ``lines`` is given, each one is deleted only if it still holds
        the quantity that was read. If any of them was already removed or
        changed, CartConflictError is raised so the caller's unit of work
        rolls back instead of recording a purchase twice.
        """
        shopper_id = str(shopper_id)
        if lines is None:
            lines = self.read_lines(shopper_id)

        removed = 0
        for line in lines:
            removed += self._dao._delete_all(Q(id=str(line.id), shopper_id=shopper_id, quantity=line.quantity))

        if removed != len(lines):
            raise CartConflictError(shopper_id, expected=len(lines), removed=removed)
        return removed
