"""Purchase aggregate: the immutable record of a completed checkout.

A purchase owns a frozen snapshot of every line as it was at checkout time:
product name and unit price are copied, not referenced, so later catalogue
edits never rewrite history. The aggregate exposes no mutators; it is built
once by ``Purchase.record`` and only ever read afterwards.
"""

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, ValueObject

from store.domain import store
from store.ledger.events import PurchaseCompleted
from store.shared.money import Money


@store.entity(part_of="Purchase")
class PurchaseLineSnapshot:
    """One purchased line, frozen at checkout."""

    position = Integer(required=True, min_value=0)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = ValueObject(Money, required=True)
    quantity = Integer(required=True, min_value=1)

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


@store.aggregate
class Purchase:
    shopper_id = Identifier(required=True)
    created_at = DateTime(required=True)
    total = ValueObject(Money, required=True)
    lines = HasMany(PurchaseLineSnapshot)

    @classmethod
    def record(cls, shopper_id, lines, total, created_at):
        """Create a purchase from joined cart data.

        Args:
            shopper_id: The shopper checking out.
            lines: Ordered dicts with product_id, name, unit_price (Money), quantity.
            total: The grand total computed by the caller; must equal the sum
                of the line subtotals.
            created_at: Checkout timestamp.
        """
        purchase = cls(
            shopper_id=str(shopper_id),
            created_at=created_at,
            total=total,
        )

        for position, line in enumerate(lines):
            purchase.add_lines(
                PurchaseLineSnapshot(
                    position=position,
                    product_id=str(line["product_id"]),
                    name=line["name"],
                    unit_price=line["unit_price"],
                    quantity=line["quantity"],
                )
            )

        expected = sum((snapshot.subtotal for snapshot in purchase.lines), Money.zero())
        if expected != total:
            raise ValidationError({"total": [f"Total {total} does not match line subtotals {expected}"]})

        purchase.raise_(
            PurchaseCompleted(
                purchase_id=str(purchase.id),
                shopper_id=str(shopper_id),
                total=str(total),
                line_count=len(lines),
                completed_at=created_at,
            )
        )
        return purchase

    @property
    def snapshot(self) -> tuple:
        """Lines in checkout order."""
        return tuple(sorted(self.lines, key=lambda line: line.position))

    def to_record(self) -> dict:
        """The durable purchase shape shared with receipts and reporting."""
        return {
            "id": str(self.id),
            "shopper_id": str(self.shopper_id),
            "created_at": self.created_at.isoformat(),
            "total": str(self.total),
            "lines": [
                {
                    "product_id": str(line.product_id),
                    "name": line.name,
                    "unit_price": str(line.unit_price),
                    "quantity": line.quantity,
                }
                for line in self.snapshot
            ],
        }
