"""Domain events for the Purchase aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from store.domain import store


@store.event(part_of="Purchase")
class PurchaseCompleted:
    """A cart was checked out and recorded in the purchase ledger."""

    __version__ = 1

    purchase_id = Identifier(required=True)
    shopper_id = Identifier(required=True)
    total = String(required=True)  # Two-decimal fixed-point string
    line_count = Integer(required=True)
    completed_at = DateTime(required=True)
