"""Tests for the Purchase aggregate and its line snapshots."""

from datetime import UTC, datetime

import pytest
from protean.exceptions import ValidationError
from store.ledger.events import PurchaseCompleted
from store.ledger.purchase import Purchase
from store.shared.money import Money

CHECKOUT_TIME = datetime(2025, 9, 21, 17, 11, 57, tzinfo=UTC)


def _lines():
    return [
        {"product_id": "prod-silk", "name": "Silk Shirt", "unit_price": Money.parse("799.90"), "quantity": 1},
        {"product_id": "prod-jeans", "name": "Jeans", "unit_price": Money.parse("499.90"), "quantity": 2},
    ]


def _record(total="1799.70"):
    return Purchase.record(
        shopper_id="shopper-001",
        lines=_lines(),
        total=Money.parse(total),
        created_at=CHECKOUT_TIME,
    )


class TestRecord:
    def test_record_sets_fields(self):
        purchase = _record()
        assert purchase.shopper_id == "shopper-001"
        assert purchase.created_at == CHECKOUT_TIME
        assert purchase.total == Money.parse("1799.70")
        assert len(purchase.lines) == 2

    def test_snapshot_keeps_checkout_order(self):
        purchase = _record()
        assert [line.name for line in purchase.snapshot] == ["Silk Shirt", "Jeans"]
        assert [line.position for line in purchase.snapshot] == [0, 1]

    def test_line_subtotal(self):
        purchase = _record()
        jeans = purchase.snapshot[1]
        assert jeans.subtotal == Money.parse("999.80")

    def test_mismatched_total_is_rejected(self):
        with pytest.raises(ValidationError):
            _record(total="1799.69")

    def test_record_raises_event(self):
        purchase = _record()
        events = [e for e in purchase._events if isinstance(e, PurchaseCompleted)]
        assert len(events) == 1
        assert events[0].purchase_id == str(purchase.id)
        assert events[0].total == "1799.70"
        assert events[0].line_count == 2


class TestToRecord:
    def test_durable_shape(self):
        record = _record().to_record()
        assert set(record) == {"id", "shopper_id", "created_at", "total", "lines"}
        assert record["total"] == "1799.70"
        assert record["created_at"] == CHECKOUT_TIME.isoformat()
        assert record["lines"][0] == {
            "product_id": "prod-silk",
            "name": "Silk Shirt",
            "unit_price": "799.90",
            "quantity": 1,
        }
