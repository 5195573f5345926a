"""Checkout transaction engine: turns a shopper's cart into a purchase.

The engine owns no state. It opens one explicit unit of work, and inside it:

    1. reads the shopper's cart lines, joined with current catalogue data
    2. rejects an empty cart
    3. prices every line and totals them with exact Money arithmetic
    4. freezes the joined data into purchase line snapshots
    5. appends the purchase to the ledger
    6. clears the cart

and then commits. Any failure before the commit rolls everything back, so a
purchase never exists without its cart having been cleared, or the reverse.

The whole unit of work runs under the shopper's cart lock, which makes
read-then-clear linearizable per shopper: of two simultaneous checkouts on
the same cart, one records the purchase and the other finds the cart empty.

The lock only spans one process. Across processes the cart is cleared line
by line, each delete matching the id and quantity that were read, and a
checkout that clears fewer lines than it priced rolls back with
CartConflictError.
"""

from datetime import UTC, datetime

import structlog
from protean.core.unit_of_work import UnitOfWork
from protean.exceptions import DatabaseError, TransactionError
from protean.utils.globals import current_domain
from sqlalchemy.exc import OperationalError

from store.cart.cart_line import CartLine
from store.cart.locks import DEFAULT_LOCK_TIMEOUT, shopper_locks
from store.catalogue.product import Product
from store.checkout.errors import (
    CheckoutError,
    EmptyCartError,
    InternalCheckoutError,
    MissingProductError,
    PersistenceError,
)
from store.ledger.ledger import PurchaseLedger
from store.ledger.purchase import Purchase
from store.shared.money import Money

logger = structlog.get_logger(__name__)


def _utcnow():
    return datetime.now(UTC)


class CheckoutEngine:
    def __init__(self, locks=shopper_locks, clock=_utcnow, lock_timeout=DEFAULT_LOCK_TIMEOUT, ledger=None):
        self._locks = locks
        self._clock = clock
        self._lock_timeout = lock_timeout
        self._ledger = ledger or PurchaseLedger()

    def finalize_purchase(self, shopper_id) -> Purchase:
        """Check out the shopper's cart.

        Returns:
            The recorded Purchase.

        Raises:
            EmptyCartError: The cart has no lines. Nothing changed.
            MissingProductError: A line references a product the catalogue
                does not know. Nothing changed.
            PersistenceError: The unit of work could not be completed (or the
                cart lock could not be taken in time, or the cart changed
                underneath). Nothing changed; the call may be retried.
            InternalCheckoutError: Any other failure. Nothing changed.
        """
        shopper_id = str(shopper_id)
        log = logger.bind(shopper_id=shopper_id)
        log.debug("Checkout started")

        with self._locks.hold(shopper_id, timeout=self._lock_timeout):
            uow = UnitOfWork()
            uow.start()
            try:
                purchase = self._record_purchase(shopper_id)
                uow.commit()
            except EmptyCartError:
                log.info("Checkout rejected: cart is empty")
                raise
            except CheckoutError as exc:
                log.error("Checkout aborted", kind=exc.kind, error=exc.message, **exc.context)
                raise
            except (DatabaseError, TransactionError, OperationalError) as exc:
                log.error("Checkout unit of work failed", error=str(exc), exc_info=True)
                raise PersistenceError(shopper_id, str(exc)) from exc
            except Exception as exc:
                log.error("Checkout failed unexpectedly", error=str(exc), exc_info=True)
                raise InternalCheckoutError(shopper_id, str(exc)) from exc
            finally:
                if uow.in_progress:
                    uow.rollback()

        log.info(
            "Purchase finalized",
            purchase_id=str(purchase.id),
            total=str(purchase.total),
            line_count=len(purchase.lines),
        )
        return purchase

    def _record_purchase(self, shopper_id: str) -> Purchase:
        cart_store = current_domain.repository_for(CartLine)

        cart_lines = cart_store.read_lines(shopper_id)
        if not cart_lines:
            raise EmptyCartError(shopper_id)

        products = current_domain.repository_for(Product).lookup(line.product_id for line in cart_lines)

        snapshots = []
        total = Money.zero()
        for cart_line in cart_lines:
            product = products.get(str(cart_line.product_id))
            if product is None:
                raise MissingProductError(shopper_id, str(cart_line.product_id))

            subtotal = product.price * cart_line.quantity
            total = total + subtotal
            snapshots.append(
                {
                    "product_id": str(product.id),
                    "name": product.name,
                    "unit_price": product.price,
                    "quantity": cart_line.quantity,
                }
            )

        purchase = Purchase.record(
            shopper_id=shopper_id,
            lines=snapshots,
            total=total,
            created_at=self._clock(),
        )
        self._ledger.append(purchase)

        cleared = cart_store.clear(shopper_id, cart_lines)
        logger.debug("Cart cleared", shopper_id=shopper_id, lines=cleared)

        return purchase
