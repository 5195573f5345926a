"""Per-shopper serialization of cart writes and checkouts.

Holding a shopper's lock across a whole unit of work makes the
read-cart/clear-cart sequence linearizable for that shopper. Locks for
different shoppers are independent, so unrelated checkouts never wait on
each other.
"""

import os
import threading
from contextlib import contextmanager

from store.checkout.errors import PersistenceError

DEFAULT_LOCK_TIMEOUT = float(os.getenv("CHECKOUT_LOCK_TIMEOUT", "5"))


class ShopperLocks:
    """Registry of one lock per shopper, created on demand.

    An entry is dropped as soon as no thread holds or waits for it.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: dict[str, list] = {}  # shopper_id -> [lock, users]

    def _checkout_entry(self, shopper_id: str) -> threading.Lock:
        with self._guard:
            entry = self._entries.setdefault(shopper_id, [threading.Lock(), 0])
            entry[1] += 1
            return entry[0]

    def _return_entry(self, shopper_id: str) -> None:
        with self._guard:
            entry = self._entries[shopper_id]
            entry[1] -= 1
            if entry[1] == 0:
                del self._entries[shopper_id]

    @contextmanager
    def hold(self, shopper_id, timeout: float | None = None):
        """Hold the shopper's lock for the duration of the block.

        Raises PersistenceError if the lock cannot be acquired within
        ``timeout`` seconds; ``None`` waits indefinitely.
        """
        shopper_id = str(shopper_id)
        lock = self._checkout_entry(shopper_id)
        try:
            acquired = lock.acquire(timeout=-1 if timeout is None else timeout)
            if not acquired:
                raise PersistenceError(shopper_id, "timed out waiting for the shopper's cart")
            try:
                yield
            finally:
                lock.release()
        finally:
            self._return_entry(shopper_id)

    def __len__(self):
        with self._guard:
            return len(self._entries)


shopper_locks = ShopperLocks()
