"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state with no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class CatalogueState:
    """Products registered by this user, with the prices they were listed at."""

    prices: dict[str, str] = field(default_factory=dict)


@dataclass
class CheckoutState:
    """Tracks state for a single cart-to-purchase lifecycle."""

    shopper_id: str | None = None
    cart_item_count: int = 0
    purchase_ids: list[str] = field(default_factory=list)
    empty_cart_rejections: int = 0
