"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks entity IDs returned by earlier requests so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class VendorState:
    """Tracks the listings of a single simulated vendor."""

    vendor_id: str | None = None
    product_ids: list[str] = field(default_factory=list)


@dataclass
class ShopperState:
    """Tracks a shopper's cart and the order it turns into."""

    user_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    cart_item_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    current_status: str = "pending"
