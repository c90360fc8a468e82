"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, name, quantity, price}
    item_count = Integer(required=True)
    total_price = Float(required=True)
    payment_method = String(required=True, max_length=10)
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved the order to a new status."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
    payment_status = String(required=True, max_length=20)
    changed_by = Identifier()
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderCancelled:
    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    payment_status = String(required=True, max_length=20)
    refund_due = Float(default=0.0)
    cancelled_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class PaymentRecorded:
    __version__ = "v1"

    order_id = Identifier(required=True)
    amount = Float(required=True)
    payment_method = String(required=True, max_length=10)
    recorded_at = DateTime(required=True)
