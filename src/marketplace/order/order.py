"""Order aggregate — an immutable record of a checkout.

Lines, prices and the total are copied from the catalogue at checkout time and
never change afterwards. Only the order status and payment status move, and
every move goes through ``resolve_transition``.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from marketplace.domain import marketplace
from marketplace.errors import Forbidden, InvalidArgument, InvalidState, NotFound
from marketplace.order.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    PaymentRecorded,
)
from marketplace.order.lifecycle import (
    Actor,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    parse_payment_method,
    resolve_transition,
)

LISTING_LIMIT = 1000

# Rows fetched per query when totalling over every order
SCAN_PAGE_SIZE = 500

REQUIRED_ADDRESS_FIELDS = ("street", "city", "state", "zip_code")


def validate_shipping_address(address) -> dict:
    """Return a cleaned address dict, or raise ``InvalidArgument``."""
    address = address or {}
    missing = [name for name in REQUIRED_ADDRESS_FIELDS if not str(address.get(name) or "").strip()]
    if missing:
        raise InvalidArgument({name: ["Complete shipping address is required"] for name in missing})
    return {
        "street": address["street"].strip(),
        "city": address["city"].strip(),
        "state": address["state"].strip(),
        "zip_code": str(address["zip_code"]).strip(),
        "country": (address.get("country") or "").strip() or None,
    }


@marketplace.value_object(part_of="Order")
class ShippingAddress:
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100)


@marketplace.entity(part_of="Order")
class OrderItem:
    """A product line as it was priced when the order was placed."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


@marketplace.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_price = Float(required=True, min_value=0.0)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.COD.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    notes = String(max_length=1000, default="")
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines, shipping_address, payment_method=None, notes=None):
        """Create a pending order from priced lines.

        ``lines`` is a list of dicts with product_id, name, quantity and price.
        """
        address = validate_shipping_address(shipping_address)
        method = parse_payment_method(payment_method or PaymentMethod.COD.value)
        if not lines:
            raise InvalidState({"cart": ["Cart is empty. Add items before checkout."]})

        total = round(sum(line["price"] * line["quantity"] for line in lines), 2)
        now = datetime.now(UTC)

        order = cls(
            user_id=str(user_id),
            total_price=total,
            shipping_address=ShippingAddress(**address),
            payment_method=method.value,
            payment_status=PaymentStatus.PENDING.value,
            status=OrderStatus.PENDING.value,
            notes=notes or "",
            created_at=now,
            updated_at=now,
        )
        order.add_items([OrderItem(**line) for line in lines])

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                items=json.dumps(lines),
                item_count=sum(line["quantity"] for line in lines),
                total_price=total,
                payment_method=method.value,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------
    def is_owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    def assert_visible_to(self, caller_id, is_admin=False):
        if is_admin or self.is_owned_by(caller_id):
            return
        raise Forbidden({"order_id": ["Not authorized to view this order"]})

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def change_status(self, requested_status, changed_by=None):
        """Administrative move to any status."""
        previous = self.status
        transition = resolve_transition(
            self.status, self.payment_status, self.payment_method, requested_status, Actor.ADMIN
        )
        now = datetime.now(UTC)
        self.status = transition.status.value
        self.payment_status = transition.payment_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=self.status,
                payment_status=self.payment_status,
                changed_by=str(changed_by) if changed_by else None,
                changed_at=now,
            )
        )

    def cancel(self, requested_by):
        """Customer cancellation of their own order."""
        if not self.is_owned_by(requested_by):
            raise Forbidden({"order_id": ["Not authorized to cancel this order"]})

        previous = self.status
        was_paid = self.payment_status == PaymentStatus.PAID.value
        transition = resolve_transition(
            self.status,
            self.payment_status,
            self.payment_method,
            OrderStatus.CANCELLED,
            Actor.CUSTOMER,
        )
        now = datetime.now(UTC)
        self.status = transition.status.value
        self.payment_status = transition.payment_status.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=previous,
                payment_status=self.payment_status,
                refund_due=self.total_price if was_paid else 0.0,
                cancelled_at=now,
            )
        )

    def record_payment(self):
        """Mark a pending payment as received."""
        if self.status == OrderStatus.CANCELLED.value:
            raise InvalidState({"payment_status": ["Cannot record payment for a cancelled order"]})
        if self.payment_status != PaymentStatus.PENDING.value:
            raise InvalidState({"payment_status": [f"Payment is already {self.payment_status}"]})

        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.PAID.value
        self.updated_at = now

        self.raise_(
            PaymentRecorded(
                order_id=str(self.id),
                amount=self.total_price,
                payment_method=self.payment_method,
                recorded_at=now,
            )
        )


@marketplace.repository(part_of=Order)
class OrderRepository:
    def load(self, order_id) -> Order:
        try:
            return self.get(str(order_id))
        except ObjectNotFoundError:
            raise NotFound({"order_id": ["Order not found"]}) from None

    def for_user(self, user_id) -> list[Order]:
        return (
            self._dao.query.filter(user_id=str(user_id))
            .order_by("-created_at")
            .limit(LISTING_LIMIT)
            .all()
            .items
        )

    def listing(self, status=None) -> list[Order]:
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return query.order_by("-created_at").limit(LISTING_LIMIT).all().items

    def count(self, status=None) -> int:
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return query.all().total

    def revenue(self) -> float:
        """Sum of ``total_price`` over every order that is not cancelled."""
        total = 0.0
        offset = 0
        while True:
            page = self._dao.query.order_by("created_at").offset(offset).limit(SCAN_PAGE_SIZE).all()
            total += sum(order.total_price for order in page.items if order.status != OrderStatus.CANCELLED.value)
            if not page.has_next:
                break
            offset += SCAN_PAGE_SIZE
        return round(total, 2)
