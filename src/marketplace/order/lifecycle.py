"""Order lifecycle — statuses and the transition function.

Every status change an order can go through is decided here, independent of
who asks for it over which transport:

    Admin sets status      any status → requested status
                           delivered + cash on delivery → payment paid
                           cancelled while paid         → payment refunded

    Customer cancels       pending/confirmed → cancelled
                           paid → payment refunded

Administrators are not held to any ordering between statuses; customers can
only cancel, and only before the order is being processed.
"""

from enum import Enum
from typing import NamedTuple

from marketplace.errors import Forbidden, InvalidArgument, InvalidState


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    COD = "cod"
    CARD = "card"
    UPI = "upi"


class Actor(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


# States from which a customer may cancel
CANCELLABLE = {OrderStatus.PENDING, OrderStatus.CONFIRMED}


class Transition(NamedTuple):
    status: OrderStatus
    payment_status: PaymentStatus


def _parse(enum_cls, value, field_name):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidArgument({field_name: [f"Invalid {field_name}. Must be one of: {allowed}"]}) from None


def parse_status(value) -> OrderStatus:
    return _parse(OrderStatus, value, "status")


def parse_payment_method(value) -> PaymentMethod:
    return _parse(PaymentMethod, value, "payment_method")


def resolve_transition(
    current_status,
    current_payment_status,
    payment_method,
    requested_status,
    actor: Actor,
) -> Transition:
    """Work out the order's next status and payment status.

    Raises ``InvalidArgument`` for an unknown requested status, ``Forbidden``
    when a customer asks for anything but cancellation and ``InvalidState``
    when a customer cancels an order that is already past confirmation.
    """
    requested = parse_status(requested_status)
    current = OrderStatus(current_status)
    payment = PaymentStatus(current_payment_status)
    method = PaymentMethod(payment_method)

    if actor == Actor.CUSTOMER:
        if requested != OrderStatus.CANCELLED:
            raise Forbidden({"status": ["Customers can only cancel their orders"]})
        if current not in CANCELLABLE:
            raise InvalidState({"status": ["Order can only be cancelled when pending or confirmed"]})

    next_payment = payment
    if actor == Actor.ADMIN and requested == OrderStatus.DELIVERED and method == PaymentMethod.COD:
        next_payment = PaymentStatus.PAID
    if requested == OrderStatus.CANCELLED and payment == PaymentStatus.PAID:
        next_payment = PaymentStatus.REFUNDED

    return Transition(status=requested, payment_status=next_payment)
