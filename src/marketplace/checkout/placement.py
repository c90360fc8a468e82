"""Checkout — turns a user's cart into an order.

Order lines are priced from the catalogue as it is at checkout time, not from
the cart's price snapshots. Creating the order and emptying the cart happen in
the same unit of work: either both are stored or neither is.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.catalogue.reader import CatalogueReader
from marketplace.domain import marketplace
from marketplace.errors import InvalidState
from marketplace.order.lifecycle import PaymentMethod, parse_payment_method
from marketplace.order.order import Order, validate_shipping_address

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address = Text()  # JSON: {street, city, state, zip_code, country}
    payment_method = String(max_length=10, default=PaymentMethod.COD.value)
    notes = String(max_length=1000)


def price_lines(cart, reader) -> list[dict]:
    """Build order lines from the catalogue, failing on any unpurchasable product."""
    lines = []
    for item in cart.items:
        product = reader.find(item.product_id)
        if product is None:
            raise InvalidState({"items": ["One or more products in your cart are no longer available"]})
        if not product.is_available:
            raise InvalidState({"items": [f'"{product.name}" is no longer available']})
        lines.append(
            {
                "product_id": product.product_id,
                "name": product.name,
                "quantity": item.quantity,
                "price": product.price,
            }
        )
    return lines


@marketplace.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        address = json.loads(command.shipping_address) if command.shipping_address else {}
        validate_shipping_address(address)
        payment_method = parse_payment_method(command.payment_method or PaymentMethod.COD.value)

        carts = current_domain.repository_for(ShoppingCart)
        cart = carts.find_for_user(command.user_id)
        if cart is None or not cart.items:
            raise InvalidState({"cart": ["Cart is empty. Add items before checkout."]})

        lines = price_lines(cart, CatalogueReader())

        order = Order.place(
            user_id=command.user_id,
            lines=lines,
            shipping_address=address,
            payment_method=payment_method.value,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        cart.clear(reason="checked_out")
        carts.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            item_count=len(lines),
            total_price=order.total_price,
            payment_method=order.payment_method,
        )
        return str(order.id)
