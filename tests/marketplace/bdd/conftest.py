"""Shared BDD fixtures and step definitions for the marketplace."""

import json

import pytest
from marketplace.cart.cart import ShoppingCart
from marketplace.cart.items import AddToCart
from marketplace.catalogue.management import AddProduct, SetProductAvailability, UpdateProduct
from marketplace.checkout.placement import PlaceOrder
from marketplace.errors import MarketplaceError
from marketplace.order.order import Order
from marketplace.order.status import RecordPayment, UpdateOrderStatus
from protean import current_domain
from pytest_bdd import given, parsers, then

ADDRESS = {
    "street": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "zip_code": "560001",
    "country": "India",
}

VENDOR = "vendor-001"


@pytest.fixture()
def world():
    """Scenario state: listed products by name, the current order and any captured error."""
    return {"products": {}, "order_id": None, "error": None}


def _process(world, command):
    """Run a command, capturing a domain error instead of raising it."""
    try:
        return current_domain.process(command, asynchronous=False)
    except MarketplaceError as exc:
        world["error"] = exc
        return None


def _add_to_cart(world, user_id, quantity, name):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=world["products"][name], quantity=quantity),
        asynchronous=False,
    )


@pytest.fixture()
def attempt(world):
    """Process a command the way a scenario step does, keeping any domain error."""

    def _attempt(command):
        return _process(world, command)

    return _attempt


def _checkout(world, user_id, payment_method="cod"):
    return _process(
        world,
        PlaceOrder(user_id=user_id, shipping_address=json.dumps(ADDRESS), payment_method=payment_method),
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price:f}'))
def _(world, name, price):
    world["products"][name] = current_domain.process(
        AddProduct(vendor_id=VENDOR, name=name, description=f"{name} for your event", price=price),
        asynchronous=False,
    )


@given(parsers.cfparse('customer "{user_id}" has {quantity:d} of "{name}" in the cart'))
def _(world, user_id, quantity, name):
    _add_to_cart(world, user_id, quantity, name)


@given(parsers.cfparse('customer "{user_id}" has checked out {quantity:d} of "{name}" paying by "{method}"'))
def _(world, user_id, quantity, name, method):
    _add_to_cart(world, user_id, quantity, name)
    world["order_id"] = _checkout(world, user_id, method)
    assert world["order_id"] is not None


@given(parsers.cfparse('the price of "{name}" changes to {price:f}'))
def _(world, name, price):
    current_domain.process(
        UpdateProduct(product_id=world["products"][name], caller_id=VENDOR, price=price),
        asynchronous=False,
    )


@given(parsers.cfparse('"{name}" is withdrawn from sale'))
def _(world, name):
    current_domain.process(
        SetProductAvailability(product_id=world["products"][name], caller_id=VENDOR, is_available=False),
        asynchronous=False,
    )


@given(parsers.cfparse('the administrator moves the order to "{status}"'))
def _(world, status):
    current_domain.process(
        UpdateOrderStatus(order_id=world["order_id"], status=status, changed_by="admin-001"),
        asynchronous=False,
    )


@given("the payment has been recorded")
def _(world):
    current_domain.process(RecordPayment(order_id=world["order_id"]), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
def _order(world) -> Order:
    return current_domain.repository_for(Order).get(world["order_id"])


@then(parsers.cfparse('the order status is "{status}"'))
def _(world, status):
    assert _order(world).status == status


@then(parsers.cfparse('the payment status is "{payment_status}"'))
def _(world, payment_status):
    assert _order(world).payment_status == payment_status


@then(parsers.cfparse('the {action} is rejected as "{code}"'))
def _(world, action, code):  # noqa: ARG001
    assert world["error"] is not None
    assert world["error"].code == code


@then(parsers.cfparse('the cart of "{user_id}" is empty'))
def _(user_id):
    assert len(current_domain.repository_for(ShoppingCart).get(user_id).items) == 0


@then(parsers.cfparse('the cart of "{user_id}" still holds {count:d} line'))
def _(user_id, count):
    assert len(current_domain.repository_for(ShoppingCart).get(user_id).items) == count
