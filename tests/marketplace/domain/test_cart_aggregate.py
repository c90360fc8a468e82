"""Tests for the ShoppingCart aggregate."""

import pytest
from marketplace.cart.cart import ShoppingCart
from marketplace.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
)
from marketplace.catalogue.reader import ProductSnapshot
from marketplace.errors import InvalidArgument, NotFound, Unavailable


def _product(product_id="prod-001", price=100.0, is_available=True, name="Balloon Arch"):
    return ProductSnapshot(
        product_id=product_id,
        name=name,
        price=price,
        is_available=is_available,
        category="Decoration",
        vendor_id="vendor-001",
    )


def _make_cart():
    return ShoppingCart.create(user_id="user-001")


class TestCartCreation:
    def test_cart_identity_is_the_user(self):
        cart = _make_cart()
        assert cart.id == "user-001"
        assert cart.user_id == "user-001"
        assert len(cart.items) == 0

    def test_new_cart_has_zero_subtotal(self):
        cart = _make_cart()
        assert cart.subtotal() == 0
        assert cart.item_count() == 0


class TestAddItem:
    def test_add_item(self):
        cart = _make_cart()
        cart.add_item(_product(), 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].price_snapshot == 100.0

    def test_default_quantity_is_one(self):
        cart = _make_cart()
        cart.add_item(_product())
        assert cart.items[0].quantity == 1

    def test_add_item_raises_event(self):
        cart = _make_cart()
        cart.add_item(_product(), 1)
        added = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(added) == 1
        assert added[0].product_id == "prod-001"
        assert added[0].new_quantity == 1

    def test_same_product_accumulates_quantity(self):
        cart = _make_cart()
        cart.add_item(_product(), 2)
        cart.add_item(_product(), 3)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_repeat_add_refreshes_price_snapshot(self):
        cart = _make_cart()
        cart.add_item(_product(price=100.0), 1)
        cart.add_item(_product(price=80.0), 1)
        assert cart.items[0].price_snapshot == 80.0

    def test_different_products_get_separate_lines(self):
        cart = _make_cart()
        cart.add_item(_product("prod-001"), 1)
        cart.add_item(_product("prod-002"), 1)
        assert len(cart.items) == 2

    def test_unavailable_product_is_rejected(self):
        cart = _make_cart()
        with pytest.raises(Unavailable) as exc:
            cart.add_item(_product(is_available=False), 1)
        assert "Balloon Arch" in exc.value.messages["product_id"][0]
        assert len(cart.items) == 0

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_below_one_is_rejected(self, quantity):
        cart = _make_cart()
        with pytest.raises(InvalidArgument):
            cart.add_item(_product(), quantity)
        assert len(cart.items) == 0

    def test_subtotal_uses_price_snapshots(self):
        cart = _make_cart()
        cart.add_item(_product("prod-001", price=10.5), 2)
        cart.add_item(_product("prod-002", price=4.25), 4)
        assert cart.subtotal() == 38.0
        assert cart.item_count() == 6


class TestUpdateItemQuantity:
    def test_update_quantity(self):
        cart = _make_cart()
        item = cart.add_item(_product(), 1)
        cart.update_item_quantity(item.id, 5)
        assert cart.items[0].quantity == 5

    def test_update_raises_event(self):
        cart = _make_cart()
        item = cart.add_item(_product(), 1)
        cart._events.clear()
        cart.update_item_quantity(item.id, 3)
        assert len(cart._events) == 1
        event = cart._events[0]
        assert isinstance(event, CartItemQuantityUpdated)
        assert event.previous_quantity == 1
        assert event.new_quantity == 3

    def test_update_keeps_price_snapshot(self):
        cart = _make_cart()
        item = cart.add_item(_product(price=50.0), 1)
        cart.update_item_quantity(item.id, 4)
        assert cart.items[0].price_snapshot == 50.0

    def test_zero_quantity_is_rejected(self):
        cart = _make_cart()
        item = cart.add_item(_product(), 2)
        with pytest.raises(InvalidArgument):
            cart.update_item_quantity(item.id, 0)
        assert cart.items[0].quantity == 2

    def test_unknown_item_is_not_found(self):
        cart = _make_cart()
        with pytest.raises(NotFound):
            cart.update_item_quantity("missing-item", 2)


class TestRemoveItem:
    def test_remove_item(self):
        cart = _make_cart()
        item = cart.add_item(_product(), 1)
        assert cart.remove_item(item.id) is True
        assert len(cart.items) == 0

    def test_remove_raises_event(self):
        cart = _make_cart()
        item = cart.add_item(_product(), 1)
        cart._events.clear()
        cart.remove_item(item.id)
        assert isinstance(cart._events[0], CartItemRemoved)
        assert cart._events[0].product_id == "prod-001"

    def test_removing_absent_item_changes_nothing(self):
        cart = _make_cart()
        cart.add_item(_product(), 2)
        cart._events.clear()

        assert cart.remove_item("missing-item") is False
        assert cart.remove_item("missing-item") is False
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart._events == []


class TestClear:
    def test_clear_empties_cart(self):
        cart = _make_cart()
        cart.add_item(_product("prod-001"), 1)
        cart.add_item(_product("prod-002"), 3)
        cart.clear()
        assert len(cart.items) == 0
        assert cart.subtotal() == 0

    def test_clear_raises_event(self):
        cart = _make_cart()
        cart.add_item(_product("prod-001"), 1)
        cart.add_item(_product("prod-002"), 1)
        cart._events.clear()
        cart.clear(reason="checked_out")
        event = cart._events[0]
        assert isinstance(event, CartCleared)
        assert event.items_removed == 2
        assert event.reason == "checked_out"
