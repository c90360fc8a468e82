"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart, or its quantity was increased."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    price_snapshot = Float(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartItemQuantityUpdated:
    __version__ = "v1"

    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartItemRemoved:
    __version__ = "v1"

    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were removed, either on request or because the cart was checked out."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    items_removed = Integer(required=True)
    reason = String(max_length=50)
