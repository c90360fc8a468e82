"""Shopping Cart aggregate — one mutable cart per user.

The cart's identity is the owning user's id, which makes "one cart per user"
a property of storage rather than of a lookup. A cart is created lazily on
first read or first add and is never deleted, only emptied, so the next add
never races on creation.

Each line keeps a price snapshot taken when the product was last added. The
snapshot is for display only: checkout always re-reads the catalogue.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer

from marketplace.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
)
from marketplace.domain import marketplace
from marketplace.errors import InvalidArgument, NotFound, Unavailable


@marketplace.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price_snapshot = Float(required=True, min_value=0.0)
    added_at = DateTime()


@marketplace.aggregate
class ShoppingCart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(
            id=str(user_id),
            user_id=str(user_id),
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def item_for_product(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def item(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def subtotal(self) -> float:
        """Display total from the price snapshots; not what checkout charges."""
        return round(sum(item.price_snapshot * item.quantity for item in self.items), 2)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity=1):
        """Add ``quantity`` of a catalogue product.

        ``product`` is a catalogue snapshot. An existing line for the same
        product accumulates the quantity and takes the product's current price.
        """
        if not product.is_available:
            raise Unavailable({"product_id": [f'"{product.name}" is currently not available']})
        if quantity is None or quantity < 1:
            raise InvalidArgument({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        existing = self.item_for_product(product.product_id)

        if existing:
            existing.quantity += quantity
            existing.price_snapshot = product.price
            item = existing
        else:
            item = CartItem(
                product_id=product.product_id,
                quantity=quantity,
                price_snapshot=product.price,
                added_at=now,
            )
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                user_id=str(self.user_id),
                item_id=str(item.id),
                product_id=str(product.product_id),
                quantity=quantity,
                new_quantity=item.quantity,
                price_snapshot=product.price,
            )
        )
        return item

    def update_item_quantity(self, item_id, quantity):
        """Set a line's quantity. Availability and price are left as they are."""
        if quantity is None or quantity < 1:
            raise InvalidArgument({"quantity": ["Quantity must be at least 1"]})

        item = self.item(item_id)
        if item is None:
            raise NotFound({"item_id": ["Item not found in cart"]})

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityUpdated(
                user_id=str(self.user_id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id) -> bool:
        """Remove a line if present. Removing an absent line changes nothing."""
        item = self.item(item_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                user_id=str(self.user_id),
                item_id=str(item_id),
                product_id=str(item.product_id),
            )
        )
        return True

    def clear(self, reason="cleared"):
        items = list(self.items)
        for item in items:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                user_id=str(self.user_id),
                items_removed=len(items),
                reason=reason,
            )
        )


@marketplace.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_for_user(self, user_id) -> ShoppingCart | None:
        try:
            return self.get(str(user_id))
        except ObjectNotFoundError:
            return None

    def for_user(self, user_id) -> ShoppingCart:
        cart = self.find_for_user(user_id)
        if cart is None:
            raise NotFound({"cart": ["Cart not found"]})
        return cart

    def get_or_create(self, user_id) -> ShoppingCart:
        cart = self.find_for_user(user_id)
        if cart is None:
            cart = ShoppingCart.create(user_id)
            self.add(cart)
        return cart
