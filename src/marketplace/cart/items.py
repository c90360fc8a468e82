"""Cart item management — commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.catalogue.reader import CatalogueReader
from marketplace.domain import marketplace


@marketplace.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)


@marketplace.command(part_of="ShoppingCart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer()


@marketplace.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@marketplace.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = CatalogueReader().snapshot(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_or_create(command.user_id)
        item = cart.add_item(product, command.quantity)
        repo.add(cart)
        return str(item.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id)
        cart.update_item_quantity(command.item_id, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id)
        if not cart.remove_item(command.item_id):
            return False
        repo.add(cart)
        return True
