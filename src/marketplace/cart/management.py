"""Cart management — commands and handler.

Handles lazy cart creation and emptying a cart on request.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.domain import marketplace


@marketplace.command(part_of="ShoppingCart")
class OpenCart:
    """Return the user's cart, creating an empty one on first access."""

    user_id = Identifier(required=True)


@marketplace.command(part_of="ShoppingCart")
class ClearCart:
    user_id = Identifier(required=True)


@marketplace.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        cart = current_domain.repository_for(ShoppingCart).get_or_create(command.user_id)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id)
        cart.clear(reason="cleared")
        repo.add(cart)
