"""Catalogue management — vendor commands and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.errors import InvalidArgument, NotFound

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Product")
class AddProduct:
    vendor_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    description = String(required=True, max_length=1000)
    price = Float(required=True, min_value=0.0)
    category = String(max_length=50)
    images = Text()  # JSON array of image URLs


@marketplace.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    caller_id = Identifier(required=True)
    caller_is_admin = Boolean(default=False)
    name = String(max_length=100)
    description = String(max_length=1000)
    price = Float(min_value=0.0)
    category = String(max_length=50)
    images = Text()  # JSON array of image URLs


@marketplace.command(part_of="Product")
class SetProductAvailability:
    product_id = Identifier(required=True)
    caller_id = Identifier(required=True)
    caller_is_admin = Boolean(default=False)
    is_available = Boolean()


@marketplace.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)
    caller_id = Identifier(required=True)
    caller_is_admin = Boolean(default=False)


def load_product(product_id) -> Product:
    repo = current_domain.repository_for(Product)
    try:
        return repo.get(product_id)
    except ObjectNotFoundError:
        raise NotFound({"product_id": ["Product not found"]}) from None


@marketplace.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            vendor_id=command.vendor_id,
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            images=json.loads(command.images) if command.images else [],
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = load_product(command.product_id)
        product.assert_managed_by(command.caller_id, command.caller_is_admin)

        images = json.loads(command.images) if command.images else None
        if any(value is not None for value in (command.name, command.description, command.category, images)):
            product.update_details(
                name=command.name,
                description=command.description,
                category=command.category,
                images=images,
            )
        if command.price is not None:
            product.change_price(command.price)

        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(SetProductAvailability)
    def set_availability(self, command):
        if command.is_available is None:
            raise InvalidArgument({"is_available": ["Availability flag is required"]})

        product = load_product(command.product_id)
        product.assert_managed_by(command.caller_id, command.caller_is_admin)
        product.set_availability(command.is_available)

        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        """Remove a listing outright. Carts keep their lines until checkout rejects them."""
        product = load_product(command.product_id)
        product.assert_managed_by(command.caller_id, command.caller_is_admin)

        current_domain.repository_for(Product)._dao.delete(product)
        logger.info("product_deleted", product_id=str(product.id), deleted_by=str(command.caller_id))
        return str(product.id)
