"""Domain events for the Product aggregate."""

from protean.fields import Boolean, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductAdded:
    """A vendor listed a new product."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    price = Float(required=True)
    category = String(max_length=50)


@marketplace.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(max_length=100)
    category = String(max_length=50)


@marketplace.event(part_of="Product")
class ProductPriceChanged:
    """The product's list price changed. Carts pick it up on the next add; checkout always reads it."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)


@marketplace.event(part_of="Product")
class ProductAvailabilityChanged:
    __version__ = "v1"

    product_id = Identifier(required=True)
    is_available = Boolean(required=True)
