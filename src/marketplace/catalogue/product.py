"""Product aggregate — a vendor's listed service or good.

The ordering core treats products as read-only: carts and checkout read the
current price, name and availability through the catalogue reader, while
only the owning vendor (or an administrator) changes them.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from marketplace.catalogue.events import (
    ProductAdded,
    ProductAvailabilityChanged,
    ProductDetailsUpdated,
    ProductPriceChanged,
)
from marketplace.domain import marketplace
from marketplace.errors import Forbidden


LISTING_LIMIT = 1000


class ProductCategory(Enum):
    CATERING = "Catering"
    DECORATION = "Decoration"
    PHOTOGRAPHY = "Photography"
    VENUE = "Venue"
    ENTERTAINMENT = "Entertainment"
    OTHER = "Other"


@marketplace.aggregate
class Product:
    name = String(required=True, max_length=100)
    description = String(required=True, max_length=1000)
    price = Float(required=True, min_value=0.0)
    category = String(choices=ProductCategory, default=ProductCategory.OTHER.value)
    images = Text()  # JSON array of image URLs
    vendor_id = Identifier(required=True)
    is_available = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, vendor_id, name, description, price, category=None, images=None):
        now = datetime.now(UTC)
        product = cls(
            vendor_id=vendor_id,
            name=name.strip() if name else name,
            description=description.strip() if description else description,
            price=price,
            category=category or ProductCategory.OTHER.value,
            images=json.dumps(list(images or [])),
            is_available=True,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                vendor_id=str(vendor_id),
                name=product.name,
                price=product.price,
                category=product.category,
            )
        )
        return product

    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    def assert_managed_by(self, caller_id, is_admin=False):
        """Only the listing vendor or an administrator may change a product."""
        if is_admin or str(self.vendor_id) == str(caller_id):
            return
        raise Forbidden({"product_id": ["Not authorized to manage this product"]})

    def update_details(self, name=None, description=None, category=None, images=None):
        if name is not None:
            if not name.strip():
                raise ValidationError({"name": ["Product name cannot be empty"]})
            self.name = name.strip()
        if description is not None:
            self.description = description.strip()
        if category is not None:
            self.category = category
        if images is not None:
            self.images = json.dumps(list(images))
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                category=self.category,
            )
        )

    def change_price(self, new_price):
        if new_price < 0:
            raise ValidationError({"price": ["Price must be a positive number"]})
        if new_price == self.price:
            return

        previous_price = self.price
        self.price = new_price
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=previous_price,
                new_price=new_price,
            )
        )

    def set_availability(self, is_available):
        if bool(is_available) == bool(self.is_available):
            return

        self.is_available = bool(is_available)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductAvailabilityChanged(
                product_id=str(self.id),
                is_available=self.is_available,
            )
        )


@marketplace.repository(part_of=Product)
class ProductRepository:
    def listing(self, category=None, vendor_id=None, available_only=False) -> list[Product]:
        """Products matching simple equality filters, newest first."""
        criteria = {}
        if category:
            criteria["category"] = category
        if vendor_id:
            criteria["vendor_id"] = str(vendor_id)
        if available_only:
            criteria["is_available"] = True

        query = self._dao.query
        if criteria:
            query = query.filter(**criteria)
        return query.order_by("-created_at").limit(LISTING_LIMIT).all().items

    def count(self) -> int:
        return self._dao.query.all().total
