"""Catalogue snapshot reader — the cart's and checkout's only view of products.

Returns immutable snapshots of a product's current price, name and
availability. Nothing in the ordering core holds on to a Product aggregate.
"""

from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.errors import NotFound


@dataclass(frozen=True)
class ProductSnapshot:
    product_id: str
    name: str
    price: float
    is_available: bool
    category: str | None = None
    vendor_id: str | None = None
    images: list[str] = field(default_factory=list)

    @classmethod
    def of(cls, product: Product) -> "ProductSnapshot":
        return cls(
            product_id=str(product.id),
            name=product.name,
            price=product.price,
            is_available=bool(product.is_available),
            category=product.category,
            vendor_id=str(product.vendor_id) if product.vendor_id else None,
            images=product.image_urls(),
        )


class CatalogueReader:
    def find(self, product_id) -> ProductSnapshot | None:
        try:
            product = current_domain.repository_for(Product).get(str(product_id))
        except ObjectNotFoundError:
            return None
        return ProductSnapshot.of(product)

    def snapshot(self, product_id) -> ProductSnapshot:
        """Like ``find``, but a missing product is an error."""
        found = self.find(product_id)
        if found is None:
            raise NotFound({"product_id": ["Product not found"]})
        return found

    def snapshots(self, product_ids) -> dict[str, ProductSnapshot | None]:
        return {str(pid): self.find(pid) for pid in product_ids}
