"""Shared fixtures for marketplace tests."""

import json

import pytest
from marketplace.catalogue.management import AddProduct, DeleteProduct, SetProductAvailability, UpdateProduct
from protean import current_domain

ADDRESS = {
    "street": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "zip_code": "560001",
    "country": "India",
}


@pytest.fixture()
def address():
    return dict(ADDRESS)


@pytest.fixture()
def add_product():
    """Factory: list a product and return its id."""

    def _add(name="Balloon Arch", price=100.0, vendor_id="vendor-001", category="Decoration", images=None):
        return current_domain.process(
            AddProduct(
                vendor_id=vendor_id,
                name=name,
                description=f"{name} for your event",
                price=price,
                category=category,
                images=json.dumps(images or []),
            ),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def reprice():
    def _reprice(product_id, price, vendor_id="vendor-001"):
        current_domain.process(
            UpdateProduct(product_id=product_id, caller_id=vendor_id, price=price),
            asynchronous=False,
        )

    return _reprice


@pytest.fixture()
def set_available():
    def _set(product_id, is_available, vendor_id="vendor-001"):
        current_domain.process(
            SetProductAvailability(product_id=product_id, caller_id=vendor_id, is_available=is_available),
            asynchronous=False,
        )

    return _set


@pytest.fixture()
def delete_product():
    def _delete(product_id, vendor_id="vendor-001"):
        current_domain.process(
            DeleteProduct(product_id=product_id, caller_id=vendor_id),
            asynchronous=False,
        )

    return _delete
