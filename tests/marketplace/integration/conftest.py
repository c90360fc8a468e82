import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from marketplace.api import admin_router, cart_router, order_router, product_router, register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(admin_router)
    app.include_router(product_router)
    register_error_handlers(app)
    return TestClient(app)


class Headers:
    """Caller identity headers as set by the upstream auth layer."""

    @staticmethod
    def user(user_id="user-001"):
        return {"X-User-Id": user_id}

    @staticmethod
    def vendor(vendor_id="vendor-001"):
        return {"X-User-Id": vendor_id, "X-User-Role": "vendor"}

    @staticmethod
    def admin(admin_id="admin-001"):
        return {"X-User-Id": admin_id, "X-User-Role": "admin"}


@pytest.fixture()
def headers():
    return Headers


@pytest.fixture()
def listed_product(client):
    """Factory: list a product over HTTP and return its id."""

    def _list(name="Balloon Arch", price=100.0, vendor_id="vendor-001", category="Decoration"):
        response = client.post(
            "/products",
            json={
                "name": name,
                "description": f"{name} for your event",
                "price": price,
                "category": category,
                "images": ["https://img.example.com/item.jpg"],
            },
            headers=Headers.vendor(vendor_id),
        )
        assert response.status_code == 201
        return response.json()["id"]

    return _list
