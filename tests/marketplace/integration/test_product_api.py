"""Integration tests for Product API endpoints via TestClient."""


class TestProductEndpoints:
    def test_vendor_lists_product(self, client, headers):
        response = client.post(
            "/products",
            json={
                "name": "String Quartet",
                "description": "Classical music for receptions",
                "price": 800.0,
                "category": "Entertainment",
            },
            headers=headers.vendor(),
        )
        assert response.status_code == 201
        data = response.json()
        assert data["vendor_id"] == "vendor-001"
        assert data["is_available"] is True
        assert data["images"] == []

    def test_customer_cannot_list_product(self, client, headers):
        response = client.post(
            "/products",
            json={"name": "X", "description": "Y", "price": 1.0},
            headers=headers.user(),
        )
        assert response.status_code == 403

    def test_invalid_category(self, client, headers):
        response = client.post(
            "/products",
            json={"name": "X", "description": "Y", "price": 1.0, "category": "Fireworks"},
            headers=headers.vendor(),
        )
        assert response.status_code == 400

    def test_get_and_list_products_publicly(self, client, listed_product):
        product_id = listed_product(name="Cake", category="Catering")
        listed_product(name="Hall", category="Venue")

        assert client.get(f"/products/{product_id}").json()["name"] == "Cake"
        assert len(client.get("/products").json()) == 2
        assert [p["name"] for p in client.get("/products?category=Venue").json()] == ["Hall"]

    def test_unknown_product(self, client):
        assert client.get("/products/nope").status_code == 404

    def test_update_own_product(self, client, headers, listed_product):
        product_id = listed_product()
        response = client.put(f"/products/{product_id}", json={"price": 120.0}, headers=headers.vendor())
        assert response.status_code == 200
        assert response.json()["price"] == 120.0

    def test_update_other_vendors_product(self, client, headers, listed_product):
        product_id = listed_product(vendor_id="vendor-001")
        response = client.put(f"/products/{product_id}", json={"price": 1.0}, headers=headers.vendor("vendor-002"))
        assert response.status_code == 403

    def test_toggle_availability(self, client, headers, listed_product):
        product_id = listed_product()
        response = client.put(
            f"/products/{product_id}/availability", json={"is_available": False}, headers=headers.vendor()
        )
        assert response.status_code == 200
        assert response.json()["is_available"] is False
        assert client.get("/products?available=true").json() == []


class TestDeleteProductEndpoint:
    def test_vendor_deletes_own_product(self, client, headers, listed_product):
        product_id = listed_product()
        response = client.delete(f"/products/{product_id}", headers=headers.vendor())
        assert response.status_code == 200
        assert response.json()["id"] == product_id
        assert client.get(f"/products/{product_id}").status_code == 404

    def test_other_vendor_cannot_delete(self, client, headers, listed_product):
        product_id = listed_product(vendor_id="vendor-001")
        response = client.delete(f"/products/{product_id}", headers=headers.vendor("vendor-002"))
        assert response.status_code == 403
        assert client.get(f"/products/{product_id}").status_code == 200

    def test_customer_cannot_delete(self, client, headers, listed_product):
        product_id = listed_product()
        assert client.delete(f"/products/{product_id}", headers=headers.user()).status_code == 403

    def test_admin_deletes_any_product(self, client, headers, listed_product):
        product_id = listed_product(vendor_id="vendor-001")
        assert client.delete(f"/products/{product_id}", headers=headers.admin()).status_code == 200

    def test_delete_unknown_product(self, client, headers):
        response = client.delete("/products/nope", headers=headers.vendor())
        assert response.status_code == 404
        assert response.json()["code"] == "not_found"
