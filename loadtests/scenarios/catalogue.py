"""Catalogue load test scenarios.

A vendor journey that lists services, reprices one and withdraws another,
plus an anonymous browser hitting the public listing endpoints.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import CATEGORIES, product_data, unique_user_id
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import VendorState


class VendorListingJourney(SequentialTaskSet):
    """List Product (x2) -> Reprice -> Withdraw.

    Generates events: ProductAdded (x2), ProductPriceChanged,
    ProductAvailabilityChanged.
    """

    def on_start(self):
        self.state = VendorState(vendor_id=unique_user_id("lt-vendor"))
        self.headers = {"X-User-Id": self.state.vendor_id, "X-User-Role": "vendor"}

    def _list_product(self):
        with self.client.post(
            "/products",
            json=product_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["id"])
            else:
                resp.failure(f"List product failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def list_product_1(self):
        self._list_product()

    @task
    def list_product_2(self):
        self._list_product()

    @task
    def reprice(self):
        product_id = self.state.product_ids[0]
        with self.client.put(
            f"/products/{product_id}",
            json={"price": round(random.uniform(50, 5000), 2)},
            headers=self.headers,
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Reprice failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def withdraw(self):
        product_id = self.state.product_ids[-1]
        with self.client.put(
            f"/products/{product_id}/availability",
            json={"is_available": False},
            headers=self.headers,
            catch_response=True,
            name="PUT /products/{id}/availability",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Withdraw failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class VendorUser(HttpUser):
    tasks = [VendorListingJourney]
    wait_time = between(1, 3)
    weight = 1


class BrowserUser(HttpUser):
    """Read-only traffic against the public catalogue."""

    wait_time = between(0.5, 2)
    weight = 3

    @task(3)
    def browse_available(self):
        self.client.get("/products?available=true", name="GET /products")

    @task(1)
    def browse_category(self):
        self.client.get(f"/products?category={random.choice(CATEGORIES)}", name="GET /products?category")
