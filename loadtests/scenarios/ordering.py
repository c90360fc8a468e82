"""Shopping load test scenarios.

Stateful SequentialTaskSet journeys for a shopper: filling and editing a
cart, checking out, and cancelling. Each journey lists its own products
first so it never depends on another user's data.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, checkout_data, product_data, unique_user_id
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class _ShopperJourney(SequentialTaskSet):
    def on_start(self):
        self.state = ShopperState(user_id=unique_user_id())
        self.headers = {"X-User-Id": self.state.user_id}
        vendor_headers = {"X-User-Id": unique_user_id("lt-vendor"), "X-User-Role": "vendor"}

        for _ in range(3):
            resp = self.client.post("/products", json=product_data(), headers=vendor_headers, name="POST /products")
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["id"])

    def add_item(self):
        if not self.state.product_ids:
            self.interrupt()
        with self.client.post(
            "/cart/items",
            json=cart_item_data(random.choice(self.state.product_ids)),
            headers=self.headers,
            catch_response=True,
            name="POST /cart/items",
        ) as resp:
            if resp.status_code == 200:
                self.state.cart_item_ids = [item["id"] for item in resp.json()["items"]]
            else:
                resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()


class CartEditingJourney(_ShopperJourney):
    """Add Items -> Update Quantity -> Remove Item -> Clear.

    Models a shopper who changes their mind and leaves without buying.
    Generates events: CartItemAdded (x3), CartItemQuantityUpdated,
    CartItemRemoved, CartCleared.
    """

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.headers, name="GET /cart")

    @task
    def add_items(self):
        for _ in range(3):
            self.add_item()

    @task
    def update_quantity(self):
        item_id = self.state.cart_item_ids[0]
        with self.client.put(
            f"/cart/items/{item_id}",
            json={"quantity": random.randint(1, 5)},
            headers=self.headers,
            catch_response=True,
            name="PUT /cart/items/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update quantity failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def remove_item(self):
        item_id = self.state.cart_item_ids[-1]
        with self.client.delete(
            f"/cart/items/{item_id}",
            headers=self.headers,
            catch_response=True,
            name="DELETE /cart/items/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def clear(self):
        with self.client.delete("/cart", headers=self.headers, catch_response=True, name="DELETE /cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"Clear cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CheckoutAndCancelJourney(_ShopperJourney):
    """Add Items -> Checkout -> View Orders -> Cancel.

    Generates events: CartItemAdded (x2), OrderPlaced, CartCleared,
    OrderCancelled.
    """

    @task
    def add_items(self):
        for _ in range(2):
            self.add_item()

    @task
    def checkout(self):
        with self.client.post(
            "/orders/checkout",
            json=checkout_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /orders/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_orders(self):
        self.client.get("/orders", headers=self.headers, name="GET /orders")

    @task
    def cancel(self):
        with self.client.put(
            f"/orders/{self.state.order_id}/cancel",
            headers=self.headers,
            catch_response=True,
            name="PUT /orders/{id}/cancel",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "cancelled"
            else:
                resp.failure(f"Cancel failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    tasks = {CartEditingJourney: 1, CheckoutAndCancelJourney: 2}
    wait_time = between(1, 3)
    weight = 3
