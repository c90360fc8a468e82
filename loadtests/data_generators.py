"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the marketplace's validation
rules and match the field names expected by the API's Pydantic request
schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")

CATEGORIES = ["Catering", "Decoration", "Photography", "Venue", "Entertainment", "Other"]
PAYMENT_METHODS = ["cod", "card", "upi"]


def unique_user_id(prefix="lt-user") -> str:
    """Generate caller ids like 'lt-user-a1b2c3d4'."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def product_data() -> dict:
    """Generate CreateProductRequest payload."""
    category = random.choice(CATEGORIES)
    return {
        "name": f"{fake.word().title()} {category}"[:100],
        "description": fake.sentence(nb_words=12)[:1000],
        "price": round(random.uniform(50, 5000), 2),
        "category": category,
        "images": [fake.image_url() for _ in range(random.randint(0, 3))],
    }


def cart_item_data(product_id: str) -> dict:
    """Generate AddToCartRequest payload."""
    return {"product_id": product_id, "quantity": random.randint(1, 4)}


def shipping_address() -> dict:
    return {
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "zip_code": fake.postcode()[:20],
        "country": "India",
    }


def checkout_data() -> dict:
    """Generate CheckoutRequest payload."""
    return {
        "shipping_address": shipping_address(),
        "payment_method": random.choice(PAYMENT_METHODS),
        "notes": fake.sentence(nb_words=6) if random.random() < 0.3 else None,
    }
