"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's Pydantic request
schemas. Prices are decimal strings with at most two fractional digits.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def shopper_data() -> dict:
    """Generate RegisterShopperRequest payload."""
    return {
        "name": fake.first_name()[:255],
        "payment_method": f"credit_ending_{random.randint(0, 9999):04d}",
    }


def unique_product_name() -> str:
    """Product names are unique in the catalogue, so suffix a short uuid."""
    return f"{fake.word().capitalize()} {fake.color_name()} {uuid.uuid4().hex[:6]}"


def price() -> str:
    """A price between 1.00 and 1500.00 with exactly two decimal places."""
    cents = random.randint(100, 150000)
    return f"{cents // 100}.{cents % 100:02d}"


def product_data() -> dict:
    """Generate RegisterProductRequest payload."""
    return {"name": unique_product_name(), "price": price()}


def cart_item_data(product_id: str, quantity: int | None = None) -> dict:
    """Generate AddToCartRequest payload."""
    return {"product_id": product_id, "quantity": quantity or random.randint(1, 3)}
