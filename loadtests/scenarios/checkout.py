"""Checkout load test scenarios.

Three stateful SequentialTaskSet journeys:

1. CheckoutJourney: Register -> Browse -> Add Items -> Checkout -> History
2. EmptyCartJourney: Checkout with nothing in the cart, expecting EMPTY_CART
3. DoubleSubmitJourney: Fire two checkouts at the same cart back to back;
   exactly one may produce a purchase
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, product_data, shopper_data
from loadtests.helpers.response import error_kind, extract_error_detail
from loadtests.helpers.state import CatalogueState, CheckoutState


def _register_shopper(client, state, label):
    with client.post(
        "/shoppers",
        json=shopper_data(),
        catch_response=True,
        name=f"{label} POST /shoppers",
    ) as resp:
        if resp.status_code == 201:
            state.shopper_id = resp.json()["shopper_id"]
            return True
        resp.failure(f"Register shopper failed: {resp.status_code} — {extract_error_detail(resp)}")
        return False


def _stock_catalogue(client, catalogue, count=3):
    for _ in range(count):
        payload = product_data()
        resp = client.post("/products", json=payload, name="[SETUP] POST /products")
        if resp.status_code == 201:
            catalogue.prices[resp.json()["product_id"]] = payload["price"]


class CheckoutJourney(SequentialTaskSet):
    """The happy path: a shopper fills a cart and checks out once."""

    def on_start(self):
        self.state = CheckoutState()
        self.catalogue = CatalogueState()
        _stock_catalogue(self.client, self.catalogue)

    @task
    def register(self):
        if not _register_shopper(self.client, self.state, "[CHECKOUT]"):
            self.interrupt()

    @task
    def browse(self):
        with self.client.get("/products", catch_response=True, name="[CHECKOUT] GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code}")

    @task
    def add_items(self):
        for product_id in random.sample(list(self.catalogue.prices), k=min(2, len(self.catalogue.prices))):
            with self.client.post(
                f"/shoppers/{self.state.shopper_id}/cart/items",
                json=cart_item_data(product_id),
                catch_response=True,
                name="[CHECKOUT] POST /shoppers/{id}/cart/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_item_count += 1
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.post(
            f"/shoppers/{self.state.shopper_id}/checkout",
            catch_response=True,
            name="[CHECKOUT] POST /shoppers/{id}/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.purchase_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def review_history(self):
        with self.client.get(
            f"/shoppers/{self.state.shopper_id}/purchases",
            catch_response=True,
            name="[CHECKOUT] GET /shoppers/{id}/purchases",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Purchase history failed: {resp.status_code}")
            elif len(resp.json()) != len(self.state.purchase_ids):
                resp.failure(f"Expected {len(self.state.purchase_ids)} purchases, got {len(resp.json())}")

    @task
    def done(self):
        self.interrupt()


class EmptyCartJourney(SequentialTaskSet):
    """Checkout without adding anything; the API must answer EMPTY_CART."""

    def on_start(self):
        self.state = CheckoutState()

    @task
    def register(self):
        if not _register_shopper(self.client, self.state, "[EMPTY]"):
            self.interrupt()

    @task
    def checkout_empty_cart(self):
        with self.client.post(
            f"/shoppers/{self.state.shopper_id}/checkout",
            catch_response=True,
            name="[EMPTY] POST /shoppers/{id}/checkout",
        ) as resp:
            if resp.status_code == 400 and error_kind(resp) == "EMPTY_CART":
                self.state.empty_cart_rejections += 1
                resp.success()
            else:
                resp.failure(f"Expected EMPTY_CART, got {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class DoubleSubmitJourney(SequentialTaskSet):
    """Two checkouts of one cart: one purchase, one EMPTY_CART."""

    def on_start(self):
        self.state = CheckoutState()
        self.catalogue = CatalogueState()
        _stock_catalogue(self.client, self.catalogue, count=1)

    @task
    def register_and_fill(self):
        if not _register_shopper(self.client, self.state, "[RACE-CHECKOUT]") or not self.catalogue.prices:
            self.interrupt()
        product_id = next(iter(self.catalogue.prices))
        self.client.post(
            f"/shoppers/{self.state.shopper_id}/cart/items",
            json=cart_item_data(product_id, quantity=1),
            name="[RACE-CHECKOUT] POST /shoppers/{id}/cart/items",
        )

    @task
    def double_submit(self):
        statuses = []
        for attempt in ("first", "second"):
            with self.client.post(
                f"/shoppers/{self.state.shopper_id}/checkout",
                catch_response=True,
                name=f"[RACE-CHECKOUT] POST /shoppers/{{id}}/checkout ({attempt})",
            ) as resp:
                statuses.append(resp.status_code)
                if resp.status_code in (201, 400):
                    resp.success()
                else:
                    resp.failure(f"Checkout race: {resp.status_code} — {extract_error_detail(resp)}")

        if statuses.count(201) != 1:
            self.user.environment.events.request.fire(
                request_type="CHECK",
                name="[RACE-CHECKOUT] exactly one purchase",
                response_time=0,
                response_length=0,
                response=None,
                context={},
                exception=AssertionError(f"Expected exactly one 201, got {statuses}"),
            )

    @task
    def done(self):
        self.interrupt()


class CheckoutUser(HttpUser):
    """Locust user simulating shoppers checking out.

    Weighted distribution:
    - 70% Happy path checkout
    - 30% Empty cart rejection
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        CheckoutJourney: 7,
        EmptyCartJourney: 3,
    }


class CartContentionUser(HttpUser):
    """Locust user repeatedly submitting the same cart twice."""

    wait_time = between(0.1, 0.5)
    tasks = [DoubleSubmitJourney]
