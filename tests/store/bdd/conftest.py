"""Shared BDD fixtures and step definitions for the Store domain."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from store.cart.items import add_to_cart
from store.catalogue.registration import RegisterProduct, RegisterShopper
from store.ledger.purchase import Purchase


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    """Product ids by name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the checkout result or the error it raised."""
    return {"purchase": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue lists "{name}" at "{price}"'))
def catalogue_lists(name, price, catalogue):
    catalogue[name] = current_domain.process(RegisterProduct(name=name, price=price), asynchronous=False)


@given("a registered shopper", target_fixture="shopper_id")
def registered_shopper():
    return current_domain.process(
        RegisterShopper(name="Gabrielle", payment_method="credit_ending_0422"),
        asynchronous=False,
    )


@given(parsers.cfparse('the cart holds {quantity:d} "{name}"'))
def cart_holds(quantity, name, shopper_id, catalogue):
    add_to_cart(shopper_id, catalogue[name], quantity=quantity)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("no purchase is recorded")
def no_purchase_recorded():
    assert current_domain.repository_for(Purchase)._dao.query.all().items == []
