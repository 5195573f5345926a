"""Application tests for shopper and product registration handlers."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from store.catalogue.product import Product
from store.catalogue.registration import ChangeProductPrice, RegisterProduct, RegisterShopper
from store.catalogue.shopper import Shopper, require_shopper
from store.checkout.errors import ShopperNotFoundError
from store.shared.money import Money


def _register_product(**overrides):
    defaults = {"name": "Silk Shirt", "price": "799.90"}
    defaults.update(overrides)
    return current_domain.process(RegisterProduct(**defaults), asynchronous=False)


class TestRegisterShopper:
    def test_register_shopper(self):
        shopper_id = current_domain.process(
            RegisterShopper(name="Gabrielle", payment_method="credit_ending_0422"),
            asynchronous=False,
        )
        shopper = current_domain.repository_for(Shopper).get(shopper_id)
        assert shopper.name == "Gabrielle"
        assert shopper.payment_method == "credit_ending_0422"

    def test_require_shopper_returns_known_shopper(self):
        shopper_id = current_domain.process(RegisterShopper(name="Luis"), asynchronous=False)
        assert str(require_shopper(shopper_id).id) == shopper_id

    def test_require_shopper_raises_for_unknown_id(self):
        with pytest.raises(ShopperNotFoundError) as exc_info:
            require_shopper("no-such-shopper")
        assert exc_info.value.http_status == 404

    def test_listing_is_ordered_by_name(self):
        for name in ["Pedro", "Liliana", "Moisés"]:
            current_domain.process(RegisterShopper(name=name), asynchronous=False)
        names = [s.name for s in current_domain.repository_for(Shopper).listing()]
        assert names == ["Liliana", "Moisés", "Pedro"]


class TestRegisterProduct:
    def test_register_product(self):
        product_id = _register_product()
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Silk Shirt"
        assert product.price == Money.parse("799.90")

    def test_invalid_price_is_rejected(self):
        with pytest.raises(ValidationError):
            _register_product(price="7.999")

    def test_duplicate_name_is_rejected(self):
        _register_product()
        with pytest.raises(ValidationError):
            _register_product(price="10.00")


class TestChangeProductPrice:
    def test_change_price(self):
        product_id = _register_product()
        current_domain.process(
            ChangeProductPrice(product_id=product_id, new_price="899.90"),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.price == Money.parse("899.90")


class TestProductCatalogLookup:
    def test_lookup_returns_known_products(self):
        silk = _register_product()
        jeans = _register_product(name="Jeans", price="499.90")
        found = current_domain.repository_for(Product).lookup([silk, jeans, "missing"])
        assert set(found) == {silk, jeans}
        assert found[jeans].name == "Jeans"

    def test_lookup_of_nothing(self):
        assert current_domain.repository_for(Product).lookup([]) == {}
