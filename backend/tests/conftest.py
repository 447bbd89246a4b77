import random

import pytest
from fastapi.testclient import TestClient

from storefront.adapters.mock_payment import MockPaymentAdapter
from storefront.api.routes_checkout import get_payment_adapter
from storefront.db import init_db
from storefront.main import app
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.discount_service import DiscountService


def approving_adapter():
    return MockPaymentAdapter(delay_ms=0, success_rate=1.0)


def declining_adapter():
    return MockPaymentAdapter(delay_ms=0, success_rate=0.0, rng=random.Random(7))


@pytest.fixture()
def store():
    # fresh carts/orders/discount per test, bundled catalogue
    return init_db(reset=True)


@pytest.fixture()
def carts(store):
    return CartService(store)


@pytest.fixture()
def discounts(store):
    return DiscountService(store, n=3)


@pytest.fixture()
def checkout(store, discounts):
    return CheckoutService(store, payment_adapter=approving_adapter(), discount_service=discounts)


@pytest.fixture()
def declining_checkout(store, discounts):
    return CheckoutService(store, payment_adapter=declining_adapter(), discount_service=discounts)


@pytest.fixture()
def client(store):
    app.dependency_overrides[get_payment_adapter] = approving_adapter
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
