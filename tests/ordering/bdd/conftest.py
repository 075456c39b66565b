"""Shared BDD fixtures and step definitions for the Ordering domain."""

from collections import defaultdict

import pytest
from catalogue.product.product import Product
from ordering.cart.cart import Cart
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from shared.exceptions import CapacityExceededError, NotFoundError

_CART_ERRORS = {
    "validation": ValidationError,
    "capacity": CapacityExceededError,
    "not-found": NotFoundError,
}


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def products():
    """Products created by Given steps, by name, in creation order."""
    return defaultdict(list)


# ---------------------------------------------------------------------------
# Given steps — Catalogue
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:g} with {qty:d} in stock'))
def plain_product(products, name, price, qty):
    products[name].append(Product.create(name=name, price=price, quantity=qty))


@given(parsers.cfparse('a shippable product "{name}" priced {price:g} weighing {weight:g} kg with {qty:d} in stock'))
def shippable_product(products, name, price, weight, qty):
    products[name].append(Product.shippable(name=name, price=price, quantity=qty, weight=weight))


@given(parsers.cfparse('the stock of "{name}" drops to {qty:d}'))
def stock_drops(products, name, qty):
    products[name][0].quantity = qty


# ---------------------------------------------------------------------------
# Given steps — Shopping Cart
# ---------------------------------------------------------------------------
@given("an active cart", target_fixture="cart")
def active_cart():
    return Cart()


@given(parsers.cfparse('the cart has {qty:d} of "{name}"'), target_fixture="cart")
def cart_with_reservation(cart, products, name, qty):
    cart.add(products[name][0], qty)
    return cart


# ---------------------------------------------------------------------------
# Then steps — Catalogue
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the stock of "{name}" is {qty:d}'))
def stock_is(products, name, qty):
    assert products[name][0].quantity == qty


# ---------------------------------------------------------------------------
# Then steps — Cart
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart action fails with a {kind} error"))
def cart_action_fails(error, kind):
    assert isinstance(error["exc"], _CART_ERRORS[kind])
