"""Tests for the shared error taxonomy."""

import pytest
from protean.exceptions import ValidationError
from shared import exceptions
from shared.exceptions import (
    CapacityExceededError,
    CheckoutError,
    EmptyCartError,
    ExpiredProductError,
    InsufficientBalanceError,
    InsufficientStockError,
    InvalidInputError,
    NotFoundError,
    OutOfStockError,
    ShopStreamError,
)

ALL_ERRORS = [
    ShopStreamError,
    InvalidInputError,
    NotFoundError,
    CapacityExceededError,
    CheckoutError,
    EmptyCartError,
    InsufficientStockError,
    OutOfStockError,
    ExpiredProductError,
    InsufficientBalanceError,
]


@pytest.mark.parametrize("error_class", ALL_ERRORS)
def test_every_error_is_documented(error_class):
    assert error_class.__doc__
    assert error_class.__doc__ != ValidationError.__doc__


def test_module_exports_every_error():
    defined = {
        obj
        for obj in vars(exceptions).values()
        if isinstance(obj, type) and issubclass(obj, ShopStreamError)
    }
    assert defined == set(ALL_ERRORS)


@pytest.mark.parametrize("error_class", ALL_ERRORS)
def test_every_error_is_a_validation_error(error_class):
    exc = error_class({"field": ["message"]})
    assert isinstance(exc, ValidationError)
    assert exc.messages == {"field": ["message"]}


@pytest.mark.parametrize(
    "error_class",
    [EmptyCartError, InsufficientStockError, OutOfStockError, ExpiredProductError, InsufficientBalanceError],
)
def test_checkout_gate_errors_share_a_base(error_class):
    assert issubclass(error_class, CheckoutError)


def test_out_of_stock_is_a_kind_of_insufficient_stock():
    assert issubclass(OutOfStockError, InsufficientStockError)
