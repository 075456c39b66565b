import os
from datetime import date, timedelta
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize the domains and push the ordering domain_context, so that
    aggregates can generate their identities through `current_domain`.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    catalogue.init()
    identity.init()
    ordering.init()
    ordering.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------
@pytest.fixture()
def today():
    return date.today()


@pytest.fixture()
def next_month(today):
    return today + timedelta(days=30)


@pytest.fixture()
def last_week(today):
    return today - timedelta(days=7)


# ---------------------------------------------------------------------------
# Products, one per capability variant
# ---------------------------------------------------------------------------
@pytest.fixture()
def scratch_card():
    from catalogue.product.product import Product

    return Product.create(name="Scratch Card", price=1.0, quantity=100)


@pytest.fixture()
def mobile():
    from catalogue.product.product import Product

    return Product.shippable(name="Mobile Phone", price=200.0, quantity=2, weight=0.3)


@pytest.fixture()
def biscuits(next_month):
    from catalogue.product.product import Product

    return Product.expirable(name="Biscuits", price=3.0, quantity=20, expiration_date=next_month)


@pytest.fixture()
def cheese(next_month):
    from catalogue.product.product import Product

    return Product.expirable_shippable(
        name="Cheese", price=5.0, quantity=10, expiration_date=next_month, weight=1.0
    )


# ---------------------------------------------------------------------------
# Customer
# ---------------------------------------------------------------------------
@pytest.fixture()
def alice():
    from identity.customer.customer import Customer

    return Customer.register(
        name="Alice",
        email="alice@example.com",
        phone="01000000000",
        balance=1000.0,
    )
