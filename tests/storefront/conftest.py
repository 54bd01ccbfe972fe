import pytest


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Push domain context before each test, cleanup after."""
    from storefront.domain import storefront

    ctx = storefront.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    """Persist a product through the AddProduct command and return its id."""
    from protean.utils.globals import current_domain
    from storefront.product.management import AddProduct

    def _make(**overrides):
        defaults = {
            "name": "Tomatoes",
            "description": "Fresh red tomatoes",
            "price": 80.0,
            "category": "Fruits & Vegetables",
            "stock": 40,
            "unit": "kg",
        }
        defaults.update(overrides)
        return current_domain.process(AddProduct(**defaults), asynchronous=False)

    return _make


@pytest.fixture()
def make_customer():
    """Register a customer and return their id."""
    from protean.utils.globals import current_domain
    from storefront.customer.registration import RegisterCustomer

    counter = {"n": 0}

    def _make(name="Asha", email=None, role="Customer"):
        counter["n"] += 1
        email = email or f"shopper{counter['n']}@example.com"
        return current_domain.process(RegisterCustomer(name=name, email=email, role=role), asynchronous=False)

    return _make
