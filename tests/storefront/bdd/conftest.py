"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, process_cart_command
from storefront.checkout.checkout import place_order
from storefront.order.order import Order
from storefront.product.management import AddProduct
from storefront.product.product import Product

SHOPPER = "bdd-shopper"
ADDRESS = {"street": "12 MG Road", "city": "Bengaluru", "state": "Karnataka", "zip_code": "560001"}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    """Product ids by name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the placed order id and any captured error."""
    return {"order_id": None, "exc": None}


@pytest.fixture()
def checkout(outcome):
    """Check out the shopper's cart, recording the new order id."""

    def _checkout():
        outcome["order_id"] = place_order(SHOPPER, ADDRESS, "Cash on Delivery")

    return _checkout


@pytest.fixture()
def shopper_cart():
    return lambda: current_domain.repository_for(Cart).for_customer(SHOPPER)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:d} with {stock:d} in stock'))
def product_in_catalogue(catalogue, name, price, stock):
    command = AddProduct(name=name, price=float(price), category="Other", stock=stock)
    catalogue[name] = current_domain.process(command, asynchronous=False)


@given(parsers.cfparse('the shopper has {quantity:d} "{name}" in the cart'))
def shopper_has_in_cart(catalogue, name, quantity):
    command = AddToCart(customer_id=SHOPPER, product_id=catalogue[name], quantity=quantity)
    process_cart_command(command)


@given("the shopper has checked out")
def shopper_has_checked_out(checkout):
    checkout()


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_has_stock(catalogue, name, stock):
    assert current_domain.repository_for(Product).get(catalogue[name]).stock == stock


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(outcome, status):
    assert current_domain.repository_for(Order).get(outcome["order_id"]).status == status