"""Application tests for the checkout transaction."""

import threading

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, OpenCart, process_cart_command
from storefront.checkout.checkout import place_order
from storefront.domain import storefront
from storefront.exceptions import EmptyCartError, ProductUnavailableError
from storefront.order.order import Order
from storefront.product.management import DeactivateProduct, UpdateProduct, process_product_command
from storefront.product.product import Product

CUSTOMER = "customer-1"
ADDRESS = {"street": "12 MG Road", "city": "Bengaluru", "state": "Karnataka", "zip_code": "560001"}


def _add(product_id, quantity=1, customer_id=CUSTOMER):
    process_cart_command(AddToCart(customer_id=customer_id, product_id=product_id, quantity=quantity))


def _checkout(customer_id=CUSTOMER, payment_method="Cash on Delivery", address=None):
    return place_order(customer_id, address or ADDRESS, payment_method)


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


def _orders():
    return current_domain.repository_for(Order).newest_first()


class TestSuccessfulCheckout:
    def test_order_snapshot(self, make_product):
        rice = make_product(name="Rice", price=120.0, stock=75, category="Pantry")
        milk = make_product(name="Milk", price=60.0, stock=100, category="Dairy & Eggs", unit="l")
        _add(rice, 2)
        _add(milk, 3)

        order_id = _checkout()

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "Placed"
        assert order.is_paid is False
        assert order.is_delivered is False
        assert order.customer_id == CUSTOMER
        assert sorted((item.name, item.quantity, item.price) for item in order.items) == [
            ("Milk", 3, 60.0),
            ("Rice", 2, 120.0),
        ]
        assert order.pricing.items_price == 420.0
        assert order.pricing.shipping_price == 50.0
        assert order.pricing.total_price == 470.0
        assert order.shipping_address.city == "Bengaluru"
        assert order.payment_method == "Cash on Delivery"

    def test_stock_deducted_and_cart_emptied(self, make_product):
        rice = make_product(name="Rice", stock=10)
        milk = make_product(name="Milk", stock=5)
        _add(rice, 4)
        _add(milk, 5)

        _checkout()

        assert _stock(rice) == 6
        assert _stock(milk) == 0
        cart = current_domain.repository_for(Cart).for_customer(CUSTOMER)
        assert cart is not None
        assert cart.is_empty

    def test_free_shipping_strictly_above_threshold(self, make_product):
        product_id = make_product(price=250.0, stock=10)
        _add(product_id, 2)

        order = current_domain.repository_for(Order).get(_checkout())
        assert order.pricing.items_price == 500.0
        assert order.pricing.shipping_price == 50.0

    def test_free_shipping(self, make_product):
        product_id = make_product(price=300.0, stock=10)
        _add(product_id, 2)

        order = current_domain.repository_for(Order).get(_checkout())
        assert order.pricing.shipping_price == 0.0
        assert order.pricing.total_price == 600.0

    def test_checkout_uses_current_prices(self, make_product):
        product_id = make_product(price=100.0, stock=10)
        _add(product_id, 2)
        process_product_command(UpdateProduct(product_id=product_id, price=130.0))

        order = current_domain.repository_for(Order).get(_checkout())
        assert order.items[0].price == 130.0
        assert order.pricing.items_price == 260.0


class TestRejectedCheckout:
    def test_no_cart(self):
        with pytest.raises(EmptyCartError):
            _checkout()
        assert _orders() == []

    def test_empty_cart(self):
        process_cart_command(OpenCart(customer_id=CUSTOMER))
        with pytest.raises(EmptyCartError) as exc:
            _checkout()
        assert exc.value.messages == {"cart": ["Cart is empty"]}
        assert _orders() == []

    def test_one_short_line_rejects_everything(self, make_product):
        apples = make_product(name="Apples", stock=2)
        bread = make_product(name="Bread", stock=5, category="Bakery")
        _add(apples, 2)
        _add(bread, 1)
        # Someone else bought apples after they were carted
        process_product_command(UpdateProduct(product_id=apples, stock=1))

        with pytest.raises(ProductUnavailableError) as exc:
            _checkout()

        assert "Product Apples is not available or out of stock" in exc.value.messages["items"]
        assert _stock(apples) == 1
        assert _stock(bread) == 5
        assert _orders() == []
        assert len(current_domain.repository_for(Cart).for_customer(CUSTOMER).items) == 2

    def test_inactive_product_rejects_checkout(self, make_product):
        product_id = make_product(name="Fish", stock=5)
        _add(product_id, 1)
        process_product_command(DeactivateProduct(product_id=product_id))

        with pytest.raises(ProductUnavailableError):
            _checkout()
        assert _stock(product_id) == 5

    def test_incomplete_address_rejected(self, make_product):
        product_id = make_product(stock=5)
        _add(product_id, 1)

        with pytest.raises(ValidationError):
            _checkout(address={"street": "12 MG Road", "city": "Bengaluru", "state": "Karnataka"})
        assert _stock(product_id) == 5
        assert _orders() == []

    def test_unknown_payment_method_rejected(self, make_product):
        product_id = make_product(stock=5)
        _add(product_id, 1)

        with pytest.raises(ValidationError):
            _checkout(payment_method="Barter")
        assert _stock(product_id) == 5


class TestConcurrentCheckout:
    def test_last_unit_is_sold_once(self, make_product):
        product_id = make_product(name="Fish", stock=1)
        customers = ["customer-a", "customer-b", "customer-c"]
        for customer_id in customers:
            _add(product_id, 1, customer_id=customer_id)

        outcomes = []

        def shopper(customer_id):
            with storefront.domain_context():
                try:
                    _checkout(customer_id=customer_id)
                    outcomes.append("ok")
                except ProductUnavailableError:
                    outcomes.append("rejected")

        threads = [threading.Thread(target=shopper, args=(c,)) for c in customers]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(outcomes) == ["ok", "rejected", "rejected"]
        assert _stock(product_id) == 0
        assert len(_orders()) == 1
