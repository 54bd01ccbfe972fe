import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.cart.items import AddToCart, process_cart_command
from storefront.checkout.checkout import place_order
from storefront.order.order import Order
from storefront.order.status import ChangeOrderStatus, MarkOrderPaid

ADDRESS = {"street": "4 Park Street", "city": "Kolkata", "state": "West Bengal", "zip_code": "700016"}


@pytest.fixture()
def order_id(make_product):
    product_id = make_product(stock=10)
    process_cart_command(AddToCart(customer_id="customer-1", product_id=product_id, quantity=1))
    return place_order("customer-1", ADDRESS, "UPI")


def _change(order_id, status):
    current_domain.process(ChangeOrderStatus(order_id=order_id, status=status), asynchronous=False)


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestChangeOrderStatus:
    def test_walk_to_delivered(self, order_id):
        for status in ("Processing", "Shipped", "Delivered"):
            _change(order_id, status)

        order = _order(order_id)
        assert order.status == "Delivered"
        assert order.is_delivered is True
        assert order.delivered_at is not None

    def test_invalid_transition(self, order_id):
        with pytest.raises(ValidationError):
            _change(order_id, "Delivered")
        assert _order(order_id).status == "Placed"

    def test_unknown_status_rejected_by_command(self, order_id):
        with pytest.raises(ValidationError):
            ChangeOrderStatus(order_id=order_id, status="Teleported")

    def test_missing_order(self):
        with pytest.raises(ObjectNotFoundError):
            _change("missing", "Processing")


class TestMarkOrderPaid:
    def test_mark_paid(self, order_id):
        current_domain.process(MarkOrderPaid(order_id=order_id), asynchronous=False)

        order = _order(order_id)
        assert order.is_paid is True
        assert order.paid_at is not None

    def test_cancelled_order_cannot_be_paid(self, order_id):
        _change(order_id, "Cancelled")
        with pytest.raises(ValidationError):
            current_domain.process(MarkOrderPaid(order_id=order_id), asynchronous=False)


class TestOrderQueries:
    def test_orders_listed_newest_first(self, make_product):
        product_id = make_product(stock=10)
        placed = []
        for _ in range(3):
            process_cart_command(AddToCart(customer_id="customer-1", product_id=product_id, quantity=1))
            placed.append(place_order("customer-1", ADDRESS, "UPI"))

        listed = [str(order.id) for order in current_domain.repository_for(Order).for_customer("customer-1")]
        assert listed == list(reversed(placed))

    def test_customer_sees_only_own_orders(self, make_product):
        product_id = make_product(stock=10)
        for customer_id in ("customer-1", "customer-2"):
            process_cart_command(AddToCart(customer_id=customer_id, product_id=product_id, quantity=1))
            place_order(customer_id, ADDRESS, "UPI")

        repo = current_domain.repository_for(Order)
        assert [order.customer_id for order in repo.for_customer("customer-2")] == ["customer-2"]
        assert len(repo.newest_first()) == 2


class TestLargeOrderHistory:
    """Order lists span more than one provider page (100 rows)."""

    @pytest.fixture()
    def history(self):
        repo = current_domain.repository_for(Order)
        for customer_id in ["customer-1"] * 102 + ["customer-2"] * 3:
            repo.add(
                Order.place(
                    customer_id=customer_id,
                    lines=[{"product_id": "p-1", "name": "Rice", "quantity": 1, "price": 120.0}],
                    shipping_address=ADDRESS,
                    payment_method="UPI",
                    pricing={"items_price": 120.0, "shipping_price": 50.0, "total_price": 170.0},
                )
            )
        return repo

    def test_customer_sees_every_order(self, history):
        orders = history.for_customer("customer-1")
        assert len(orders) == 102
        assert len({str(order.id) for order in orders}) == 102

    def test_admin_listing_has_every_order(self, history):
        orders = history.newest_first()
        assert len(orders) == 105
        assert all(a.created_at >= b.created_at for a, b in zip(orders, orders[1:]))
