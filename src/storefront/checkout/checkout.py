"""Checkout: turn a customer's cart into an order.

The handler runs inside one unit of work, so the order, the stock deductions
and the emptied cart are committed together or not at all. ``place_order``
wraps it with the cart lock and the locks of every product in the cart.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.exceptions import EmptyCartError, ProductUnavailableError
from storefront.order.order import Order, PaymentMethod
from storefront.order.pricing import price_lines
from storefront.product.product import Product
from storefront.shared.locks import cart_key, locks, product_key

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    shipping_address = Text(required=True)  # JSON: street, city, state, zip_code
    payment_method = String(required=True, choices=PaymentMethod)


def _resolve_lines(cart):
    """Pair each cart line with its current product, rejecting anything unbuyable."""
    product_repo = current_domain.repository_for(Product)

    resolved = []
    for item in cart.items:
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError:
            raise ProductUnavailableError(str(item.product_id)) from None

        if not product.is_active or product.stock < item.quantity:
            raise ProductUnavailableError(product.name)
        resolved.append((item, product))
    return resolved


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_customer(command.customer_id)
        if cart is None or cart.is_empty:
            logger.info("checkout_rejected", customer_id=str(command.customer_id), reason="empty_cart")
            raise EmptyCartError()

        try:
            resolved = _resolve_lines(cart)
        except ProductUnavailableError as exc:
            logger.info(
                "checkout_rejected",
                customer_id=str(command.customer_id),
                reason="product_unavailable",
                product=exc.product_name,
            )
            raise

        lines = [
            {
                "product_id": str(product.id),
                "name": product.name,
                "quantity": item.quantity,
                "price": product.price,
            }
            for item, product in resolved
        ]
        pricing = price_lines((line["price"], line["quantity"]) for line in lines)

        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )
        order = Order.place(
            customer_id=command.customer_id,
            lines=lines,
            shipping_address=shipping_address,
            payment_method=command.payment_method,
            pricing=pricing,
        )

        product_repo = current_domain.repository_for(Product)
        for item, product in resolved:
            product.deduct_stock(item.quantity, order.id)
            product_repo.add(product)
            logger.debug(
                "stock_deducted",
                product_id=str(product.id),
                quantity=item.quantity,
                remaining_stock=product.stock,
            )

        cart.clear()
        cart_repo.add(cart)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            items=len(lines),
            total_price=pricing["total_price"],
        )
        return str(order.id)


def place_order(customer_id, shipping_address, payment_method):
    """Check out the customer's cart and return the new order id.

    The cart lock is taken first, then the locks of the products in the
    cart, so concurrent checkouts touching the same products are serialized.
    """
    with locks.hold(cart_key(customer_id)):
        cart = current_domain.repository_for(Cart).for_customer(customer_id)
        product_ids = [str(item.product_id) for item in cart.items] if cart is not None else []

        with locks.hold(*(product_key(product_id) for product_id in product_ids)):
            command = PlaceOrder(
                customer_id=customer_id,
                shipping_address=json.dumps(shipping_address),
                payment_method=payment_method,
            )
            return current_domain.process(command, asynchronous=False)
