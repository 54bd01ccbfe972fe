"""Cart commands and handler.

Every cart write runs under the customer's cart lock so that lazy creation
and line-item edits cannot interleave with each other or with checkout.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.locks import cart_key, locks

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class OpenCart:
    customer_id: Identifier(required=True)


@storefront.command(part_of="Cart")
class AddToCart:
    customer_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    customer_id: Identifier(required=True)
    item_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    customer_id: Identifier(required=True)
    item_id: Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    customer_id: Identifier(required=True)


def process_cart_command(command):
    """Process a cart command while holding the owner's cart lock."""
    with locks.hold(cart_key(command.customer_id)):
        return current_domain.process(command, asynchronous=False)


def _existing_cart(customer_id):
    cart = current_domain.repository_for(Cart).for_customer(customer_id)
    if cart is None:
        raise ObjectNotFoundError({"_entity": "Cart not found"})
    return cart


def _purchasable_product(product_id):
    product = current_domain.repository_for(Product).get(product_id)
    if not product.is_active:
        raise ObjectNotFoundError({"_entity": "Product not found"})
    return product


@storefront.command_handler(part_of=Cart)
class CartItemsHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            cart = Cart.open(command.customer_id)
            repo.add(cart)
            logger.debug("cart_opened", customer_id=str(command.customer_id), cart_id=str(cart.id))
        return str(cart.id)

    @handle(AddToCart)
    def add_to_cart(self, command):
        product = _purchasable_product(command.product_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(command.customer_id) or Cart.open(command.customer_id)
        item = cart.add_item(product, command.quantity)
        repo.add(cart)

        logger.info(
            "cart_item_added",
            customer_id=str(command.customer_id),
            product_id=str(product.id),
            quantity=item.quantity,
        )
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        cart = _existing_cart(command.customer_id)
        item = cart.line(command.item_id)
        if item is None:
            raise ObjectNotFoundError({"_entity": f"Item {command.item_id} not found in cart"})

        product = current_domain.repository_for(Product).get(item.product_id)
        cart.update_item_quantity(command.item_id, command.quantity, product)
        current_domain.repository_for(Cart).add(cart)

        logger.info("cart_item_updated", customer_id=str(command.customer_id), quantity=command.quantity)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = _existing_cart(command.customer_id)
        cart.remove_item(command.item_id)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = _existing_cart(command.customer_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)

        logger.info("cart_cleared", customer_id=str(command.customer_id))
        return str(cart.id)
