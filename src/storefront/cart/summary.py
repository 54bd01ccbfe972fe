"""Read-side view of a cart with line items resolved to current product data."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.product.product import Product


def _product_card(product_id):
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None

    return {
        "id": str(product.id),
        "name": product.name,
        "price": product.price,
        "image": product.image,
        "stock": product.stock,
        "unit": product.unit,
        "is_active": product.is_active,
    }


def cart_summary(customer_id):
    """Resolve the customer's cart for display.

    ``subtotal`` is indicative only. Lines whose product has vanished are
    still listed, with ``product`` set to ``None``, and contribute nothing.
    """
    cart = current_domain.repository_for(Cart).for_customer(customer_id)
    if cart is None:
        raise ObjectNotFoundError({"_entity": "Cart not found"})

    items = []
    subtotal = 0.0
    for item in cart.items:
        product = _product_card(item.product_id)
        if product is not None:
            subtotal += product["price"] * item.quantity
        items.append(
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "added_at": item.added_at,
                "product": product,
            }
        )

    return {
        "id": str(cart.id),
        "customer_id": str(cart.customer_id),
        "items": items,
        "subtotal": round(subtotal, 2),
        "created_at": cart.created_at,
        "updated_at": cart.updated_at,
    }
