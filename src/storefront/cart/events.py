"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)  # Line quantity after the add


@storefront.event(part_of="Cart")
class CartItemQuantityChanged:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """All line items were removed, either by the shopper or by checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
