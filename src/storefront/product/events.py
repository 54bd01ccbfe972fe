"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was listed in the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    category = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    unit = String(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive fields or the price of a product changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    changed_fields = String(required=True)  # Comma-separated field names
    price = Float(required=True)


@storefront.event(part_of="Product")
class ProductDeactivated:
    __version__ = 1

    product_id = Identifier(required=True)


@storefront.event(part_of="Product")
class ProductActivated:
    __version__ = 1

    product_id = Identifier(required=True)


@storefront.event(part_of="Product")
class StockAdjusted:
    """An administrator overwrote the stock count."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)


@storefront.event(part_of="Product")
class StockDeducted:
    """Units left the shelf because an order was placed."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining_stock = Integer(required=True)
