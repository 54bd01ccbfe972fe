"""Business-rule errors raised by storefront commands.

The stock and cart errors are ``ValidationError`` subclasses so that they
carry the usual ``messages`` mapping and surface as 400 responses.
"""

from protean.exceptions import ValidationError


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds what the product currently has in stock."""

    def __init__(self, product_name, available, requested):
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            {"quantity": [f"Insufficient stock for {product_name}: {available} available, {requested} requested"]}
        )


class ProductUnavailableError(ValidationError):
    """A cart line can no longer be bought: product inactive, missing or short on stock."""

    def __init__(self, product_name):
        self.product_name = product_name
        super().__init__({"items": [f"Product {product_name} is not available or out of stock"]})


class EmptyCartError(ValidationError):
    """Checkout was attempted on a cart with no line items."""

    def __init__(self):
        super().__init__({"cart": ["Cart is empty"]})


class ForbiddenError(Exception):
    """The requester may not access the resource."""

    def __init__(self, message="Not authorized to access this resource"):
        self.message = message
        super().__init__(message)
