"""Storefront bounded context: catalogue, customers, carts and orders.

Everything the checkout touches lives in this one domain so that a single
unit of work can cover the cart, the stock deduction and the new order.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
