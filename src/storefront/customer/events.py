"""Domain events for the Customer aggregate."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Customer")
class CustomerRegistered:
    """A new shopper or administrator account was created."""

    __version__ = 1

    customer_id = Identifier(required=True)
    email = String(required=True)
    role = String(required=True)
