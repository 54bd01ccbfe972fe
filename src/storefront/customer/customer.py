"""Customer aggregate: the shopper (or administrator) behind a request."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.customer.events import CustomerRegistered
from storefront.domain import storefront


class CustomerRole(Enum):
    CUSTOMER = "Customer"
    ADMIN = "Admin"


@storefront.aggregate
class Customer:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    role = String(choices=CustomerRole, default=CustomerRole.CUSTOMER.value)
    created_at = DateTime()

    @invariant.post
    def email_must_look_like_an_address(self):
        email = self.email or ""
        local_part, _, domain_part = email.partition("@")
        if not local_part or "." not in domain_part or " " in email:
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def register(cls, name, email, role=CustomerRole.CUSTOMER.value):
        customer = cls(
            name=name,
            email=email.strip().lower(),
            role=role,
            created_at=datetime.now(UTC),
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                email=customer.email,
                role=customer.role,
            )
        )
        return customer

    @property
    def is_admin(self):
        return self.role == CustomerRole.ADMIN.value
