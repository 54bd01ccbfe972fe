"""Customer registration: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer, CustomerRole
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Customer")
class RegisterCustomer:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    role = String(choices=CustomerRole, default=CustomerRole.CUSTOMER.value)


@storefront.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        repo = current_domain.repository_for(Customer)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["Email already registered"]})

        customer = Customer.register(
            name=command.name,
            email=command.email,
            role=command.role or CustomerRole.CUSTOMER.value,
        )
        repo.add(customer)

        logger.info("customer_registered", customer_id=str(customer.id), role=customer.role)
        return str(customer.id)
