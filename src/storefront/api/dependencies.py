"""Request identity.

Authentication happens upstream. The gateway forwards the authenticated
customer's id in ``X-Customer-Id``, and these dependencies resolve it.
"""

from fastapi import Depends, Header, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.utils.logging import bind_request_context


async def current_customer(x_customer_id: str | None = Header(default=None)) -> Customer:
    if not x_customer_id:
        raise HTTPException(status_code=401, detail="Not authorized, no customer id")

    try:
        customer = current_domain.repository_for(Customer).get(x_customer_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=401, detail="Not authorized, unknown customer") from None

    bind_request_context(customer_id=str(customer.id))
    return customer


async def require_admin(customer: Customer = Depends(current_customer)) -> Customer:
    if not customer.is_admin:
        raise HTTPException(status_code=403, detail="Not authorized as an admin")
    return customer
