from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shared.paging import fetch_all


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id):
        """The customer's orders, newest first."""
        return fetch_all(self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at"))

    def newest_first(self):
        return fetch_all(self._dao.query.order_by("-created_at"))
