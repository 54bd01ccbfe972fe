from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_customer(self, customer_id):
        """The customer's cart, or ``None`` when none has been opened yet."""
        record = self._dao.query.filter(customer_id=str(customer_id)).all().first
        if record is None:
            return None
        # Reload through the repository so the cart joins the current unit of work
        return self.get(record.id)
