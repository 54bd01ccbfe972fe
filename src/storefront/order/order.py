"""Order aggregate: an immutable, priced snapshot of a checked-out cart.

After placement only the status, payment and delivery fields change.

State Machine:
    PLACED → PROCESSING → SHIPPED → DELIVERED
    CANCELLED reachable from PLACED, PROCESSING and SHIPPED
    DELIVERED and CANCELLED are terminal
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from storefront.domain import storefront
from storefront.exceptions import ForbiddenError
from storefront.order.events import OrderPaid, OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PLACED = "Placed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentMethod(Enum):
    CASH_ON_DELIVERY = "Cash on Delivery"
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    UPI = "UPI"


_VALID_TRANSITIONS = {
    OrderStatus.PLACED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order goes. Captured at checkout and never edited."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)


@storefront.value_object(part_of="Order")
class OrderPricing:
    items_price = Float(required=True, min_value=0.0)
    shipping_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line with the product name and unit price as they were at checkout."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress, required=True)
    payment_method = String(required=True, choices=PaymentMethod)
    pricing = ValueObject(OrderPricing, required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PLACED.value)
    is_paid = Boolean(default=False)
    paid_at = DateTime()
    is_delivered = Boolean(default=False)
    delivered_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, customer_id, lines, shipping_address, payment_method, pricing):
        """Create a Placed order.

        Args:
            customer_id: The customer checking out.
            lines: Dicts with product_id, name, quantity and price (unit price).
            shipping_address: Dict with street, city, state and zip_code.
            payment_method: One of the ``PaymentMethod`` values.
            pricing: Dict with items_price, shipping_price and total_price.
        """
        now = datetime.now(UTC)
        order = cls(
            customer_id=str(customer_id),
            items=[OrderItem(**line) for line in lines],
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            pricing=OrderPricing(**pricing),
            status=OrderStatus.PLACED.value,
            is_paid=False,
            is_delivered=False,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                item_count=len(order.items),
                items_price=order.pricing.items_price,
                shipping_price=order.pricing.shipping_price,
                total_price=order.pricing.total_price,
                payment_method=order.payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def change_status(self, new_status):
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status!r}"]}) from None

        self._assert_can_transition(target)

        previous_status = self.status
        now = datetime.now(UTC)
        self.status = target.value
        if target == OrderStatus.DELIVERED:
            self.is_delivered = True
            self.delivered_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=target.value,
                changed_at=now,
            )
        )

    def mark_paid(self):
        if self.status == OrderStatus.CANCELLED.value:
            raise ValidationError({"is_paid": ["Cancelled orders cannot be paid"]})
        if self.is_paid:
            raise ValidationError({"is_paid": ["Order is already paid"]})

        now = datetime.now(UTC)
        self.is_paid = True
        self.paid_at = now
        self.updated_at = now
        self.raise_(OrderPaid(order_id=str(self.id), amount=self.pricing.total_price, paid_at=now))

    # -------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------
    def is_visible_to(self, customer):
        return customer.is_admin or str(self.customer_id) == str(customer.id)

    def ensure_visible_to(self, customer):
        if not self.is_visible_to(customer):
            raise ForbiddenError("Not authorized to view this order")
