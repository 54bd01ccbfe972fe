"""Administrator order updates: status transitions and payment recording."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class ChangeOrderStatus:
    order_id: Identifier(required=True)
    status: String(required=True, choices=OrderStatus)


@storefront.command(part_of="Order")
class MarkOrderPaid:
    order_id: Identifier(required=True)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(ChangeOrderStatus)
    def change_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous_status = order.status
        order.change_status(command.status)
        repo.add(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            previous_status=previous_status,
            new_status=order.status,
        )
        return str(order.id)

    @handle(MarkOrderPaid)
    def mark_order_paid(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_paid()
        repo.add(order)

        logger.info("order_paid", order_id=str(order.id), amount=order.pricing.total_price)
        return str(order.id)
