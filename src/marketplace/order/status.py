"""Administrative order updates — status changes and payment recording."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.order.lifecycle import parse_status
from marketplace.order.order import Order

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(max_length=20)
    changed_by = Identifier()


@marketplace.command(part_of="Order")
class RecordPayment:
    order_id = Identifier(required=True)


@marketplace.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        parse_status(command.status)

        repo = current_domain.repository_for(Order)
        order = repo.load(command.order_id)
        previous = order.status
        order.change_status(command.status, changed_by=command.changed_by)
        repo.add(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
            payment_status=order.payment_status,
        )
        return str(order.id)

    @handle(RecordPayment)
    def record_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.load(command.order_id)
        order.record_payment()
        repo.add(order)

        logger.info("payment_recorded", order_id=str(order.id), amount=order.total_price)
        return str(order.id)
