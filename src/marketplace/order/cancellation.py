"""Order cancellation by the customer — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.order.order import Order

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


@marketplace.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.load(command.order_id)
        order.cancel(requested_by=command.user_id)
        repo.add(order)

        logger.info(
            "order_cancelled",
            order_id=str(order.id),
            user_id=str(command.user_id),
            payment_status=order.payment_status,
        )
        return str(order.id)
