"""Customer cancellation of their own order."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ordering.order import CancellationRole, Order

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    reason = String(required=True, max_length=500)


@marketplace.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if str(order.user_id) != str(command.user_id):
            raise ObjectNotFoundError(f"Order `{command.order_id}` does not exist")

        restock = order.cancel(
            reason=command.reason,
            cancelled_by=command.user_id,
            role=CancellationRole.USER.value,
        )
        repo.add(order)

        logger.info("Order cancelled", order_id=str(order.id), restocked_lines=len(restock))
        return str(order.id)
