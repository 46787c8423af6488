"""Admin update of a settlement."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ledger.settlement import Settlement

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Settlement")
class UpdateSettlement:
    settlement_id = Identifier(required=True)
    status = String(max_length=20)
    amount_paid = Float(min_value=0.0)
    notes = Text()


@marketplace.command_handler(part_of=Settlement)
class UpdateSettlementHandler:
    @handle(UpdateSettlement)
    def update_settlement(self, command):
        repo = current_domain.repository_for(Settlement)
        settlement = repo.get(command.settlement_id)
        settlement.apply_update(
            status=command.status,
            amount_paid=command.amount_paid,
            notes=command.notes,
        )
        repo.add(settlement)

        logger.info("Settlement updated", settlement_id=str(settlement.id), status=settlement.status)
        return str(settlement.id)
