"""Settlement recording — issued once per completed booking.

The booking-completion process is the only producer. Recording is idempotent
per booking: a repeat returns the settlement that already exists.
"""

import structlog
from protean import handle
from protean.fields import DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ledger.settlement import DEFAULT_CURRENCY, Settlement

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Settlement")
class RecordSettlement:
    booking_id = Identifier(required=True)
    stay_id = Identifier()
    vendor_id = Identifier(required=True)
    amount_due = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default=DEFAULT_CURRENCY)
    scheduled_date = DateTime(required=True)
    notes = Text()


@marketplace.command_handler(part_of=Settlement)
class RecordSettlementHandler:
    @handle(RecordSettlement)
    def record_settlement(self, command):
        repo = current_domain.repository_for(Settlement)
        existing = repo._dao.query.filter(booking_id=command.booking_id).all().items
        if existing:
            logger.info("Settlement already recorded", booking_id=command.booking_id)
            return str(existing[0].id)

        settlement = Settlement.record(
            booking_id=command.booking_id,
            stay_id=command.stay_id,
            vendor_id=command.vendor_id,
            amount_due=command.amount_due,
            scheduled_date=command.scheduled_date,
            currency=command.currency,
            notes=command.notes,
        )
        repo.add(settlement)
        return str(settlement.id)
