"""Settlement aggregate (CQRS) — money owed to a vendor for one booking.

Settlements are produced by the booking-completion process and only moved
by admins afterwards.

State Machine:
    PENDING → PROCESSING → PAID
    PENDING → CANCELLED
    PROCESSING → CANCELLED

`paid_at` is set exactly when the settlement enters PAID, in the same write.
"""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.errors import PreconditionFailed
from marketplace.ledger.events import SettlementPaid, SettlementRecorded, SettlementStatusChanged
from marketplace.ledger.lifecycle import assert_transition, parse_status
from marketplace.utils.timeutils import ensure_utc, utcnow

DEFAULT_CURRENCY = "INR"


class SettlementStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    PAID = "paid"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    SettlementStatus.PENDING: {SettlementStatus.PROCESSING, SettlementStatus.CANCELLED},
    SettlementStatus.PROCESSING: {SettlementStatus.PAID, SettlementStatus.CANCELLED},
    SettlementStatus.PAID: set(),  # Terminal
    SettlementStatus.CANCELLED: set(),  # Terminal
}


@marketplace.aggregate
class Settlement:
    booking_id = Identifier(required=True)
    stay_id = Identifier()
    vendor_id = Identifier(required=True)
    amount_due = Float(required=True, min_value=0.0)
    amount_paid = Float(default=0.0, min_value=0.0)
    currency = String(max_length=3, default=DEFAULT_CURRENCY)
    scheduled_date = DateTime(required=True)
    paid_at = DateTime()
    status = String(choices=SettlementStatus, default=SettlementStatus.PENDING.value)
    notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def paid_at_tracks_paid_status(self):
        is_paid = self.status == SettlementStatus.PAID.value
        if is_paid != (self.paid_at is not None):
            raise ValidationError({"paid_at": ["paid_at is set exactly when the settlement is paid"]})

    @classmethod
    def record(
        cls,
        booking_id: str,
        vendor_id: str,
        amount_due: float,
        scheduled_date: datetime,
        stay_id: str | None = None,
        currency: str = DEFAULT_CURRENCY,
        notes: str | None = None,
    ):
        now = utcnow()
        settlement = cls(
            booking_id=booking_id,
            stay_id=stay_id,
            vendor_id=vendor_id,
            amount_due=amount_due,
            currency=(currency or DEFAULT_CURRENCY).upper(),
            scheduled_date=ensure_utc(scheduled_date),
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        settlement.raise_(
            SettlementRecorded(
                settlement_id=str(settlement.id),
                booking_id=booking_id,
                vendor_id=vendor_id,
                amount_due=amount_due,
                currency=settlement.currency,
                scheduled_date=settlement.scheduled_date,
            )
        )
        return settlement

    def apply_update(self, status: str | None = None, amount_paid: float | None = None, notes: str | None = None):
        """Admin update of status, paid amount and notes in one write."""
        if status is None and amount_paid is None and notes is None:
            raise PreconditionFailed({"settlement": ["No updates provided"]})

        target = parse_status(SettlementStatus, status) if status is not None else None
        current = SettlementStatus(self.status)
        if target is not None and target != current:
            assert_transition(_VALID_TRANSITIONS, current, target)
        else:
            target = None

        now = utcnow()
        with atomic_change(self):
            if amount_paid is not None:
                self.amount_paid = amount_paid
            if notes is not None:
                self.notes = notes
            if target is not None:
                self.status = target.value
                if target == SettlementStatus.PAID:
                    self.paid_at = now
            self.updated_at = now

        if target is not None:
            self.raise_(
                SettlementStatusChanged(
                    settlement_id=str(self.id),
                    vendor_id=str(self.vendor_id),
                    from_status=current.value,
                    to_status=target.value,
                    changed_at=now,
                )
            )
        if target == SettlementStatus.PAID:
            self.raise_(
                SettlementPaid(
                    settlement_id=str(self.id),
                    booking_id=str(self.booking_id),
                    vendor_id=str(self.vendor_id),
                    amount_paid=self.amount_paid or 0.0,
                    currency=self.currency,
                    paid_at=now,
                )
            )
