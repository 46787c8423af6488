"""Transaction aggregate (CQRS) — an ad-hoc payout an admin schedules for a vendor.

State Machine:
    PENDING → PROCESSING → COMPLETED
    PENDING → CANCELLED
    PROCESSING → CANCELLED
"""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.errors import PreconditionFailed
from marketplace.ledger.events import TransactionCompleted, TransactionCreated, TransactionStatusChanged
from marketplace.ledger.lifecycle import assert_transition, parse_status
from marketplace.ledger.settlement import DEFAULT_CURRENCY
from marketplace.utils.timeutils import ensure_utc, utcnow


class TransactionStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    TransactionStatus.PENDING: {TransactionStatus.PROCESSING, TransactionStatus.CANCELLED},
    TransactionStatus.PROCESSING: {TransactionStatus.COMPLETED, TransactionStatus.CANCELLED},
    TransactionStatus.COMPLETED: set(),  # Terminal
    TransactionStatus.CANCELLED: set(),  # Terminal
}


@marketplace.aggregate
class Transaction:
    vendor_id = Identifier(required=True)
    message = String(required=True, max_length=1000)
    amount = Float(min_value=0.0)
    currency = String(max_length=3, default=DEFAULT_CURRENCY)
    status = String(choices=TransactionStatus, default=TransactionStatus.PENDING.value)
    scheduled_date = DateTime(required=True)
    completed_at = DateTime()
    notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def completed_at_tracks_completed_status(self):
        is_completed = self.status == TransactionStatus.COMPLETED.value
        if is_completed != (self.completed_at is not None):
            raise ValidationError({"completed_at": ["completed_at is set exactly when the transaction is completed"]})

    @classmethod
    def create(
        cls,
        vendor_id: str,
        message: str,
        scheduled_date: datetime,
        amount: float | None = None,
        currency: str = DEFAULT_CURRENCY,
        notes: str | None = None,
    ):
        message = (message or "").strip()
        if not message:
            raise ValidationError({"message": ["Message is required"]})
        if scheduled_date is None:
            raise ValidationError({"scheduled_date": ["Scheduled date is required"]})

        now = utcnow()
        transaction = cls(
            vendor_id=vendor_id,
            message=message,
            amount=amount,
            currency=(currency or DEFAULT_CURRENCY).upper(),
            scheduled_date=ensure_utc(scheduled_date),
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        transaction.raise_(
            TransactionCreated(
                transaction_id=str(transaction.id),
                vendor_id=vendor_id,
                amount=amount,
                currency=transaction.currency,
                scheduled_date=transaction.scheduled_date,
            )
        )
        return transaction

    def apply_update(self, status: str | None = None, notes: str | None = None):
        if status is None and notes is None:
            raise PreconditionFailed({"transaction": ["No updates provided"]})

        target = parse_status(TransactionStatus, status) if status is not None else None
        current = TransactionStatus(self.status)
        if target is not None and target != current:
            assert_transition(_VALID_TRANSITIONS, current, target)
        else:
            target = None

        now = utcnow()
        with atomic_change(self):
            if notes is not None:
                self.notes = notes
            if target is not None:
                self.status = target.value
                if target == TransactionStatus.COMPLETED:
                    self.completed_at = now
            self.updated_at = now

        if target is not None:
            self.raise_(
                TransactionStatusChanged(
                    transaction_id=str(self.id),
                    vendor_id=str(self.vendor_id),
                    from_status=current.value,
                    to_status=target.value,
                    changed_at=now,
                )
            )
        if target == TransactionStatus.COMPLETED:
            self.raise_(
                TransactionCompleted(
                    transaction_id=str(self.id),
                    vendor_id=str(self.vendor_id),
                    message=self.message,
                    amount=self.amount,
                    currency=self.currency,
                    completed_at=now,
                )
            )
