"""Domain events for the Settlement and Transaction aggregates."""

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Settlement")
class SettlementRecorded:
    __version__ = 1

    settlement_id = Identifier(required=True)
    booking_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    amount_due = Float(required=True)
    currency = String(required=True)
    scheduled_date = DateTime(required=True)


@marketplace.event(part_of="Settlement")
class SettlementStatusChanged:
    __version__ = 1

    settlement_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Settlement")
class SettlementPaid:
    """Money owed for a booking reached the vendor."""

    __version__ = 1

    settlement_id = Identifier(required=True)
    booking_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    amount_paid = Float(required=True)
    currency = String(required=True)
    paid_at = DateTime(required=True)


@marketplace.event(part_of="Transaction")
class TransactionCreated:
    __version__ = 1

    transaction_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    amount = Float()
    currency = String(required=True)
    scheduled_date = DateTime(required=True)


@marketplace.event(part_of="Transaction")
class TransactionStatusChanged:
    __version__ = 1

    transaction_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Transaction")
class TransactionCompleted:
    __version__ = 1

    transaction_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    message = String(required=True)
    amount = Float()
    currency = String(required=True)
    completed_at = DateTime(required=True)
