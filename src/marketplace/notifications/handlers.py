"""Notifier — emails people after vendor, ledger and support state changes."""

from protean.utils.mixins import handle

from marketplace.accounts.account import Account
from marketplace.accounts.events import VendorApproved
from marketplace.domain import marketplace
from marketplace.ledger.events import SettlementPaid, TransactionCompleted
from marketplace.ledger.settlement import Settlement
from marketplace.ledger.transaction import Transaction
from marketplace.notifications.dispatch import notify_account, send_notification
from marketplace.notifications.templates import NotificationType
from marketplace.support.events import SupportReplied
from marketplace.support.message import SupportMessage


@marketplace.event_handler(part_of=Account)
class VendorNotifications:
    @handle(VendorApproved)
    def on_vendor_approved(self, event: VendorApproved) -> None:
        send_notification(
            event.email,
            NotificationType.VENDOR_APPROVED.value,
            {"full_name": event.full_name},
        )


@marketplace.event_handler(part_of=Settlement)
class SettlementNotifications:
    @handle(SettlementPaid)
    def on_settlement_paid(self, event: SettlementPaid) -> None:
        notify_account(
            str(event.vendor_id),
            NotificationType.SETTLEMENT_PAID.value,
            {
                "booking_id": str(event.booking_id),
                "amount_paid": event.amount_paid,
                "currency": event.currency,
            },
        )


@marketplace.event_handler(part_of=Transaction)
class TransactionNotifications:
    @handle(TransactionCompleted)
    def on_transaction_completed(self, event: TransactionCompleted) -> None:
        notify_account(
            str(event.vendor_id),
            NotificationType.TRANSACTION_COMPLETED.value,
            {
                "message": event.message,
                "amount": event.amount,
                "currency": event.currency,
            },
        )


@marketplace.event_handler(part_of=SupportMessage)
class SupportNotifications:
    @handle(SupportReplied)
    def on_support_replied(self, event: SupportReplied) -> None:
        notify_account(
            str(event.user_id),
            NotificationType.SUPPORT_REPLY.value,
            {
                "subject": event.subject,
                "reply": event.reply,
            },
        )
