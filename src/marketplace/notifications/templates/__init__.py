"""Template registry — maps notification kinds to template classes."""

from enum import Enum

from marketplace.notifications.templates.settlement_paid import SettlementPaidTemplate
from marketplace.notifications.templates.support_reply import SupportReplyTemplate
from marketplace.notifications.templates.transaction_completed import TransactionCompletedTemplate
from marketplace.notifications.templates.vendor_approved import VendorApprovedTemplate


class NotificationType(Enum):
    VENDOR_APPROVED = "VendorApproved"
    SETTLEMENT_PAID = "SettlementPaid"
    TRANSACTION_COMPLETED = "TransactionCompleted"
    SUPPORT_REPLY = "SupportReply"


TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.VENDOR_APPROVED.value: VendorApprovedTemplate,
    NotificationType.SETTLEMENT_PAID.value: SettlementPaidTemplate,
    NotificationType.TRANSACTION_COMPLETED.value: TransactionCompletedTemplate,
    NotificationType.SUPPORT_REPLY.value: SupportReplyTemplate,
}


def get_template(notification_type: str):
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
