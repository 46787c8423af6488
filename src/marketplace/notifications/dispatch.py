"""Best-effort email dispatch.

A notification is a side effect of a state change that has already been
committed. Delivery problems are logged and reported through the return
value; they never propagate.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.accounts.account import Account
from marketplace.notifications.channel import get_email_channel
from marketplace.notifications.templates import get_template

logger = structlog.get_logger(__name__)


def find_recipient(account_id: str) -> Account | None:
    try:
        return current_domain.repository_for(Account).get(account_id)
    except ObjectNotFoundError:
        return None


def send_notification(to: str | None, notification_type: str, context: dict) -> bool:
    """Render the template for `notification_type` and email it to `to`."""
    if not to:
        logger.warning("Notification skipped, no recipient", notification_type=notification_type)
        return False

    try:
        rendered = get_template(notification_type).render(context)
        result = get_email_channel().send(to=to, subject=rendered["subject"], body=rendered["body"])
    except Exception as exc:
        logger.error(
            "Notification dispatch failed",
            notification_type=notification_type,
            to=to,
            error=str(exc),
        )
        return False

    if result.get("status") != "sent":
        logger.warning(
            "Notification not delivered",
            notification_type=notification_type,
            to=to,
            error=result.get("error"),
        )
        return False

    logger.info("Notification sent", notification_type=notification_type, message_id=result.get("message_id"))
    return True


def notify_account(account_id: str, notification_type: str, context: dict) -> bool:
    """Email the owner of `account_id`, adding their name to the template context."""
    try:
        account = find_recipient(account_id)
    except Exception as exc:
        logger.error(
            "Notification recipient lookup failed",
            notification_type=notification_type,
            account_id=account_id,
            error=str(exc),
        )
        return False

    if account is None:
        return send_notification(None, notification_type, context)
    return send_notification(account.email, notification_type, {"full_name": account.full_name, **context})
