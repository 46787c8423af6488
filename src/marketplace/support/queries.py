from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.support.contact import ContactRequest
from marketplace.support.message import SupportMessage, SupportStatus


def _newest_first(query):
    return query.order_by("-created_at").limit(None).all().items


def messages_for_user(user_id: str) -> list[SupportMessage]:
    repo = current_domain.repository_for(SupportMessage)
    return _newest_first(repo._dao.query.filter(user_id=user_id))


def all_messages(status: str | None = None) -> list[SupportMessage]:
    """Every support message, optionally narrowed to one status."""
    query = current_domain.repository_for(SupportMessage)._dao.query
    if status and status.strip():
        try:
            wanted = SupportStatus(status.strip().lower())
        except ValueError:
            raise ValidationError({"status": [f"Invalid status '{status}'"]}) from None
        query = query.filter(status=wanted.value)
    return _newest_first(query)


def all_contact_requests() -> list[ContactRequest]:
    return _newest_first(current_domain.repository_for(ContactRequest)._dao.query)
