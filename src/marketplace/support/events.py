from protean.fields import DateTime, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="SupportMessage")
class SupportMessageSubmitted:
    __version__ = 1

    message_id = Identifier(required=True)
    user_id = Identifier(required=True)
    subject = String(required=True)
    submitted_at = DateTime(required=True)


@marketplace.event(part_of="SupportMessage")
class SupportReplied:
    """An admin answered a user's support message."""

    __version__ = 1

    message_id = Identifier(required=True)
    user_id = Identifier(required=True)
    subject = String(required=True)
    reply = Text(required=True)
    replied_by = Identifier(required=True)
    replied_at = DateTime(required=True)
