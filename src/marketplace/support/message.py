"""SupportMessage aggregate — a user's question and the admin's answer."""

from enum import Enum

from protean import atomic_change
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.support.events import SupportMessageSubmitted, SupportReplied
from marketplace.utils.timeutils import utcnow


class SupportStatus(Enum):
    OPEN = "open"
    REPLIED = "replied"
    CLOSED = "closed"


@marketplace.aggregate
class SupportMessage:
    user_id = Identifier(required=True)
    subject = String(required=True, max_length=200)
    message = Text(required=True)
    status = String(choices=SupportStatus, default=SupportStatus.OPEN.value)
    admin_reply = Text()
    replied_at = DateTime()
    replied_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def submit(cls, user_id: str, subject: str, message: str):
        subject, message = (subject or "").strip(), (message or "").strip()
        if not subject or not message:
            raise ValidationError({"message": ["Subject and message are required"]})

        now = utcnow()
        support = cls(
            user_id=user_id,
            subject=subject,
            message=message,
            created_at=now,
            updated_at=now,
        )
        support.raise_(
            SupportMessageSubmitted(
                message_id=str(support.id),
                user_id=user_id,
                subject=subject,
                submitted_at=now,
            )
        )
        return support

    def reply(self, reply: str, admin_id: str) -> None:
        reply = (reply or "").strip()
        if not reply:
            raise ValidationError({"reply": ["Reply is required"]})

        now = utcnow()
        with atomic_change(self):
            self.admin_reply = reply
            self.status = SupportStatus.REPLIED.value
            self.replied_at = now
            self.replied_by = admin_id
            self.updated_at = now

        self.raise_(
            SupportReplied(
                message_id=str(self.id),
                user_id=str(self.user_id),
                subject=self.subject,
                reply=reply,
                replied_by=admin_id,
                replied_at=now,
            )
        )

    def change_status(self, status: str) -> None:
        normalized = (status or "").strip().lower()
        if normalized not in {s.value for s in SupportStatus}:
            raise ValidationError({"status": [f"Invalid status '{status}'"]})
        self.status = normalized
        self.updated_at = utcnow()
