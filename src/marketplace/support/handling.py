"""Support inbox commands. Users and visitors submit, admins reply."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.support.contact import ContactRequest
from marketplace.support.message import SupportMessage

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="SupportMessage")
class SubmitSupportMessage:
    user_id = Identifier(required=True)
    subject = String(required=True, max_length=200)
    message = Text(required=True)


@marketplace.command(part_of="SupportMessage")
class ReplyToSupportMessage:
    message_id = Identifier(required=True)
    reply = Text(required=True)
    admin_id = Identifier(required=True)


@marketplace.command(part_of="SupportMessage")
class ChangeSupportStatus:
    message_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@marketplace.command(part_of="ContactRequest")
class SubmitContactRequest:
    name = String(required=True, max_length=150)
    email = String(required=True, max_length=254)
    country_code = String(required=True, max_length=6)
    contact = String(required=True, max_length=20)
    requirement = Text(required=True)


@marketplace.command_handler(part_of=SupportMessage)
class SupportMessageHandler:
    @handle(SubmitSupportMessage)
    def submit(self, command):
        support = SupportMessage.submit(command.user_id, command.subject, command.message)
        current_domain.repository_for(SupportMessage).add(support)
        return str(support.id)

    @handle(ReplyToSupportMessage)
    def reply(self, command):
        repo = current_domain.repository_for(SupportMessage)
        support = repo.get(command.message_id)
        support.reply(command.reply, admin_id=command.admin_id)
        repo.add(support)
        logger.info("Support message replied", message_id=str(support.id), admin_id=command.admin_id)
        return str(support.id)

    @handle(ChangeSupportStatus)
    def change_status(self, command):
        repo = current_domain.repository_for(SupportMessage)
        support = repo.get(command.message_id)
        support.change_status(command.status)
        repo.add(support)
        return str(support.id)


@marketplace.command_handler(part_of=ContactRequest)
class ContactRequestHandler:
    @handle(SubmitContactRequest)
    def submit(self, command):
        contact = ContactRequest.submit(
            name=command.name,
            email=command.email,
            country_code=command.country_code,
            contact=command.contact,
            requirement=command.requirement,
        )
        current_domain.repository_for(ContactRequest).add(contact)
        logger.info("Contact request received", contact_id=str(contact.id))
        return str(contact.id)
