"""Support inbox and contact form endpoints."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.auth import get_principal, require_roles
from marketplace.api.schemas import (
    ContactListResponse,
    ContactRequestBody,
    ContactSchema,
    SuccessResponse,
    SupportMessageListResponse,
    SupportMessageRequest,
    SupportMessageResponse,
    SupportMessageSchema,
    SupportReplyRequest,
    SupportStatusRequest,
)
from marketplace.shared.principal import Principal, Role
from marketplace.support.handling import (
    ChangeSupportStatus,
    ReplyToSupportMessage,
    SubmitContactRequest,
    SubmitSupportMessage,
)
from marketplace.support.message import SupportMessage
from marketplace.support.queries import all_contact_requests, all_messages, messages_for_user

support_router = APIRouter(prefix="/support", tags=["support"])
admin_support_router = APIRouter(prefix="/admin/support", tags=["support"])
contact_router = APIRouter(tags=["contact"])

_admin_only = require_roles(Role.ADMIN)


def _message_response(message_id: str, message: str) -> SupportMessageResponse:
    support = current_domain.repository_for(SupportMessage).get(message_id)
    return SupportMessageResponse(message=message, support_message=SupportMessageSchema.model_validate(support))


@support_router.post("", status_code=201, response_model=SupportMessageResponse)
async def submit_message(
    body: SupportMessageRequest, principal: Principal = Depends(get_principal)
) -> SupportMessageResponse:
    command = SubmitSupportMessage(user_id=principal.id, subject=body.subject, message=body.message)
    message_id = current_domain.process(command, asynchronous=False)
    return _message_response(message_id, "Message sent")


@support_router.get("", response_model=SupportMessageListResponse)
async def my_messages(principal: Principal = Depends(get_principal)) -> SupportMessageListResponse:
    messages = messages_for_user(principal.id)
    return SupportMessageListResponse(messages=[SupportMessageSchema.model_validate(m) for m in messages])


@admin_support_router.get("", response_model=SupportMessageListResponse)
async def inbox(status: str | None = None, principal: Principal = Depends(_admin_only)) -> SupportMessageListResponse:
    messages = all_messages(status=status)
    return SupportMessageListResponse(messages=[SupportMessageSchema.model_validate(m) for m in messages])


@admin_support_router.post("/{message_id}", response_model=SupportMessageResponse)
async def reply(
    message_id: str, body: SupportReplyRequest, principal: Principal = Depends(_admin_only)
) -> SupportMessageResponse:
    command = ReplyToSupportMessage(message_id=message_id, reply=body.reply, admin_id=principal.id)
    current_domain.process(command, asynchronous=False)
    return _message_response(message_id, "Reply sent")


@admin_support_router.patch("/{message_id}", response_model=SupportMessageResponse)
async def change_status(
    message_id: str, body: SupportStatusRequest, principal: Principal = Depends(_admin_only)
) -> SupportMessageResponse:
    current_domain.process(ChangeSupportStatus(message_id=message_id, status=body.status), asynchronous=False)
    return _message_response(message_id, "Status updated")


@contact_router.post("/contact", status_code=201, response_model=SuccessResponse)
async def submit_contact(body: ContactRequestBody) -> SuccessResponse:
    current_domain.process(SubmitContactRequest(**body.model_dump()), asynchronous=False)
    return SuccessResponse(message="Thanks for reaching out, we will get back to you soon")


@contact_router.get("/admin/contacts", response_model=ContactListResponse)
async def contacts(principal: Principal = Depends(_admin_only)) -> ContactListResponse:
    return ContactListResponse(contacts=[ContactSchema.model_validate(c) for c in all_contact_requests()])
