"""Account registration command and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, String, Text
from protean.utils.globals import current_domain

from marketplace.accounts.account import Account, AccountType
from marketplace.domain import marketplace


@marketplace.command(part_of="Account")
class RegisterAccount:
    full_name = String(required=True, max_length=150)
    email = String(required=True, max_length=254)
    account_type = String(choices=AccountType, default=AccountType.USER.value)
    contact_number = String(max_length=20)
    vendor_services = Text()  # JSON list
    is_seller = Boolean(default=False)


@marketplace.command_handler(part_of=Account)
class RegisterAccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        repo = current_domain.repository_for(Account)
        email = command.email.strip().lower()
        if repo._dao.query.filter(email=email).all().items:
            raise ValidationError({"email": ["An account with this email already exists"]})

        services = json.loads(command.vendor_services) if command.vendor_services else []
        account = Account.register(
            full_name=command.full_name,
            email=email,
            account_type=command.account_type,
            contact_number=command.contact_number,
            vendor_services=services,
            is_seller=bool(command.is_seller),
        )
        repo.add(account)
        return str(account.id)
