"""Admin review of vendor accounts — accept, reject, lock, unlock."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.accounts.account import Account, VendorAction
from marketplace.domain import marketplace

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Account")
class ReviewVendor:
    account_id = Identifier(required=True)
    action = String(required=True, choices=VendorAction)


@marketplace.command_handler(part_of=Account)
class ReviewVendorHandler:
    @handle(ReviewVendor)
    def review_vendor(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)
        account.review(command.action)
        repo.add(account)

        logger.info(
            "Vendor reviewed",
            account_id=str(account.id),
            action=command.action,
            approved=account.is_vendor_approved,
            locked=account.is_vendor_locked,
        )
        return str(account.id)
