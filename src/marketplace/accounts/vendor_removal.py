"""Vendor removal — deletes the vendor's listings, then the vendor."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.accounts.account import Account
from marketplace.domain import marketplace
from marketplace.listings.visibility import purge_vendor_listings

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Account")
class DeleteVendor:
    account_id = Identifier(required=True)


@marketplace.command_handler(part_of=Account)
class DeleteVendorHandler:
    @handle(DeleteVendor)
    def delete_vendor(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)
        if not account.is_vendor:
            raise ValidationError({"account_type": ["User is not a vendor"]})

        # Listings first, then the owner
        purged = purge_vendor_listings(str(account.id))
        repo._dao.delete(account)

        logger.info("Vendor deleted", account_id=str(account.id), purged=purged)
        return purged
