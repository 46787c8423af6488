"""Read helpers over accounts."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.accounts.account import Account, AccountType


def get_vendor(account_id: str) -> Account:
    account = current_domain.repository_for(Account).get(account_id)
    if not account.is_vendor:
        raise ObjectNotFoundError(f"Vendor `{account_id}` does not exist")
    return account


def list_vendors(only_approved: bool = False, only_sellers: bool = False, limit: int | None = None) -> list[Account]:
    """Vendors newest first.

    `only_approved` keeps vendors whose listings are publicly visible
    (approved and not locked); `only_sellers` keeps vendors that sell products.
    """
    criteria = {"account_type": AccountType.VENDOR.value}
    if only_approved:
        criteria.update(is_vendor_approved=True, is_vendor_locked=False)
    if only_sellers:
        criteria["is_seller"] = True

    repo = current_domain.repository_for(Account)
    return repo._dao.query.filter(**criteria).order_by("-created_at").limit(limit or None).all().items
