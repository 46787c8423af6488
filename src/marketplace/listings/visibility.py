"""Vendor visibility gate for public listing queries.

Gating is two-step: first resolve the ids of every vendor whose listings may
be shown (approved and not locked), then constrain the listing query's owner
field to that set. The same policy serves all four listing types.
"""

import structlog
from protean.utils.globals import current_domain

from marketplace.accounts.account import Account, AccountType
from marketplace.listings.listing import LISTING_TYPES

logger = structlog.get_logger(__name__)

ALL_CATEGORIES = "all"


def visible_vendor_ids() -> set[str]:
    repo = current_domain.repository_for(Account)
    vendors = repo._dao.query.filter(
        account_type=AccountType.VENDOR.value,
        is_vendor_approved=True,
        is_vendor_locked=False,
    ).limit(None).all().items
    return {str(vendor.id) for vendor in vendors}


def visible_listings(listing_cls, category: str | None = None, city: str | None = None) -> list:
    """Active listings of publicly visible vendors, newest first.

    `category` matches exactly unless it is empty or "all"; `city` is a
    case-insensitive substring match.
    """
    vendor_ids = visible_vendor_ids()
    if not vendor_ids:
        return []

    criteria = {"is_active": True, "vendor_id__in": list(vendor_ids)}
    if category and category.strip().lower() != ALL_CATEGORIES:
        criteria["category"] = category.strip()
    if city and city.strip():
        criteria["city__icontains"] = city.strip()

    repo = current_domain.repository_for(listing_cls)
    return repo._dao.query.filter(**criteria).order_by("-created_at").limit(None).all().items


def purge_vendor_listings(vendor_id: str) -> dict[str, int]:
    """Delete every listing the vendor owns; returns deletions per listing type."""
    purged = {}
    for listing_cls in LISTING_TYPES:
        repo = current_domain.repository_for(listing_cls)
        owned = repo._dao.query.filter(vendor_id=vendor_id).limit(None).all().items
        for listing in owned:
            repo._dao.delete(listing)
        purged[listing_cls.__name__] = len(owned)

    logger.info("Vendor listings purged", vendor_id=vendor_id, purged=purged)
    return purged
