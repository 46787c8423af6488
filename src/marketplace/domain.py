"""Marketplace bounded context — order fulfillment, vendor payouts and gating.

One Protean domain hosts every aggregate of the marketplace core: accounts
and vendor approval, public listings, the product catalogue, customer orders,
coupons, the settlement/transaction ledger, and the support inbox.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

marketplace = Domain(name="marketplace")
