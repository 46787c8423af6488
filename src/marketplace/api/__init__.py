"""Marketplace HTTP API package."""

from marketplace.api.coupons import admin_coupon_router, coupon_router
from marketplace.api.errors import register_exception_handlers
from marketplace.api.ledger import settlement_router, transaction_router
from marketplace.api.listings import listing_router
from marketplace.api.orders import order_router, vendor_order_router
from marketplace.api.support import admin_support_router, contact_router, support_router
from marketplace.api.vendors import admin_vendor_router

ROUTERS = (
    admin_coupon_router,
    coupon_router,
    settlement_router,
    transaction_router,
    order_router,
    vendor_order_router,
    admin_vendor_router,
    listing_router,
    support_router,
    admin_support_router,
    contact_router,
)

__all__ = ["ROUTERS", "register_exception_handlers"]
