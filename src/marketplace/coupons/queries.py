from protean.utils.globals import current_domain

from marketplace.coupons.coupon import Coupon


def list_coupons() -> list[Coupon]:
    """All coupons, newest first."""
    return current_domain.repository_for(Coupon)._dao.query.order_by("-created_at").limit(None).all().items
