"""Counts a coupon use each time an order is placed with its code."""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.coupons.coupon import Coupon, normalize_code
from marketplace.domain import marketplace
from marketplace.ordering.events import OrderPlaced

logger = structlog.get_logger(__name__)


@marketplace.event_handler(part_of=Coupon, stream_category="marketplace::order")
class CouponRedemptionHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        if not event.coupon_code:
            return

        repo = current_domain.repository_for(Coupon)
        matches = repo._dao.query.filter(code=normalize_code(event.coupon_code)).all().items
        if not matches:
            logger.warning("Order placed with unknown coupon", order_id=str(event.order_id), code=event.coupon_code)
            return

        coupon = matches[0]
        coupon.redeem(order_id=str(event.order_id))
        repo.add(coupon)

