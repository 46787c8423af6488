"""Create, update and delete coupons."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.coupons.coupon import EDITABLE_FIELDS, Coupon, DiscountType, normalize_code
from marketplace.domain import marketplace
from marketplace.errors import PreconditionFailed

logger = structlog.get_logger(__name__)


def _assert_code_available(code: str, exclude_id: str | None = None) -> None:
    existing = current_domain.repository_for(Coupon)._dao.query.filter(code=normalize_code(code)).all().items
    if any(str(c.id) != str(exclude_id) for c in existing):
        raise ValidationError({"code": ["Coupon code already exists"]})


@marketplace.command(part_of="Coupon")
class CreateCoupon:
    code = String(required=True, max_length=50)
    discount_type = String(required=True, choices=DiscountType)
    discount_amount = Float(required=True, min_value=0.0)
    expiry_date = DateTime(required=True)
    min_purchase = Float(default=0.0)
    max_discount = Float()
    start_date = DateTime()
    usage_limit = Integer(min_value=1)
    is_active = Boolean(default=True)


@marketplace.command(part_of="Coupon")
class UpdateCoupon:
    """Partial update; fields left empty are not touched."""

    coupon_id = Identifier(required=True)
    code = String(max_length=50)
    discount_type = String(choices=DiscountType)
    discount_amount = Float(min_value=0.0)
    min_purchase = Float(min_value=0.0)
    max_discount = Float(min_value=0.0)
    start_date = DateTime()
    expiry_date = DateTime()
    usage_limit = Integer(min_value=1)
    is_active = Boolean()


@marketplace.command(part_of="Coupon")
class DeleteCoupon:
    coupon_id = Identifier(required=True)


@marketplace.command_handler(part_of=Coupon)
class CouponManagementHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        _assert_code_available(command.code)
        coupon = Coupon.create(
            code=command.code,
            discount_type=command.discount_type,
            discount_amount=command.discount_amount,
            expiry_date=command.expiry_date,
            min_purchase=command.min_purchase,
            max_discount=command.max_discount,
            start_date=command.start_date,
            usage_limit=command.usage_limit,
            is_active=True if command.is_active is None else command.is_active,
        )
        current_domain.repository_for(Coupon).add(coupon)
        logger.info("Coupon created", coupon_id=str(coupon.id), code=coupon.code)
        return str(coupon.id)

    @handle(UpdateCoupon)
    def update_coupon(self, command):
        changes = {
            field: getattr(command, field) for field in EDITABLE_FIELDS if getattr(command, field) is not None
        }
        if not changes:
            raise PreconditionFailed({"coupon": ["No updates provided"]})

        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(command.coupon_id)
        if "code" in changes:
            _assert_code_available(changes["code"], exclude_id=str(coupon.id))

        coupon.update(**changes)
        repo.add(coupon)
        logger.info("Coupon updated", coupon_id=str(coupon.id), fields=sorted(changes))
        return str(coupon.id)

    @handle(DeleteCoupon)
    def delete_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(command.coupon_id)
        repo._dao.delete(coupon)
        logger.info("Coupon deleted", coupon_id=command.coupon_id, code=coupon.code)
        return command.coupon_id
