"""Coupon endpoints for admin management and checkout validation."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.auth import get_principal, require_roles
from marketplace.api.schemas import (
    AppliedCouponSchema,
    CouponListResponse,
    CouponResponse,
    CouponSchema,
    CreateCouponRequest,
    SuccessResponse,
    UpdateCouponRequest,
    ValidateCouponRequest,
    ValidateCouponResponse,
)
from marketplace.coupons.coupon import Coupon
from marketplace.coupons.management import CreateCoupon, DeleteCoupon, UpdateCoupon
from marketplace.coupons.queries import list_coupons
from marketplace.coupons.validation import validate_coupon
from marketplace.shared.principal import Principal, Role

admin_coupon_router = APIRouter(prefix="/admin/coupons", tags=["coupons"])
coupon_router = APIRouter(prefix="/coupons", tags=["coupons"])

_admin_only = require_roles(Role.ADMIN)


def _coupon_response(coupon_id: str, message: str | None = None) -> CouponResponse:
    coupon = current_domain.repository_for(Coupon).get(coupon_id)
    return CouponResponse(message=message, coupon=CouponSchema.model_validate(coupon))


@admin_coupon_router.get("", response_model=CouponListResponse)
async def get_coupons(principal: Principal = Depends(_admin_only)) -> CouponListResponse:
    return CouponListResponse(coupons=[CouponSchema.model_validate(c) for c in list_coupons()])


@admin_coupon_router.post("", status_code=201, response_model=CouponResponse)
async def create_coupon(body: CreateCouponRequest, principal: Principal = Depends(_admin_only)) -> CouponResponse:
    command = CreateCoupon(**body.model_dump())
    coupon_id = current_domain.process(command, asynchronous=False)
    return _coupon_response(coupon_id, "Coupon created")


@admin_coupon_router.patch("/{coupon_id}", response_model=CouponResponse)
async def update_coupon(
    coupon_id: str, body: UpdateCouponRequest, principal: Principal = Depends(_admin_only)
) -> CouponResponse:
    command = UpdateCoupon(coupon_id=coupon_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return _coupon_response(coupon_id, "Coupon updated")


@admin_coupon_router.delete("/{coupon_id}", response_model=SuccessResponse)
async def delete_coupon(coupon_id: str, principal: Principal = Depends(_admin_only)) -> SuccessResponse:
    current_domain.process(DeleteCoupon(coupon_id=coupon_id), asynchronous=False)
    return SuccessResponse(message="Coupon deleted")


@coupon_router.post("/validate", response_model=ValidateCouponResponse)
async def validate(
    body: ValidateCouponRequest, principal: Principal = Depends(get_principal)
) -> ValidateCouponResponse:
    """Check a code against the cart subtotal and return the discount it gives."""
    result = validate_coupon(body.code, body.subtotal)
    return ValidateCouponResponse(coupon=AppliedCouponSchema(**result.as_response()))
