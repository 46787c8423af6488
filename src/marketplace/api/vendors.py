"""Admin vendor management: listing, review actions and removal."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from marketplace.accounts.queries import get_vendor, list_vendors
from marketplace.accounts.vendor_removal import DeleteVendor
from marketplace.accounts.vendor_review import ReviewVendor
from marketplace.api.auth import require_roles
from marketplace.api.schemas import (
    ReviewVendorRequest,
    VendorDeletedResponse,
    VendorListResponse,
    VendorResponse,
    VendorSchema,
)
from marketplace.shared.principal import Principal, Role

admin_vendor_router = APIRouter(prefix="/admin/vendors", tags=["vendors"])

_admin_only = require_roles(Role.ADMIN)

_ACTION_MESSAGES = {
    "accept": "Vendor approved",
    "reject": "Vendor rejected",
    "lock": "Vendor locked",
    "unlock": "Vendor unlocked",
}


@admin_vendor_router.get("", response_model=VendorListResponse)
async def get_vendors(
    only_approved: bool = False,
    only_sellers: bool = False,
    limit: int | None = Query(default=None, ge=1),
    principal: Principal = Depends(_admin_only),
) -> VendorListResponse:
    vendors = list_vendors(only_approved=only_approved, only_sellers=only_sellers, limit=limit)
    return VendorListResponse(vendors=[VendorSchema.model_validate(v) for v in vendors])


@admin_vendor_router.get("/{vendor_id}", response_model=VendorResponse)
async def get_vendor_detail(vendor_id: str, principal: Principal = Depends(_admin_only)) -> VendorResponse:
    return VendorResponse(vendor=VendorSchema.model_validate(get_vendor(vendor_id)))


@admin_vendor_router.put("", response_model=VendorResponse)
async def review_vendor(body: ReviewVendorRequest, principal: Principal = Depends(_admin_only)) -> VendorResponse:
    action = body.action.strip().lower()
    current_domain.process(ReviewVendor(account_id=body.vendor_id, action=action), asynchronous=False)
    return VendorResponse(
        message=_ACTION_MESSAGES.get(action),
        vendor=VendorSchema.model_validate(get_vendor(body.vendor_id)),
    )


@admin_vendor_router.delete("", response_model=VendorDeletedResponse)
async def delete_vendor(vendor_id: str, principal: Principal = Depends(_admin_only)) -> VendorDeletedResponse:
    purged = current_domain.process(DeleteVendor(account_id=vendor_id), asynchronous=False)
    return VendorDeletedResponse(message="Vendor and their listings deleted", purged=purged)
