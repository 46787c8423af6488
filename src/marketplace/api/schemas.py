"""Pydantic request/response schemas for the marketplace API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands. Every response carries `success`.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SuccessResponse(BaseModel):
    success: bool = True
    message: str | None = None


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------
class CreateCouponRequest(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    discount_type: str  # percentage, fixed
    discount_amount: float = Field(ge=0)
    expiry_date: datetime
    min_purchase: float = Field(default=0.0, ge=0)
    max_discount: float | None = Field(default=None, ge=0)
    start_date: datetime | None = None
    usage_limit: int | None = Field(default=None, ge=1)
    is_active: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "SAVE10",
                    "discount_type": "percentage",
                    "discount_amount": 10,
                    "max_discount": 200,
                    "min_purchase": 500,
                    "expiry_date": "2030-12-31T23:59:59Z",
                }
            ]
        }
    }


class UpdateCouponRequest(BaseModel):
    code: str | None = None
    discount_type: str | None = None
    discount_amount: float | None = Field(default=None, ge=0)
    min_purchase: float | None = Field(default=None, ge=0)
    max_discount: float | None = Field(default=None, ge=0)
    start_date: datetime | None = None
    expiry_date: datetime | None = None
    usage_limit: int | None = Field(default=None, ge=1)
    is_active: bool | None = None


class CouponSchema(_Record):
    code: str
    discount_type: str
    discount_amount: float
    min_purchase: float | None = None
    max_discount: float | None = None
    start_date: datetime | None = None
    expiry_date: datetime
    usage_limit: int | None = None
    usage_count: int = 0
    is_active: bool = True
    created_at: datetime | None = None


class CouponResponse(SuccessResponse):
    coupon: CouponSchema


class CouponListResponse(SuccessResponse):
    coupons: list[CouponSchema]


class ValidateCouponRequest(BaseModel):
    code: str = Field(min_length=1)
    subtotal: float = Field(ge=0)


class AppliedCouponSchema(BaseModel):
    code: str
    discount_type: str
    discount_amount: float
    min_purchase: float
    applied_discount: float


class ValidateCouponResponse(SuccessResponse):
    coupon: AppliedCouponSchema


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------
class SettlementSchema(_Record):
    booking_id: str
    stay_id: str | None = None
    vendor_id: str
    amount_due: float
    amount_paid: float = 0.0
    currency: str
    scheduled_date: datetime
    paid_at: datetime | None = None
    status: str
    notes: str | None = None


class SettlementListResponse(SuccessResponse):
    settlements: list[SettlementSchema]


class UpdateSettlementRequest(BaseModel):
    settlement_id: str
    status: str | None = None
    amount_paid: float | None = Field(default=None, ge=0)
    notes: str | None = None


class SettlementResponse(SuccessResponse):
    settlement: SettlementSchema


class TransactionSchema(_Record):
    vendor_id: str
    message: str
    amount: float | None = None
    currency: str
    status: str
    scheduled_date: datetime
    completed_at: datetime | None = None
    notes: str | None = None
    created_at: datetime | None = None


class CreateTransactionRequest(BaseModel):
    vendor_id: str
    message: str
    scheduled_date: datetime
    amount: float | None = Field(default=None, ge=0)
    currency: str = "INR"
    notes: str | None = None


class UpdateTransactionRequest(BaseModel):
    status: str | None = None
    notes: str | None = None


class TransactionResponse(SuccessResponse):
    transaction: TransactionSchema


class TransactionListResponse(SuccessResponse):
    transactions: list[TransactionSchema]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderItemRequest(BaseModel):
    item_id: str
    item_type: str
    quantity: int = Field(default=1, ge=1)
    variant_id: str | None = None
    variant: dict | None = None


class AddressSchema(BaseModel):
    name: str | None = None
    phone: str | None = None
    pincode: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    landmark: str | None = None


class PlaceOrderRequest(BaseModel):
    items: list[OrderItemRequest] = Field(min_length=1)
    address: AddressSchema | None = None
    total_amount: float = Field(ge=0)
    delivery_charge: float = Field(default=15.0, ge=0)
    coupon_code: str | None = None
    discount_amount: float = Field(default=0.0, ge=0)


class OrderIdResponse(SuccessResponse):
    order_id: str


class OrderPatchRequest(BaseModel):
    """Either a customer cancellation (`action="cancel"`) or a line-item update."""

    action: str | None = None
    reason: str | None = None
    item_id: str | None = None
    item_type: str = "Product"
    variant_id: str | None = None
    status: str | None = None
    delivery_date: datetime | None = None
    clear_delivery_date: bool = False


class BuyerAddressSchema(BaseModel):
    line1: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None


class VendorOrderRowSchema(BaseModel):
    order_id: str
    item_id: str
    variant_id: str | None = None
    product_name: str
    product_image: str | None = None
    quantity: int
    unit_price: float
    sold_amount: float
    buyer_name: str
    buyer_email: str | None = None
    buyer_phone: str | None = None
    buyer_address: BuyerAddressSchema | None = None
    delivery_date: datetime | None = None
    status: str
    order_status: str
    order_created_at: datetime | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None
    cancelled_by_role: str | None = None


class VendorOrdersResponse(SuccessResponse):
    orders: list[VendorOrderRowSchema]


# ---------------------------------------------------------------------------
# Vendors & listings
# ---------------------------------------------------------------------------
class VendorSchema(_Record):
    full_name: str
    email: str
    contact_number: str | None = None
    is_vendor_approved: bool = False
    is_vendor_locked: bool = False
    is_seller: bool = False
    services: list[str] = []
    created_at: datetime | None = None


class VendorResponse(SuccessResponse):
    vendor: VendorSchema


class VendorListResponse(SuccessResponse):
    vendors: list[VendorSchema]


class ReviewVendorRequest(BaseModel):
    vendor_id: str
    action: str  # accept, reject, lock, unlock


class VendorDeletedResponse(SuccessResponse):
    purged: dict[str, int]


class ListingSchema(_Record):
    vendor_id: str
    name: str
    category: str | None = None
    city: str | None = None
    price: float = 0.0
    created_at: datetime | None = None


class ListingListResponse(SuccessResponse):
    listings: list[ListingSchema]


# ---------------------------------------------------------------------------
# Support & contact
# ---------------------------------------------------------------------------
class SupportMessageRequest(BaseModel):
    subject: str
    message: str


class SupportReplyRequest(BaseModel):
    reply: str


class SupportStatusRequest(BaseModel):
    status: str


class SupportMessageSchema(_Record):
    user_id: str
    subject: str
    message: str
    status: str
    admin_reply: str | None = None
    replied_at: datetime | None = None
    replied_by: str | None = None
    created_at: datetime | None = None


class SupportMessageResponse(SuccessResponse):
    support_message: SupportMessageSchema


class SupportMessageListResponse(SuccessResponse):
    messages: list[SupportMessageSchema]


class ContactRequestBody(BaseModel):
    name: str
    email: str
    country_code: str
    contact: str
    requirement: str


class ContactSchema(_Record):
    name: str
    email: str
    country_code: str
    contact: str
    requirement: str
    created_at: datetime | None = None


class ContactListResponse(SuccessResponse):
    contacts: list[ContactSchema]
