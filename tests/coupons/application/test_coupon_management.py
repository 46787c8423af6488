"""Application tests for coupon administration, validation and redemption."""

import json
from datetime import UTC, datetime, timedelta

import pytest
from marketplace.coupons.coupon import Coupon
from marketplace.coupons.management import CreateCoupon, DeleteCoupon, UpdateCoupon
from marketplace.coupons.queries import list_coupons
from marketplace.coupons.validation import validate_coupon
from marketplace.errors import PreconditionFailed
from marketplace.ordering.placement import PlaceOrder
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _create(code="SAVE10", **kwargs):
    defaults = {
        "code": code,
        "discount_type": "percentage",
        "discount_amount": 10.0,
        "min_purchase": 500.0,
        "max_discount": 200.0,
        "expiry_date": datetime.now(UTC) + timedelta(days=30),
    }
    defaults.update(kwargs)
    return current_domain.process(CreateCoupon(**defaults), asynchronous=False)


class TestCreateCoupon:
    def test_created_active_with_normalized_code(self):
        coupon_id = _create(code="monsoon25")
        coupon = current_domain.repository_for(Coupon).get(coupon_id)
        assert coupon.code == "MONSOON25"
        assert coupon.is_active is True
        assert coupon.usage_count == 0
        assert coupon.start_date is not None

    def test_duplicate_code_rejected(self):
        _create(code="SAVE10")
        with pytest.raises(ValidationError) as exc:
            _create(code="save10")
        assert exc.value.messages == {"code": ["Coupon code already exists"]}

    def test_listed_newest_first(self):
        first = _create(code="FIRST")
        second = _create(code="SECOND")
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(second)
        coupon.created_at = repo.get(first).created_at + timedelta(minutes=1)
        repo.add(coupon)
        assert [c.code for c in list_coupons()] == ["SECOND", "FIRST"]

    def test_listing_is_not_truncated(self):
        for i in range(105):
            _create(code=f"CODE{i}")
        assert len(list_coupons()) == 105


class TestUpdateCoupon:
    def test_partial_update(self):
        coupon_id = _create()
        current_domain.process(UpdateCoupon(coupon_id=coupon_id, min_purchase=100.0), asynchronous=False)
        coupon = current_domain.repository_for(Coupon).get(coupon_id)
        assert coupon.min_purchase == 100.0
        assert coupon.discount_amount == 10.0

    def test_empty_update_rejected(self):
        coupon_id = _create()
        with pytest.raises(PreconditionFailed):
            current_domain.process(UpdateCoupon(coupon_id=coupon_id), asynchronous=False)

    def test_code_clash_rejected(self):
        _create(code="TAKEN")
        coupon_id = _create(code="MINE")
        with pytest.raises(ValidationError):
            current_domain.process(UpdateCoupon(coupon_id=coupon_id, code="taken"), asynchronous=False)

    def test_keeping_own_code_allowed(self):
        coupon_id = _create(code="MINE")
        current_domain.process(UpdateCoupon(coupon_id=coupon_id, code="mine", is_active=False), asynchronous=False)
        assert current_domain.repository_for(Coupon).get(coupon_id).is_active is False

    def test_unknown_coupon(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateCoupon(coupon_id="missing", is_active=False), asynchronous=False)


class TestDeleteCoupon:
    def test_delete(self):
        coupon_id = _create()
        current_domain.process(DeleteCoupon(coupon_id=coupon_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Coupon).get(coupon_id)


class TestValidateCoupon:
    def test_valid_code_any_case(self):
        _create()
        result = validate_coupon(" save10 ", 2000.0)
        assert result.applied_discount == 200.0

    def test_unknown_code_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            validate_coupon("NOPE", 2000.0)

    def test_inactive_code_not_found(self):
        _create(is_active=False)
        with pytest.raises(ObjectNotFoundError):
            validate_coupon("SAVE10", 2000.0)

    def test_below_minimum_is_validation_error(self):
        _create()
        with pytest.raises(ValidationError) as exc:
            validate_coupon("SAVE10", 400.0)
        assert exc.value.messages == {"code": ["Minimum purchase of ₹500 required for this coupon"]}

    def test_missing_code(self):
        with pytest.raises(ValidationError):
            validate_coupon("  ", 100.0)

    def test_negative_subtotal(self):
        with pytest.raises(ValidationError):
            validate_coupon("SAVE10", -1.0)


class TestRedemption:
    def _place(self, coupon_code):
        return current_domain.process(
            PlaceOrder(
                user_id="cust-1",
                items=json.dumps([{"item_id": "stay-1", "item_type": "Stay", "quantity": 1}]),
                total_amount=1800.0,
                coupon_code=coupon_code,
                discount_amount=200.0,
            ),
            asynchronous=False,
        )

    def test_order_with_coupon_counts_a_use(self):
        coupon_id = _create()
        self._place("save10")
        assert current_domain.repository_for(Coupon).get(coupon_id).usage_count == 1

    def test_usage_limit_reached_after_redemptions(self):
        _create(usage_limit=1)
        self._place("SAVE10")
        with pytest.raises(ValidationError) as exc:
            validate_coupon("SAVE10", 2000.0)
        assert exc.value.messages == {"code": ["Coupon usage limit reached"]}

    def test_unknown_coupon_on_order_ignored(self):
        order_id = self._place("GHOST")
        assert order_id
