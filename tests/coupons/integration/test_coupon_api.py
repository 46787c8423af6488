"""Integration tests for coupon endpoints."""

from datetime import UTC, datetime, timedelta

import pytest


@pytest.fixture()
def admin_headers(admin, auth_headers):
    return auth_headers(admin)


def _coupon_body(**kwargs):
    body = {
        "code": "save10",
        "discount_type": "percentage",
        "discount_amount": 10,
        "min_purchase": 500,
        "max_discount": 200,
        "expiry_date": (datetime.now(UTC) + timedelta(days=30)).isoformat(),
    }
    body.update(kwargs)
    return body


class TestAdminCoupons:
    def test_create_and_list(self, client, admin_headers):
        response = client.post("/admin/coupons", json=_coupon_body(), headers=admin_headers)
        assert response.status_code == 201
        coupon = response.json()["coupon"]
        assert coupon["code"] == "SAVE10"
        assert coupon["usage_count"] == 0

        listed = client.get("/admin/coupons", headers=admin_headers).json()["coupons"]
        assert [c["code"] for c in listed] == ["SAVE10"]

    def test_duplicate_code_is_400(self, client, admin_headers):
        client.post("/admin/coupons", json=_coupon_body(), headers=admin_headers)
        response = client.post("/admin/coupons", json=_coupon_body(code="SAVE10"), headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Coupon code already exists"}

    def test_patch(self, client, admin_headers):
        coupon_id = client.post("/admin/coupons", json=_coupon_body(), headers=admin_headers).json()["coupon"]["id"]
        response = client.patch(f"/admin/coupons/{coupon_id}", json={"usage_limit": 5}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["coupon"]["usage_limit"] == 5

    def test_empty_patch_is_412(self, client, admin_headers):
        coupon_id = client.post("/admin/coupons", json=_coupon_body(), headers=admin_headers).json()["coupon"]["id"]
        response = client.patch(f"/admin/coupons/{coupon_id}", json={}, headers=admin_headers)
        assert response.status_code == 412
        assert response.json()["message"] == "No updates provided"

    def test_delete(self, client, admin_headers):
        coupon_id = client.post("/admin/coupons", json=_coupon_body(), headers=admin_headers).json()["coupon"]["id"]
        assert client.delete(f"/admin/coupons/{coupon_id}", headers=admin_headers).status_code == 200
        assert client.delete(f"/admin/coupons/{coupon_id}", headers=admin_headers).status_code == 404


class TestValidateCoupon:
    def test_valid(self, client, admin_headers, customer, auth_headers):
        client.post("/admin/coupons", json=_coupon_body(), headers=admin_headers)
        response = client.post(
            "/coupons/validate", json={"code": "Save10", "subtotal": 2000}, headers=auth_headers(customer)
        )
        assert response.status_code == 200
        assert response.json()["coupon"]["applied_discount"] == 200.0

    def test_below_minimum_is_400(self, client, admin_headers, customer, auth_headers):
        client.post("/admin/coupons", json=_coupon_body(), headers=admin_headers)
        response = client.post(
            "/coupons/validate", json={"code": "SAVE10", "subtotal": 400}, headers=auth_headers(customer)
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Minimum purchase of ₹500 required for this coupon"

    def test_unknown_is_404(self, client, customer, auth_headers):
        response = client.post(
            "/coupons/validate", json={"code": "NOPE", "subtotal": 400}, headers=auth_headers(customer)
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Invalid or inactive coupon code"

    def test_requires_login(self, client):
        assert client.post("/coupons/validate", json={"code": "SAVE10", "subtotal": 400}).status_code == 401
