"""Integration tests for order endpoints and the vendor order view."""

import pytest
from marketplace.catalogue.product import Product
from protean import current_domain


@pytest.fixture()
def product(vendor):
    product = Product.create(
        name="Pashmina Shawl",
        base_price=100.0,
        seller_id=str(vendor.id),
        images=["shawl.jpg"],
        variants=[{"color": "red", "stock": 5, "price": 150.0, "photos": ["red.jpg"]}],
    )
    current_domain.repository_for(Product).add(product)
    return product


@pytest.fixture()
def order_id(client, customer, product, auth_headers):
    response = client.post(
        "/orders",
        json={
            "items": [
                {
                    "item_id": str(product.id),
                    "item_type": "Product",
                    "quantity": 3,
                    "variant_id": str(product.variants[0].id),
                },
                {"item_id": "stay-1", "item_type": "Stay", "quantity": 1},
            ],
            "address": {"name": "Asha", "phone": "900", "city": "Pune", "pincode": "411001"},
            "total_amount": 465.0,
        },
        headers=auth_headers(customer),
    )
    assert response.status_code == 201
    return response.json()["order_id"]


class TestPlaceOrder:
    def test_vendor_cannot_place(self, client, vendor, auth_headers):
        response = client.post(
            "/orders",
            json={"items": [{"item_id": "x", "item_type": "Stay"}], "total_amount": 10},
            headers=auth_headers(vendor),
        )
        assert response.status_code == 403

    def test_empty_items_is_400(self, client, customer, auth_headers):
        response = client.post("/orders", json={"items": [], "total_amount": 10}, headers=auth_headers(customer))
        assert response.status_code == 400


class TestVendorOrders:
    def test_rows_for_vendor(self, client, vendor, order_id, auth_headers):
        response = client.get("/vendor/orders", headers=auth_headers(vendor))
        assert response.status_code == 200
        [row] = response.json()["orders"]
        assert row["order_id"] == order_id
        assert row["sold_amount"] == 450.0
        assert row["product_image"] == "shawl.jpg"
        assert row["buyer_name"] == "Asha"
        assert row["status"] == "Pending"

    def test_admin_cannot_use_vendor_view(self, client, admin, auth_headers):
        assert client.get("/vendor/orders", headers=auth_headers(admin)).status_code == 403


class TestPatchOrder:
    def test_vendor_ships_line(self, client, vendor, product, order_id, auth_headers):
        response = client.patch(
            f"/orders/{order_id}",
            json={"item_id": str(product.id), "status": "shipped", "delivery_date": "2026-05-01T10:00:00Z"},
            headers=auth_headers(vendor),
        )
        assert response.status_code == 200

        [row] = client.get("/vendor/orders?status=Shipped", headers=auth_headers(vendor)).json()["orders"]
        assert row["status"] == "Shipped"
        assert row["delivery_date"].startswith("2026-05-01T10:00:00")

    def test_other_vendor_forbidden(self, client, make_account, product, order_id, auth_headers):
        other = make_account("vendor", approved=True, is_seller=True)
        response = client.patch(
            f"/orders/{order_id}", json={"item_id": str(product.id), "status": "shipped"}, headers=auth_headers(other)
        )
        assert response.status_code == 403
        assert response.json()["message"] == "You cannot modify this order"

    def test_item_id_required(self, client, admin, order_id, auth_headers):
        response = client.patch(f"/orders/{order_id}", json={"status": "shipped"}, headers=auth_headers(admin))
        assert response.status_code == 400

    def test_customer_cancels(self, client, customer, product, order_id, auth_headers):
        response = client.patch(
            f"/orders/{order_id}", json={"action": "cancel", "reason": "Plans changed"}, headers=auth_headers(customer)
        )
        assert response.status_code == 200
        refreshed = current_domain.repository_for(Product).get(str(product.id))
        assert refreshed.variants[0].stock == 8

    def test_cancel_needs_reason(self, client, customer, order_id, auth_headers):
        response = client.patch(f"/orders/{order_id}", json={"action": "cancel"}, headers=auth_headers(customer))
        assert response.status_code == 400

    def test_vendor_cannot_cancel(self, client, vendor, order_id, auth_headers):
        response = client.patch(
            f"/orders/{order_id}", json={"action": "cancel", "reason": "No"}, headers=auth_headers(vendor)
        )
        assert response.status_code == 403

    def test_customer_cannot_update_lines(self, client, customer, product, order_id, auth_headers):
        response = client.patch(
            f"/orders/{order_id}",
            json={"item_id": str(product.id), "status": "shipped"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 403
