"""Integration tests for support and contact endpoints."""

import pytest


@pytest.fixture()
def message_id(client, customer, auth_headers):
    response = client.post(
        "/support", json={"subject": "Refund", "message": "Where is my refund?"}, headers=auth_headers(customer)
    )
    assert response.status_code == 201
    return response.json()["support_message"]["id"]


class TestSupport:
    def test_user_lists_own(self, client, customer, message_id, auth_headers):
        messages = client.get("/support", headers=auth_headers(customer)).json()["messages"]
        assert [m["id"] for m in messages] == [message_id]

    def test_admin_replies(self, client, admin, message_id, auth_headers):
        response = client.post(f"/admin/support/{message_id}", json={"reply": "Issued"}, headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json()["support_message"]["status"] == "replied"

        replied = client.get("/admin/support?status=replied", headers=auth_headers(admin)).json()["messages"]
        assert len(replied) == 1

    def test_admin_closes(self, client, admin, message_id, auth_headers):
        response = client.patch(f"/admin/support/{message_id}", json={"status": "closed"}, headers=auth_headers(admin))
        assert response.json()["support_message"]["status"] == "closed"

    def test_inbox_is_admin_only(self, client, customer, auth_headers):
        assert client.get("/admin/support", headers=auth_headers(customer)).status_code == 403

    def test_invalid_status_filter(self, client, admin, auth_headers):
        assert client.get("/admin/support?status=archived", headers=auth_headers(admin)).status_code == 400

    def test_submit_requires_login(self, client):
        assert client.post("/support", json={"subject": "Hi", "message": "There"}).status_code == 401


class TestContact:
    def test_public_submit_and_admin_list(self, client, admin, auth_headers):
        response = client.post(
            "/contact",
            json={
                "name": "Ravi",
                "email": "ravi@example.com",
                "country_code": "+91",
                "contact": "9876543210",
                "requirement": "Group tour",
            },
        )
        assert response.status_code == 201

        contacts = client.get("/admin/contacts", headers=auth_headers(admin)).json()["contacts"]
        assert [c["name"] for c in contacts] == ["Ravi"]

    def test_blank_field_is_400(self, client):
        response = client.post(
            "/contact",
            json={"name": "Ravi", "email": " ", "country_code": "+91", "contact": "1", "requirement": "x"},
        )
        assert response.status_code == 400
