import os
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Mark tests by the layer directory they live in."""
    for item in items:
        test_path = str(Path(item.fspath))
        for layer in ("domain", "application", "integration", "bdd"):
            if f"/{layer}/" in test_path:
                item.add_marker(getattr(pytest.mark, layer))


@pytest.fixture(scope="session")
def marketplace_bed(request):
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from marketplace.domain import marketplace

    bed = DomainFixture(marketplace)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    from marketplace.notifications.channel import reset_channels
    from protean import current_domain

    reset_channels()
    with marketplace_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()
    reset_channels()


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_account():
    """Factory persisting an account; vendors may start approved and/or locked."""
    from marketplace.accounts.account import Account
    from protean import current_domain

    counter = {"n": 0}

    def _make(account_type="user", approved=False, locked=False, is_seller=False, full_name=None, email=None, **kwargs):
        counter["n"] += 1
        account = Account.register(
            full_name=full_name or f"{account_type.title()} {counter['n']}",
            email=email or f"{account_type}{counter['n']}@example.com",
            account_type=account_type,
            is_seller=is_seller,
            **kwargs,
        )
        account.is_vendor_approved = approved
        account.is_vendor_locked = locked
        account._events.clear()
        current_domain.repository_for(Account).add(account)
        return account

    return _make


@pytest.fixture()
def customer(make_account):
    return make_account("user", full_name="Asha Traveller", email="asha@example.com", contact_number="9000000001")


@pytest.fixture()
def vendor(make_account):
    return make_account(
        "vendor", approved=True, is_seller=True, full_name="Himalaya Crafts", email="crafts@example.com"
    )


@pytest.fixture()
def admin(make_account):
    return make_account("admin", full_name="Site Admin", email="admin@example.com")


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def auth_headers():
    from marketplace.api.auth import issue_token

    def _headers(account) -> dict:
        token = issue_token(str(account.id), account.account_type, account.email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def client():
    from marketplace.api import ROUTERS, register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)
    return TestClient(app)
