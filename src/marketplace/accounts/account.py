"""Account aggregate — users, vendors and admins.

Vendors carry two independent gating flags. Their listings are publicly
visible only while `is_vendor_approved` is set and `is_vendor_locked` is not:

    accept  → approved, unlocked
    reject  → not approved (lock flag untouched)
    lock    → locked; only an approved vendor can be locked
    unlock  → unlocked; always allowed
"""

import json
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from marketplace.accounts.events import (
    AccountRegistered,
    VendorApproved,
    VendorLocked,
    VendorRejected,
    VendorUnlocked,
)
from marketplace.domain import marketplace
from marketplace.errors import PreconditionFailed
from marketplace.utils.timeutils import utcnow


class AccountType(Enum):
    USER = "user"
    VENDOR = "vendor"
    ADMIN = "admin"


class VendorAction(Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    LOCK = "lock"
    UNLOCK = "unlock"


@marketplace.aggregate
class Account:
    full_name = String(required=True, max_length=150)
    email = String(required=True, max_length=254)
    contact_number = String(max_length=20)
    account_type = String(choices=AccountType, default=AccountType.USER.value)
    vendor_services = Text()  # JSON list of service kinds offered
    is_vendor_approved = Boolean(default=False)
    is_vendor_locked = Boolean(default=False)
    is_seller = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(
        cls,
        full_name: str,
        email: str,
        account_type: str = AccountType.USER.value,
        contact_number: str | None = None,
        vendor_services: list[str] | None = None,
        is_seller: bool = False,
    ):
        now = utcnow()
        account = cls(
            full_name=full_name.strip(),
            email=email.strip().lower(),
            account_type=account_type,
            contact_number=contact_number,
            vendor_services=json.dumps(vendor_services or []),
            is_seller=is_seller,
            created_at=now,
            updated_at=now,
        )
        account.raise_(
            AccountRegistered(
                account_id=str(account.id),
                email=account.email,
                account_type=account.account_type,
                registered_at=now,
            )
        )
        return account

    @property
    def is_vendor(self) -> bool:
        return self.account_type == AccountType.VENDOR.value

    @property
    def is_publicly_visible(self) -> bool:
        return self.is_vendor and bool(self.is_vendor_approved) and not self.is_vendor_locked

    @property
    def services(self) -> list[str]:
        return json.loads(self.vendor_services) if self.vendor_services else []

    def _assert_vendor(self) -> None:
        if not self.is_vendor:
            raise ValidationError({"account_type": ["User is not a vendor"]})

    def accept(self) -> None:
        self._assert_vendor()
        now = utcnow()
        self.is_vendor_approved = True
        self.is_vendor_locked = False
        self.updated_at = now
        self.raise_(
            VendorApproved(
                account_id=str(self.id),
                email=self.email,
                full_name=self.full_name,
                approved_at=now,
            )
        )

    def reject(self) -> None:
        self._assert_vendor()
        now = utcnow()
        self.is_vendor_approved = False
        self.updated_at = now
        self.raise_(VendorRejected(account_id=str(self.id), rejected_at=now))

    def lock(self) -> None:
        self._assert_vendor()
        if not self.is_vendor_approved:
            raise PreconditionFailed({"is_vendor_approved": ["Cannot lock unapproved vendor"]})
        now = utcnow()
        self.is_vendor_locked = True
        self.updated_at = now
        self.raise_(VendorLocked(account_id=str(self.id), locked_at=now))

    def unlock(self) -> None:
        self._assert_vendor()
        now = utcnow()
        self.is_vendor_locked = False
        self.updated_at = now
        self.raise_(VendorUnlocked(account_id=str(self.id), unlocked_at=now))

    def review(self, action: str) -> None:
        """Apply an admin review action by name."""
        try:
            target = VendorAction(action)
        except ValueError:
            raise ValidationError({"action": [f"Unknown vendor action '{action}'"]}) from None

        {
            VendorAction.ACCEPT: self.accept,
            VendorAction.REJECT: self.reject,
            VendorAction.LOCK: self.lock,
            VendorAction.UNLOCK: self.unlock,
        }[target]()
