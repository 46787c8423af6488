"""Domain events for the Account aggregate."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Account")
class AccountRegistered:
    __version__ = 1

    account_id = Identifier(required=True)
    email = String(required=True)
    account_type = String(required=True)
    registered_at = DateTime(required=True)


@marketplace.event(part_of="Account")
class VendorApproved:
    """An admin accepted the vendor; its listings become publicly visible."""

    __version__ = 1

    account_id = Identifier(required=True)
    email = String(required=True)
    full_name = String()
    approved_at = DateTime(required=True)


@marketplace.event(part_of="Account")
class VendorRejected:
    __version__ = 1

    account_id = Identifier(required=True)
    rejected_at = DateTime(required=True)


@marketplace.event(part_of="Account")
class VendorLocked:
    __version__ = 1

    account_id = Identifier(required=True)
    locked_at = DateTime(required=True)


@marketplace.event(part_of="Account")
class VendorUnlocked:
    __version__ = 1

    account_id = Identifier(required=True)
    unlocked_at = DateTime(required=True)
