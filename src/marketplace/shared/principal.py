"""The authenticated caller as seen by commands and queries."""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    USER = "user"
    VENDOR = "vendor"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    id: str
    account_type: str
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.account_type == Role.ADMIN.value

    @property
    def is_vendor(self) -> bool:
        return self.account_type == Role.VENDOR.value

    @property
    def is_user(self) -> bool:
        return self.account_type == Role.USER.value
