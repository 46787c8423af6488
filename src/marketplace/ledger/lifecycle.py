"""Status parsing and transition checks shared by the payout ledgers.

Both ledgers follow the same shape:

    pending → processing | cancelled
    processing → <success> | cancelled
    <success>, cancelled → (terminal)

Re-submitting the current status is accepted and changes nothing.
"""

from enum import Enum

from protean.exceptions import ValidationError

from marketplace.errors import PreconditionFailed


def parse_status(status_cls: type[Enum], value: str):
    """Trim and lower-case `value`, then map it onto `status_cls`."""
    normalized = (value or "").strip().lower()
    try:
        return status_cls(normalized)
    except ValueError:
        allowed = ", ".join(s.value for s in status_cls)
        raise ValidationError({"status": [f"Invalid status '{value}'. Expected one of: {allowed}"]}) from None


def assert_transition(transitions: dict, current: Enum, target: Enum) -> None:
    if target not in transitions.get(current, set()):
        raise PreconditionFailed({"status": [f"Cannot transition from {current.value} to {target.value}"]})
