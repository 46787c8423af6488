"""Marketplace error taxonomy.

Input problems and missing records reuse Protean's own exceptions
(`ValidationError`, `ObjectNotFoundError`); the HTTP layer maps each class
to a status code.
"""

from protean.exceptions import ValidationError


class Unauthorized(Exception):
    """No principal, or the presented credential could not be verified."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
        self.message = message


class Forbidden(Exception):
    """The principal is known but its role does not allow the action."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)
        self.message = message


class PreconditionFailed(ValidationError):
    """The request is well-formed but the record's current state rejects it."""
