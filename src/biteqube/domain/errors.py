"""Domain errors surfaced to API callers."""

from __future__ import annotations


class BiteQubeError(Exception):
    """Base class for errors with a user-facing message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(BiteQubeError):
    status_code = 404

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(BiteQubeError):
    status_code = 400


class AuthError(BiteQubeError):
    status_code = 401


class PermissionDeniedError(BiteQubeError):
    status_code = 403


class PayloadTooLargeError(BiteQubeError):
    status_code = 413


class CheckoutError(BiteQubeError):
    def __init__(self, reason: str) -> None:
        super().__init__("Failed to create checkout session")
        self.reason = reason
