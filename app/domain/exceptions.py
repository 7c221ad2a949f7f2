"""Error taxonomy raised by the application layer."""

from __future__ import annotations

from typing import Any


class EvenzaError(Exception):
    """Base class for errors reported back to API callers."""

    default_message = "Unexpected error"

    def __init__(self, message: str | None = None, *, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(EvenzaError):
    """A required field is missing or malformed; nothing was persisted."""

    default_message = "Invalid request"


class NotFoundError(EvenzaError):
    """The referenced announcement, notification or registration does not exist."""

    default_message = "Resource not found"


class ForbiddenError(EvenzaError):
    """The caller does not own the resource being mutated."""

    default_message = "Forbidden"


class DispatchError(EvenzaError):
    """Recipient resolution or notification insertion failed during fan-out."""

    default_message = "Failed to dispatch announcement"

    def __init__(
        self,
        message: str | None = None,
        *,
        announcement_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.announcement_id = announcement_id


__all__ = [
    "DispatchError",
    "EvenzaError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
]
