"""Domain entity describing the authenticated caller."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Caller:
    """Identity extracted from a verified bearer token."""

    user_id: int
    username: str | None = None
    role: str | None = None


__all__ = ["Caller"]
