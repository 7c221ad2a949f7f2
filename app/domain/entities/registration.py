"""Domain entity representing a user's registration for an event."""

from dataclasses import dataclass


@dataclass
class Registration:
    """Link between a user and an event, including waitlisted entries."""

    id: int
    event_id: int
    user_id: int
    status: str | None


__all__ = ["Registration"]
