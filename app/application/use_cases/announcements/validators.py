"""Shared validation helpers for announcement use cases."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from app.domain.exceptions import ValidationError
from app.utils import parse_datetime

# Clients commonly send "now"; allow for request latency.
SCHEDULE_TOLERANCE = timedelta(minutes=1)


def ensure_title_and_message(title: Any, message: Any) -> tuple[str, str]:
    """Return ``title`` and ``message`` or fail when either is blank."""

    clean_title = str(title).strip() if title is not None else ""
    clean_message = str(message).strip() if message is not None else ""
    if not clean_title or not clean_message:
        raise ValidationError("title and message are required")
    return clean_title, clean_message


def parse_schedule(value: Any) -> datetime | None:
    """Parse a ``scheduled_at`` value supplied by a client."""

    try:
        return parse_datetime(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("scheduled_at must be a valid datetime") from exc


def ensure_schedulable(scheduled_at: datetime | None, *, now: datetime) -> datetime:
    """Validate the timestamp of an announcement entering ``scheduled``."""

    if scheduled_at is None:
        raise ValidationError("scheduled_at is required when status is scheduled")
    if scheduled_at < now - SCHEDULE_TOLERANCE:
        raise ValidationError("scheduled_at must not be in the past")
    return scheduled_at


__all__ = [
    "SCHEDULE_TOLERANCE",
    "ensure_schedulable",
    "ensure_title_and_message",
    "parse_schedule",
]
