"""Clock and timestamp helpers.

Announcement schedules, dispatch times and notification timestamps live in
plain ``DateTime`` columns. Every value written there is the wall-clock time
of ``APP_TIMEZONE`` without ``tzinfo``, and every comparison (is a schedule in
the past, is an announcement due) happens in that same frame.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

_FALLBACK_ZONE: Final[str] = "UTC"
_FIXED_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Zone the service stores and compares timestamps in.

    ``APP_TIMEZONE`` takes an IANA name (``America/Bogota``) or a fixed offset
    (``UTC-05:00``). Anything unrecognised means UTC.
    """

    name = (get_settings().app_timezone or "").strip() or _FALLBACK_ZONE
    return _resolve_timezone(name)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current time in the form stored in the database."""

    current = ensure_app_naive_datetime(now_in_app_timezone())
    if current is None:  # pragma: no cover
        raise RuntimeError("Failed to compute the application naive datetime")
    return current


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach the app zone to naive values and convert aware ones into it."""

    if value is None:
        return None
    zone = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Convert ``value`` to the app zone and drop ``tzinfo`` for storage."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def parse_datetime(value: datetime | str | None) -> datetime | None:
    """Read a client supplied ``scheduled_at`` into the stored form.

    ISO 8601 strings are accepted, with ``Z`` meaning UTC; strings without an
    offset are taken as app-zone wall-clock time. Empty input gives ``None``
    and anything else that does not parse raises ``ValueError``.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_app_naive_datetime(value)
    text = str(value).strip()
    if not text:
        return None
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"Invalid datetime value: {value!r}") from exc
    return ensure_app_naive_datetime(parsed)


def _resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        pass
    match = _FIXED_OFFSET.match(name)
    if match is None:
        return timezone.utc
    sign = -1 if match.group("sign") == "-" else 1
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(sign * offset)
