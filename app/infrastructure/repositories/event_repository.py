"""Lookups against the events table."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.infrastructure.models import EventModel


def _coerce_event_id(value: Any) -> int | None:
    """Return ``value`` as an integer id when it looks numeric."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if number.is_integer():
        return int(number)
    return None


class EventRepository:
    """Resolve event references supplied by organizers."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def resolve_event_id(self, *, event_id: Any = None, event_title: Any = None) -> int | None:
        """Return the targeted event id, or ``None`` when nothing matches.

        A numeric ``event_id`` wins. Otherwise ``event_title`` is used, where a
        numeric-looking title is taken as an id and anything else must match
        an event title exactly.
        """

        resolved = _coerce_event_id(event_id)
        if resolved is not None:
            return resolved

        if event_title is None:
            return None
        title = str(event_title).strip()
        if not title:
            return None
        resolved = _coerce_event_id(title)
        if resolved is not None:
            return resolved

        row = (
            self.session.query(EventModel.id)
            .filter(EventModel.title == title)
            .order_by(EventModel.id.asc())
            .first()
        )
        return row.id if row is not None else None

    def get_title(self, event_id: int) -> str | None:
        row = self.session.query(EventModel.title).filter(EventModel.id == event_id).first()
        return row.title if row is not None else None


__all__ = ["EventRepository"]
