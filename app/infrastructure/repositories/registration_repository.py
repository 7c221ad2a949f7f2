"""Read access to event registrations."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Registration
from app.infrastructure.models import RegistrationModel


class RegistrationRepository:
    """Resolve registrants of an event and individual registrations."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_recipient_ids(self, event_id: int | None) -> list[int]:
        """Return the distinct users holding any registration for ``event_id``."""

        if not event_id:
            return []
        rows = (
            self.session.query(RegistrationModel.user_id)
            .filter(RegistrationModel.event_id == event_id)
            .distinct()
            .order_by(RegistrationModel.user_id.asc())
            .all()
        )
        return [int(row.user_id) for row in rows if row.user_id is not None]

    def get_for_user(self, registration_id: int, *, user_id: int) -> Registration | None:
        model = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.id == registration_id)
            .filter(RegistrationModel.user_id == user_id)
            .first()
        )
        if model is None:
            return None
        return Registration(
            id=model.id,
            event_id=model.event_id,
            user_id=model.user_id,
            status=model.status,
        )


__all__ = ["RegistrationRepository"]
