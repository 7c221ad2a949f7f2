"""SQLAlchemy model for event registrations."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class RegistrationModel(Base):
    """A user's registration, confirmed or waitlisted, for an event."""

    __tablename__ = "registrations"

    id = Column("registration_id", Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.event_id"), nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    status = Column(String(32), nullable=True)
    registered_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["RegistrationModel"]
