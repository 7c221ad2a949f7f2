"""SQLAlchemy model for events targeted by announcements."""

from sqlalchemy import Column, DateTime, Integer, String

from app.infrastructure.database import Base


class EventModel(Base):
    """Subset of the events table needed to resolve announcement targets."""

    __tablename__ = "events"

    id = Column("event_id", Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    start_time = Column(DateTime(), nullable=True)
    end_time = Column(DateTime(), nullable=True)
    location = Column(String(255), nullable=True)
    organizer_id = Column(Integer, nullable=True)


__all__ = ["EventModel"]
