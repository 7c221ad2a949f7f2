"""SQLAlchemy model for organizer announcements."""

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class AnnouncementModel(Base):
    """Database representation of an announcement and its lifecycle state."""

    __tablename__ = "announcements"
    __table_args__ = (Index("idx_announcements_status_sched", "status", "scheduled_at"),)

    id = Column("announcement_id", Integer, primary_key=True, index=True)
    event_id = Column(Integer, nullable=True, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="draft")
    scheduled_at = Column(DateTime(), nullable=True)
    created_by = Column(Integer, nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )
    sent_at = Column(DateTime(), nullable=True)
    dispatch_attempts = Column(Integer, nullable=False, default=0)
    last_error = Column(String(255), nullable=True)
    # Set when the row was seeded from a notification listed before announcements existed.
    source_notification_id = Column(Integer, nullable=True, unique=True)


__all__ = ["AnnouncementModel"]
