"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """One delivery record per recipient and dispatch."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("idx_notifications_user_read", "user_id", "is_read"),
        Index("idx_notifications_status_sched", "status", "scheduled_at"),
    )

    id = Column("notification_id", Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    event_id = Column(Integer, nullable=True, index=True)
    announcement_id = Column(
        Integer,
        ForeignKey("announcements.announcement_id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_by = Column(Integer, nullable=True, index=True)
    type = Column(String(32), nullable=False, default="in-app")
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(32), nullable=False, default="pending")
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    scheduled_at = Column(DateTime(), nullable=True)
    scheduled_by = Column(Integer, nullable=True)
    attempts = Column(Integer, nullable=False, default=0)
    error_message = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )
    sent_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
