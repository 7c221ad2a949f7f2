"""Use cases for per-user notifications."""

from .create_notifications import create_notifications
from .list_user_notifications import list_owner_notifications, list_user_notifications
from .mark_notification_read import mark_notification_read
from .notify_waitlist import WaitlistNotification, notify_waitlist
from .update_notification import send_notification, update_notification

__all__ = [
    "WaitlistNotification",
    "create_notifications",
    "list_owner_notifications",
    "list_user_notifications",
    "mark_notification_read",
    "notify_waitlist",
    "send_notification",
    "update_notification",
]
