"""ORM models used by the application infrastructure."""

from .event import EventModel
from .registration import RegistrationModel
from .announcement import AnnouncementModel
from .notification import NotificationModel

__all__ = [
    "AnnouncementModel",
    "EventModel",
    "NotificationModel",
    "RegistrationModel",
]
