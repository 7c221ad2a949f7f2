"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository
from .announcement_repository import AnnouncementRepository
from .event_repository import EventRepository
from .registration_repository import RegistrationRepository

__all__ = [
    "AnnouncementRepository",
    "EventRepository",
    "NotificationRepository",
    "RegistrationRepository",
]
