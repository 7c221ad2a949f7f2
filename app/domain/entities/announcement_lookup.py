"""Result variants for resolving an announcement identifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .announcement import Announcement
from .notification import Notification


@dataclass(frozen=True)
class Found:
    """The identifier matched an existing announcement row."""

    announcement: Announcement


@dataclass(frozen=True)
class MaterializedFrom:
    """A new announcement row was seeded from a legacy notification."""

    announcement: Announcement
    notification: Notification


@dataclass(frozen=True)
class NotFound:
    """Neither an announcement nor a legacy notification has the identifier."""

    requested_id: int


AnnouncementLookup = Union[Found, MaterializedFrom, NotFound]


__all__ = ["AnnouncementLookup", "Found", "MaterializedFrom", "NotFound"]
