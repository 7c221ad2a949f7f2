from .announcement import (
    AnnouncementClearResponse,
    AnnouncementCreate,
    AnnouncementCreateResponse,
    AnnouncementList,
    AnnouncementRead,
    AnnouncementSendRequest,
    AnnouncementUpdate,
    AnnouncementUpdateResponse,
    DispatchCounts,
)
from .notification import (
    NotificationCreateRequest,
    NotificationCreateResponse,
    NotificationMutationResponse,
    NotificationRead,
    NotificationReadResponse,
    NotificationUpdate,
    WaitlistNotifyResponse,
)

__all__ = [
    "AnnouncementClearResponse",
    "AnnouncementCreate",
    "AnnouncementCreateResponse",
    "AnnouncementList",
    "AnnouncementRead",
    "AnnouncementSendRequest",
    "AnnouncementUpdate",
    "AnnouncementUpdateResponse",
    "DispatchCounts",
    "NotificationCreateRequest",
    "NotificationCreateResponse",
    "NotificationMutationResponse",
    "NotificationRead",
    "NotificationReadResponse",
    "NotificationUpdate",
    "WaitlistNotifyResponse",
]
