"""Push notifications to connected users."""

from .service import MEETING_CANCELLED, MEETING_INVITED, MESSAGE_NEW, NotificationChannel, NotificationService

__all__ = ["MEETING_CANCELLED", "MEETING_INVITED", "MESSAGE_NEW", "NotificationChannel", "NotificationService"]
