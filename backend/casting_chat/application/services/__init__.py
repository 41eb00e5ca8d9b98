"""Application services shared by the command and query handlers."""

from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.attachment_linker import AttachmentLinker
from casting_chat.application.services.notification_dispatcher import (
    NewMessageFanOut,
    NewMessageNotice,
    NotificationDispatcher,
    QueuedNotificationDispatcher,
)
from casting_chat.application.services.response_builder import ResponseBuilder

__all__ = [
    "AccessGuard",
    "AttachmentLinker",
    "NewMessageFanOut",
    "NewMessageNotice",
    "NotificationDispatcher",
    "QueuedNotificationDispatcher",
    "ResponseBuilder",
]
