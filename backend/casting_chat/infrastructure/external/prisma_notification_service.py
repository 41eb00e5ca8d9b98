"""Prisma NotificationService - stores in-app notifications for delivery."""

import logging

from prisma import Json, Prisma

from casting_chat.domain.ports.notification_service import NotificationService
from casting_chat.infrastructure.persistence.errors import wrap_prisma_errors

logger = logging.getLogger(__name__)

NEW_MESSAGE_TYPE = "new_message"


class PrismaNotificationService(NotificationService):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    @wrap_prisma_errors
    async def create_new_message_notification(
        self, recipient_id: str, sender_display_name: str, dialog_id: str
    ) -> None:
        await self._prisma.notification.create(
            data={
                "user_id": recipient_id,
                "type": NEW_MESSAGE_TYPE,
                "title": "New message",
                "message": f"New message from {sender_display_name}",
                "data": Json({"dialog_id": dialog_id}),
            }
        )
        logger.debug(f"[Notifications] new_message for {recipient_id} in {dialog_id}")
