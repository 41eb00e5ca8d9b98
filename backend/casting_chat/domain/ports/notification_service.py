"""
Notification Service Port - Delivery of user notifications.
"""

from abc import ABC, abstractmethod


class NotificationService(ABC):
    @abstractmethod
    async def create_new_message_notification(
        self, recipient_id: str, sender_display_name: str, dialog_id: str
    ) -> None: ...
