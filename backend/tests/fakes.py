"""Test doubles for the collaborator ports."""

from typing import Optional

from casting_chat.application.services.notification_dispatcher import (
    NewMessageNotice,
    NotificationDispatcher,
)
from casting_chat.domain.ports.upload_service import AttachmentFile, UploadRecord
from casting_chat.infrastructure.memory import (
    InMemoryNotificationService,
    InMemoryUploadService,
)


class RecordingDispatcher(NotificationDispatcher):
    """Collects submitted notices instead of delivering them."""

    def __init__(self):
        self.notices: list[NewMessageNotice] = []

    def submit(self, notice: NewMessageNotice) -> None:
        self.notices.append(notice)


class FlakyUploadService(InMemoryUploadService):
    """Fails the Nth upload (1-based) with a RuntimeError."""

    def __init__(self, fail_on_call: int):
        super().__init__()
        self.fail_on_call = fail_on_call
        self.calls = 0
        self.deleted: list[str] = []

    async def upload(
        self,
        user_id: str,
        module: str,
        entity_type: str,
        entity_id: str,
        usage: str,
        is_public: bool,
        file: AttachmentFile,
    ) -> UploadRecord:
        self.calls += 1
        if self.calls == self.fail_on_call:
            raise RuntimeError("storage unavailable")
        return await super().upload(
            user_id, module, entity_type, entity_id, usage, is_public, file
        )

    async def delete(self, user_id: str, upload_id: str) -> bool:
        self.deleted.append(upload_id)
        return await super().delete(user_id, upload_id)


class BrokenLookupUploadService(InMemoryUploadService):
    """Uploads work but listing attachments always fails."""

    async def get_by_entity(self, entity_type: str, entity_id: str) -> list[UploadRecord]:
        raise RuntimeError("upload index offline")


class FailingNotificationService(InMemoryNotificationService):
    """Raises for the given recipients, records the rest."""

    def __init__(self, failing_recipients: Optional[set[str]] = None):
        super().__init__()
        self.failing_recipients = failing_recipients or set()

    async def create_new_message_notification(
        self, recipient_id: str, sender_display_name: str, dialog_id: str
    ) -> None:
        if recipient_id in self.failing_recipients:
            raise RuntimeError(f"cannot notify {recipient_id}")
        await super().create_new_message_notification(
            recipient_id, sender_display_name, dialog_id
        )


__all__ = [
    "RecordingDispatcher",
    "FlakyUploadService",
    "BrokenLookupUploadService",
    "FailingNotificationService",
]
