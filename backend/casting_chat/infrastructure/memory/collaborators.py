"""
In-memory collaborator adapters: user directory, casting workflow,
uploads and notifications. Used with the in-memory store.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from casting_chat.domain.ports.casting_workflow import CastingRecord, CastingWorkflow
from casting_chat.domain.ports.notification_service import NotificationService
from casting_chat.domain.ports.upload_service import AttachmentFile, UploadRecord, UploadService
from casting_chat.domain.ports.user_directory import UserDirectory, UserRecord

logger = logging.getLogger(__name__)


class InMemoryUserDirectory(UserDirectory):
    def __init__(self, users: Optional[list[UserRecord]] = None):
        self._users: dict[str, UserRecord] = {u.id: u for u in users or []}

    def add(self, user: UserRecord) -> None:
        self._users[user.id] = user

    def remove(self, user_id: str) -> None:
        self._users.pop(user_id, None)

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._users.get(user_id)


class InMemoryCastingWorkflow(CastingWorkflow):
    def __init__(self, castings: Optional[list[CastingRecord]] = None):
        self._castings: dict[str, CastingRecord] = {c.id: c for c in castings or []}

    def add(self, casting: CastingRecord) -> None:
        self._castings[casting.id] = casting

    async def find_casting_by_id(self, casting_id: str) -> Optional[CastingRecord]:
        return self._castings.get(casting_id)


class InMemoryUploadService(UploadService):
    def __init__(self, base_url: str = "/uploads"):
        self._base_url = base_url.rstrip("/")
        self.records: dict[str, UploadRecord] = {}

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
        upload_id = str(uuid4())
        record = UploadRecord(
            id=upload_id,
            user_id=user_id,
            module=module,
            entity_type=entity_type,
            entity_id=entity_id,
            usage=usage,
            is_public=is_public,
            filename=file.filename,
            mime_type=file.mime_type,
            size=file.size,
            url=f"{self._base_url}/{upload_id}/{file.filename}",
            created_at=datetime.now(timezone.utc),
        )
        self.records[upload_id] = record
        return record

    async def get_by_entity(self, entity_type: str, entity_id: str) -> list[UploadRecord]:
        return [
            r
            for r in self.records.values()
            if r.entity_type == entity_type and r.entity_id == entity_id
        ]

    async def delete(self, user_id: str, upload_id: str) -> bool:
        return self.records.pop(upload_id, None) is not None


@dataclass(frozen=True)
class SentNotification:
    recipient_id: str
    sender_display_name: str
    dialog_id: str


class InMemoryNotificationService(NotificationService):
    """Keeps created notifications in a list and logs them."""

    def __init__(self):
        self.sent: list[SentNotification] = []

    async def create_new_message_notification(
        self, recipient_id: str, sender_display_name: str, dialog_id: str
    ) -> None:
        self.sent.append(SentNotification(recipient_id, sender_display_name, dialog_id))
        logger.info(
            f"[Notifications] new_message for {recipient_id} from {sender_display_name} in {dialog_id}"
        )
