"""
Message Entity - A single message in a dialog.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from casting_chat.domain.exceptions import AccessDeniedError, DomainValidationError
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import MessageStatus, MessageType
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId


@dataclass
class Message:
    id: MessageId
    dialog_id: DialogId
    sender_id: UserId
    type: MessageType
    content: str
    status: MessageStatus
    created_at: datetime
    updated_at: datetime
    reply_to_id: Optional[MessageId] = None
    forward_from_id: Optional[MessageId] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        dialog_id: DialogId,
        sender_id: UserId,
        type: MessageType,
        content: str,
        reply_to_id: Optional[MessageId] = None,
        forward_from_id: Optional[MessageId] = None,
    ) -> Message:
        """Factory method to create a new Message with a generated ID and timestamp."""
        if type == MessageType.TEXT and not content.strip():
            raise DomainValidationError("Text message content cannot be empty")
        now = datetime.now(timezone.utc)
        return cls(
            id=MessageId.generate(),
            dialog_id=dialog_id,
            sender_id=sender_id,
            type=type,
            content=content,
            status=MessageStatus.SENT,
            created_at=now,
            updated_at=now,
            reply_to_id=reply_to_id,
            forward_from_id=forward_from_id,
        )

    @classmethod
    def system(cls, dialog_id: DialogId, content: str) -> Message:
        return cls.create(
            dialog_id=dialog_id,
            sender_id=UserId.system(),
            type=MessageType.SYSTEM,
            content=content,
        )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def edit(
        self,
        editor_id: UserId,
        content: str,
        window: timedelta,
        now: Optional[datetime] = None,
    ) -> None:
        now = now or datetime.now(timezone.utc)
        if editor_id != self.sender_id:
            raise AccessDeniedError("can only edit own messages")
        if now - self.created_at > window:
            minutes = int(window.total_seconds() // 60)
            raise DomainValidationError(
                f"message can only be edited within {minutes} minutes"
            )
        if self.type == MessageType.TEXT and not content.strip():
            raise DomainValidationError("Text message content cannot be empty")
        self.content = content
        self.status = MessageStatus.EDITED
        self.updated_at = now

    def soft_delete(self, now: Optional[datetime] = None) -> None:
        self.deleted_at = now or datetime.now(timezone.utc)
