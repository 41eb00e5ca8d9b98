"""
Message Repository Port - Interface for message persistence.

Soft-deleted messages are invisible to every read method here.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from casting_chat.domain.entities.message import Message
from casting_chat.domain.value_objects.criteria import MessageCriteria
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId


class MessageRepository(ABC):
    @abstractmethod
    async def get_by_id(self, message_id: MessageId) -> Optional[Message]: ...

    @abstractmethod
    async def get_by_dialog(
        self, dialog_id: DialogId, criteria: MessageCriteria
    ) -> tuple[list[Message], int]:
        """Return one page of messages (newest first) and the total match count."""
        ...

    @abstractmethod
    async def get_latest(self, dialog_id: DialogId) -> Optional[Message]: ...

    @abstractmethod
    async def add(self, message: Message) -> None: ...

    @abstractmethod
    async def save(self, message: Message) -> None: ...

    @abstractmethod
    async def soft_delete_by_sender(
        self, dialog_id: DialogId, sender_id: UserId, when: datetime
    ) -> int: ...

    @abstractmethod
    async def list_ids_by_dialog(self, dialog_id: DialogId) -> list[MessageId]:
        """All message ids of the dialog, soft-deleted ones included."""
        ...

    @abstractmethod
    async def delete_by_dialog(self, dialog_id: DialogId) -> int: ...

    @abstractmethod
    async def list_created_before(self, cutoff: datetime) -> list[MessageId]:
        """Ids of all messages created before the cutoff, soft-deleted ones included."""
        ...

    @abstractmethod
    async def delete_many(self, message_ids: list[MessageId]) -> int: ...

    @abstractmethod
    async def count(self, created_since: Optional[datetime] = None) -> int: ...

    @abstractmethod
    async def count_by_type(self) -> dict[str, int]: ...

    @abstractmethod
    async def get_unread(self, dialog_id: DialogId, user_id: UserId) -> list[Message]:
        """Messages not sent by the user that the user has no receipt for."""
        ...

    @abstractmethod
    async def count_unread(self, dialog_id: DialogId, user_id: UserId) -> int: ...
