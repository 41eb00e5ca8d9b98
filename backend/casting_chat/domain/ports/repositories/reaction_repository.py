"""
Reaction Repository Port - Interface for message reaction persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional

from casting_chat.domain.entities.reaction import MessageReaction
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId


class ReactionRepository(ABC):
    @abstractmethod
    async def get(self, message_id: MessageId, user_id: UserId) -> Optional[MessageReaction]: ...

    @abstractmethod
    async def list_by_message(self, message_id: MessageId) -> list[MessageReaction]: ...

    @abstractmethod
    async def save(self, reaction: MessageReaction) -> None:
        """Insert or replace the reaction of (message_id, user_id)."""
        ...

    @abstractmethod
    async def delete(self, message_id: MessageId, user_id: UserId) -> bool: ...

    @abstractmethod
    async def delete_by_messages(self, message_ids: list[MessageId]) -> int: ...
