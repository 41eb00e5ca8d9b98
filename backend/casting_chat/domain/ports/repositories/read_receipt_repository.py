"""
Read Receipt Repository Port - Interface for read receipt persistence.
"""

from abc import ABC, abstractmethod

from casting_chat.domain.entities.read_receipt import ReadReceipt
from casting_chat.domain.value_objects.message_id import MessageId


class ReadReceiptRepository(ABC):
    @abstractmethod
    async def list_by_message(self, message_id: MessageId) -> list[ReadReceipt]: ...

    @abstractmethod
    async def add_many(self, receipts: list[ReadReceipt]) -> int:
        """Insert receipts, skipping any (message_id, user_id) pair already stored."""
        ...

    @abstractmethod
    async def delete_by_messages(self, message_ids: list[MessageId]) -> int: ...
