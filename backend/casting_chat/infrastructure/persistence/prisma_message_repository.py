"""
Prisma Message Repository - Implements MessageRepository port.

Every read filters on deleted_at = null, so soft-deleted messages never
reach the application layer.
"""

from datetime import datetime
from typing import Any, Optional

from prisma import Prisma
from prisma.models import Message as PrismaMessage

from casting_chat.domain.entities.message import Message
from casting_chat.domain.ports.repositories import MessageRepository
from casting_chat.domain.value_objects.criteria import MessageCriteria
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import MessageStatus, MessageType
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.infrastructure.persistence.errors import wrap_prisma_errors

# Newest first; id breaks ties between messages created in the same instant
NEWEST_FIRST = [{"created_at": "desc"}, {"id": "desc"}]


class PrismaMessageRepository(MessageRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaMessage) -> Message:
        """Map Prisma record to domain entity."""
        return Message(
            id=MessageId(record.id),
            dialog_id=DialogId(record.dialog_id),
            sender_id=UserId(record.sender_id),
            type=MessageType(record.type),
            content=record.content,
            status=MessageStatus(record.status),
            created_at=record.created_at,
            updated_at=record.updated_at,
            reply_to_id=MessageId(record.reply_to_id) if record.reply_to_id else None,
            forward_from_id=(
                MessageId(record.forward_from_id) if record.forward_from_id else None
            ),
            deleted_at=record.deleted_at,
        )

    def _unread_where(self, dialog_id: DialogId, user_id: UserId) -> dict[str, Any]:
        return {
            "dialog_id": dialog_id.value,
            "deleted_at": None,
            "sender_id": {"not": user_id.value},
            "read_receipts": {"none": {"user_id": user_id.value}},
        }

    @wrap_prisma_errors
    async def get_by_id(self, message_id: MessageId) -> Optional[Message]:
        record = await self._prisma.message.find_first(
            where={"id": message_id.value, "deleted_at": None}
        )
        return self._to_entity(record) if record else None

    @wrap_prisma_errors
    async def get_by_dialog(
        self, dialog_id: DialogId, criteria: MessageCriteria
    ) -> tuple[list[Message], int]:
        where: dict[str, Any] = {"dialog_id": dialog_id.value, "deleted_at": None}
        if criteria.types:
            where["type"] = {"in": [t.value for t in criteria.types]}
        created_at: dict[str, datetime] = {}
        if criteria.start_date is not None:
            created_at["gte"] = criteria.start_date
        if criteria.end_date is not None:
            created_at["lte"] = criteria.end_date
        if created_at:
            where["created_at"] = created_at

        total = await self._prisma.message.count(where=where)
        records = await self._prisma.message.find_many(
            where=where,
            order=NEWEST_FIRST,
            skip=criteria.offset,
            take=criteria.limit,
        )
        return [self._to_entity(record) for record in records], total

    @wrap_prisma_errors
    async def get_latest(self, dialog_id: DialogId) -> Optional[Message]:
        record = await self._prisma.message.find_first(
            where={"dialog_id": dialog_id.value, "deleted_at": None},
            order=NEWEST_FIRST,
        )
        return self._to_entity(record) if record else None

    @wrap_prisma_errors
    async def add(self, message: Message) -> None:
        await self._prisma.message.create(
            data={
                "id": message.id.value,
                "dialog_id": message.dialog_id.value,
                "sender_id": message.sender_id.value,
                "type": message.type.value,
                "content": message.content,
                "status": message.status.value,
                "reply_to_id": message.reply_to_id.value if message.reply_to_id else None,
                "forward_from_id": (
                    message.forward_from_id.value if message.forward_from_id else None
                ),
                "created_at": message.created_at,
                "updated_at": message.updated_at,
            }
        )

    @wrap_prisma_errors
    async def save(self, message: Message) -> None:
        await self._prisma.message.update(
            where={"id": message.id.value},
            data={
                "content": message.content,
                "status": message.status.value,
                "updated_at": message.updated_at,
                "deleted_at": message.deleted_at,
            },
        )

    @wrap_prisma_errors
    async def soft_delete_by_sender(
        self, dialog_id: DialogId, sender_id: UserId, when: datetime
    ) -> int:
        return await self._prisma.message.update_many(
            where={
                "dialog_id": dialog_id.value,
                "sender_id": sender_id.value,
                "deleted_at": None,
            },
            data={"deleted_at": when},
        )

    @wrap_prisma_errors
    async def list_ids_by_dialog(self, dialog_id: DialogId) -> list[MessageId]:
        records = await self._prisma.message.find_many(where={"dialog_id": dialog_id.value})
        return [MessageId(record.id) for record in records]

    @wrap_prisma_errors
    async def delete_by_dialog(self, dialog_id: DialogId) -> int:
        return await self._prisma.message.delete_many(where={"dialog_id": dialog_id.value})

    @wrap_prisma_errors
    async def list_created_before(self, cutoff: datetime) -> list[MessageId]:
        records = await self._prisma.message.find_many(where={"created_at": {"lt": cutoff}})
        return [MessageId(record.id) for record in records]

    @wrap_prisma_errors
    async def delete_many(self, message_ids: list[MessageId]) -> int:
        if not message_ids:
            return 0
        return await self._prisma.message.delete_many(
            where={"id": {"in": [mid.value for mid in message_ids]}}
        )

    @wrap_prisma_errors
    async def count(self, created_since: Optional[datetime] = None) -> int:
        where: dict[str, Any] = {"deleted_at": None}
        if created_since is not None:
            where["created_at"] = {"gte": created_since}
        return await self._prisma.message.count(where=where)

    @wrap_prisma_errors
    async def count_by_type(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for message_type in MessageType:
            count = await self._prisma.message.count(
                where={"type": message_type.value, "deleted_at": None}
            )
            if count:
                counts[message_type.value] = count
        return counts

    @wrap_prisma_errors
    async def get_unread(self, dialog_id: DialogId, user_id: UserId) -> list[Message]:
        records = await self._prisma.message.find_many(
            where=self._unread_where(dialog_id, user_id),
            order={"created_at": "asc"},
        )
        return [self._to_entity(record) for record in records]

    @wrap_prisma_errors
    async def count_unread(self, dialog_id: DialogId, user_id: UserId) -> int:
        return await self._prisma.message.count(where=self._unread_where(dialog_id, user_id))
