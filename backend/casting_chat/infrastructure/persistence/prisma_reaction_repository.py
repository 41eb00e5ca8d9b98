"""Prisma Reaction Repository - Implements ReactionRepository port."""

from typing import Optional

from prisma import Prisma
from prisma.models import MessageReaction as PrismaReaction

from casting_chat.domain.entities.reaction import MessageReaction
from casting_chat.domain.ports.repositories import ReactionRepository
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.infrastructure.persistence.errors import wrap_prisma_errors


class PrismaReactionRepository(ReactionRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaReaction) -> MessageReaction:
        return MessageReaction(
            id=record.id,
            message_id=MessageId(record.message_id),
            user_id=UserId(record.user_id),
            emoji=record.emoji,
            created_at=record.created_at,
        )

    @wrap_prisma_errors
    async def get(self, message_id: MessageId, user_id: UserId) -> Optional[MessageReaction]:
        record = await self._prisma.messagereaction.find_first(
            where={"message_id": message_id.value, "user_id": user_id.value}
        )
        return self._to_entity(record) if record else None

    @wrap_prisma_errors
    async def list_by_message(self, message_id: MessageId) -> list[MessageReaction]:
        records = await self._prisma.messagereaction.find_many(
            where={"message_id": message_id.value},
            order={"created_at": "asc"},
        )
        return [self._to_entity(record) for record in records]

    @wrap_prisma_errors
    async def save(self, reaction: MessageReaction) -> None:
        """Upsert on (message_id, user_id)."""
        await self._prisma.messagereaction.upsert(
            where={
                "message_id_user_id": {
                    "message_id": reaction.message_id.value,
                    "user_id": reaction.user_id.value,
                }
            },
            data={
                "create": {
                    "id": reaction.id,
                    "message_id": reaction.message_id.value,
                    "user_id": reaction.user_id.value,
                    "emoji": reaction.emoji,
                    "created_at": reaction.created_at,
                },
                "update": {"emoji": reaction.emoji},
            },
        )

    @wrap_prisma_errors
    async def delete(self, message_id: MessageId, user_id: UserId) -> bool:
        deleted = await self._prisma.messagereaction.delete_many(
            where={"message_id": message_id.value, "user_id": user_id.value}
        )
        return deleted > 0

    @wrap_prisma_errors
    async def delete_by_messages(self, message_ids: list[MessageId]) -> int:
        if not message_ids:
            return 0
        return await self._prisma.messagereaction.delete_many(
            where={"message_id": {"in": [mid.value for mid in message_ids]}}
        )
