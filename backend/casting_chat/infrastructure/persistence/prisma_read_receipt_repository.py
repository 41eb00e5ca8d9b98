"""Prisma Read Receipt Repository - Implements ReadReceiptRepository port."""

from prisma import Prisma
from prisma.models import MessageReadReceipt as PrismaReadReceipt

from casting_chat.domain.entities.read_receipt import ReadReceipt
from casting_chat.domain.ports.repositories import ReadReceiptRepository
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.infrastructure.persistence.errors import wrap_prisma_errors


class PrismaReadReceiptRepository(ReadReceiptRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaReadReceipt) -> ReadReceipt:
        return ReadReceipt(
            message_id=MessageId(record.message_id),
            user_id=UserId(record.user_id),
            read_at=record.read_at,
        )

    @wrap_prisma_errors
    async def list_by_message(self, message_id: MessageId) -> list[ReadReceipt]:
        records = await self._prisma.messagereadreceipt.find_many(
            where={"message_id": message_id.value},
            order={"read_at": "asc"},
        )
        return [self._to_entity(record) for record in records]

    @wrap_prisma_errors
    async def add_many(self, receipts: list[ReadReceipt]) -> int:
        if not receipts:
            return 0
        return await self._prisma.messagereadreceipt.create_many(
            data=[
                {
                    "message_id": r.message_id.value,
                    "user_id": r.user_id.value,
                    "read_at": r.read_at,
                }
                for r in receipts
            ],
            skip_duplicates=True,
        )

    @wrap_prisma_errors
    async def delete_by_messages(self, message_ids: list[MessageId]) -> int:
        if not message_ids:
            return 0
        return await self._prisma.messagereadreceipt.delete_many(
            where={"message_id": {"in": [mid.value for mid in message_ids]}}
        )
