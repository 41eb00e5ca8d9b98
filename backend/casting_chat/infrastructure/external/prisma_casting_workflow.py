"""Prisma CastingWorkflow - reads castings that chats can be opened for."""

from typing import Optional

from prisma import Prisma

from casting_chat.domain.ports.casting_workflow import CastingRecord, CastingWorkflow
from casting_chat.infrastructure.persistence.errors import wrap_prisma_errors


class PrismaCastingWorkflow(CastingWorkflow):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    @wrap_prisma_errors
    async def find_casting_by_id(self, casting_id: str) -> Optional[CastingRecord]:
        record = await self._prisma.casting.find_unique(where={"id": casting_id})
        return CastingRecord(id=record.id, title=record.title) if record else None
