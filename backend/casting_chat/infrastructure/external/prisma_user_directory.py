"""Prisma UserDirectory - reads the platform users table."""

from typing import Optional

from prisma import Prisma

from casting_chat.domain.ports.user_directory import UserDirectory, UserRecord
from casting_chat.infrastructure.persistence.errors import wrap_prisma_errors


class PrismaUserDirectory(UserDirectory):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    @wrap_prisma_errors
    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        record = await self._prisma.user.find_unique(where={"id": user_id})
        if record is None:
            return None
        return UserRecord(
            id=record.id,
            display_name=record.display_name or record.email,
            role=record.role,
        )
