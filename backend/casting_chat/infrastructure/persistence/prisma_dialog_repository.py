"""
Prisma Dialog Repository - Implements DialogRepository port.

Mapping:
- Prisma model fields: id, is_group, title, image_url, casting_id, created_at, updated_at
- Domain entity: Dialog with DialogId
"""

from datetime import datetime
from typing import Any, Optional

from prisma import Prisma
from prisma.models import Dialog as PrismaDialog

from casting_chat.domain.entities.dialog import Dialog
from casting_chat.domain.ports.repositories import DialogRepository
from casting_chat.domain.value_objects.criteria import DialogCriteria
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.infrastructure.persistence.errors import wrap_prisma_errors


class PrismaDialogRepository(DialogRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaDialog) -> Dialog:
        """Map Prisma record to domain entity."""
        return Dialog(
            id=DialogId(record.id),
            is_group=record.is_group,
            created_at=record.created_at,
            updated_at=record.updated_at,
            title=record.title,
            image_url=record.image_url,
            casting_id=record.casting_id,
        )

    @wrap_prisma_errors
    async def get_by_id(self, dialog_id: DialogId) -> Optional[Dialog]:
        record = await self._prisma.dialog.find_unique(where={"id": dialog_id.value})
        return self._to_entity(record) if record else None

    @wrap_prisma_errors
    async def get_by_casting(self, casting_id: str) -> Optional[Dialog]:
        record = await self._prisma.dialog.find_unique(where={"casting_id": casting_id})
        return self._to_entity(record) if record else None

    @wrap_prisma_errors
    async def get_by_user(self, user_id: UserId) -> list[Dialog]:
        """Get dialogs of the user, ordered by updated_at desc."""
        records = await self._prisma.dialog.find_many(
            where={"participants": {"some": {"user_id": user_id.value}}},
            order={"updated_at": "desc"},
        )
        return [self._to_entity(record) for record in records]

    @wrap_prisma_errors
    async def find_direct_between(
        self, user1_id: UserId, user2_id: UserId
    ) -> Optional[Dialog]:
        record = await self._prisma.dialog.find_first(
            where={
                "is_group": False,
                "AND": [
                    {"participants": {"some": {"user_id": user1_id.value}}},
                    {"participants": {"some": {"user_id": user2_id.value}}},
                ],
            },
            order={"updated_at": "desc"},
        )
        return self._to_entity(record) if record else None

    @wrap_prisma_errors
    async def search(self, criteria: DialogCriteria) -> tuple[list[Dialog], int]:
        where: dict[str, Any] = {}
        if criteria.is_group is not None:
            where["is_group"] = criteria.is_group
        if criteria.casting_id is not None:
            where["casting_id"] = criteria.casting_id
        if criteria.user_id is not None:
            where["participants"] = {"some": {"user_id": criteria.user_id.value}}
        created_at: dict[str, datetime] = {}
        if criteria.start_date is not None:
            created_at["gte"] = criteria.start_date
        if criteria.end_date is not None:
            created_at["lte"] = criteria.end_date
        if created_at:
            where["created_at"] = created_at

        total = await self._prisma.dialog.count(where=where)
        records = await self._prisma.dialog.find_many(
            where=where,
            order={"created_at": "desc"},
            skip=criteria.offset,
            take=criteria.page_size,
        )
        return [self._to_entity(record) for record in records], total

    @wrap_prisma_errors
    async def add(self, dialog: Dialog) -> None:
        await self._prisma.dialog.create(
            data={
                "id": dialog.id.value,
                "is_group": dialog.is_group,
                "title": dialog.title,
                "image_url": dialog.image_url,
                "casting_id": dialog.casting_id,
                "created_at": dialog.created_at,
                "updated_at": dialog.updated_at,
            }
        )

    @wrap_prisma_errors
    async def save(self, dialog: Dialog) -> None:
        await self._prisma.dialog.update(
            where={"id": dialog.id.value},
            data={
                "title": dialog.title,
                "image_url": dialog.image_url,
                "updated_at": dialog.updated_at,
            },
        )

    @wrap_prisma_errors
    async def delete(self, dialog_id: DialogId) -> bool:
        """Delete dialog by ID. Returns True if deleted."""
        deleted = await self._prisma.dialog.delete_many(where={"id": dialog_id.value})
        return deleted > 0

    @wrap_prisma_errors
    async def count(self, updated_since: Optional[datetime] = None) -> int:
        where = {"updated_at": {"gte": updated_since}} if updated_since else {}
        return await self._prisma.dialog.count(where=where)
