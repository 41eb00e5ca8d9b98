"""Prisma Participant Repository - Implements ParticipantRepository port."""

from typing import Optional

from prisma import Prisma
from prisma.models import DialogParticipant as PrismaParticipant

from casting_chat.domain.entities.participant import Participant
from casting_chat.domain.ports.repositories import ParticipantRepository
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import ParticipantRole
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.infrastructure.persistence.errors import wrap_prisma_errors


def _key(dialog_id: DialogId, user_id: UserId) -> dict:
    return {"dialog_id_user_id": {"dialog_id": dialog_id.value, "user_id": user_id.value}}


class PrismaParticipantRepository(ParticipantRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaParticipant) -> Participant:
        return Participant(
            dialog_id=DialogId(record.dialog_id),
            user_id=UserId(record.user_id),
            role=ParticipantRole(record.role),
            joined_at=record.joined_at,
            last_seen_at=record.last_seen_at,
            is_muted=record.is_muted,
            typing_until=record.typing_until,
        )

    @wrap_prisma_errors
    async def get(self, dialog_id: DialogId, user_id: UserId) -> Optional[Participant]:
        record = await self._prisma.dialogparticipant.find_unique(where=_key(dialog_id, user_id))
        return self._to_entity(record) if record else None

    @wrap_prisma_errors
    async def list_by_dialog(self, dialog_id: DialogId) -> list[Participant]:
        records = await self._prisma.dialogparticipant.find_many(
            where={"dialog_id": dialog_id.value},
            order={"joined_at": "asc"},
        )
        return [self._to_entity(record) for record in records]

    @wrap_prisma_errors
    async def add_many(self, participants: list[Participant]) -> None:
        await self._prisma.dialogparticipant.create_many(
            data=[
                {
                    "dialog_id": p.dialog_id.value,
                    "user_id": p.user_id.value,
                    "role": p.role.value,
                    "is_muted": p.is_muted,
                    "joined_at": p.joined_at,
                    "last_seen_at": p.last_seen_at,
                }
                for p in participants
            ]
        )

    @wrap_prisma_errors
    async def save(self, participant: Participant) -> None:
        await self._prisma.dialogparticipant.update(
            where=_key(participant.dialog_id, participant.user_id),
            data={
                "role": participant.role.value,
                "is_muted": participant.is_muted,
                "last_seen_at": participant.last_seen_at,
                "typing_until": participant.typing_until,
            },
        )

    @wrap_prisma_errors
    async def delete(self, dialog_id: DialogId, user_id: UserId) -> bool:
        deleted = await self._prisma.dialogparticipant.delete_many(
            where={"dialog_id": dialog_id.value, "user_id": user_id.value}
        )
        return deleted > 0

    @wrap_prisma_errors
    async def delete_by_dialog(self, dialog_id: DialogId) -> int:
        return await self._prisma.dialogparticipant.delete_many(
            where={"dialog_id": dialog_id.value}
        )
