"""Add Participants Command - owner/admin adds members; existing members are skipped."""

import logging
from dataclasses import dataclass

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.entities.participant import Participant
from casting_chat.domain.exceptions import DomainValidationError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import ParticipantRole
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddParticipantsCommand(Command[int]):
    actor_id: UserId
    dialog_id: DialogId
    user_ids: tuple[UserId, ...]


class AddParticipantsHandler(CommandHandler[int]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, command: AddParticipantsCommand) -> int:
        """Returns the number of participants actually added."""
        async with self._uow.transaction() as repos:
            actor = await self._access_guard.require_member(
                repos, command.dialog_id, command.actor_id
            )
            self._access_guard.require_role(actor, ParticipantRole.OWNER, ParticipantRole.ADMIN)
            if not command.user_ids:
                raise DomainValidationError("user_ids cannot be empty")

            new_members: list[Participant] = []
            for user_id in dict.fromkeys(command.user_ids):
                await self._access_guard.require_user(user_id)
                if await self._access_guard.is_member(repos, command.dialog_id, user_id):
                    continue
                new_members.append(Participant.create(command.dialog_id, user_id))

            if new_members:
                await repos.participants.add_many(new_members)

        logger.info(
            f"[AddParticipants] {len(new_members)} participant(s) added to {command.dialog_id.value}"
        )
        return len(new_members)
