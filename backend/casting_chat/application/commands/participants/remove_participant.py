"""Remove Participant Command - owner/admin removes a member; the owner cannot be removed."""

import logging
from dataclasses import dataclass

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.exceptions import AccessDeniedError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import ParticipantRole
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoveParticipantCommand(Command[bool]):
    actor_id: UserId
    dialog_id: DialogId
    target_id: UserId


class RemoveParticipantHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, command: RemoveParticipantCommand) -> bool:
        async with self._uow.transaction() as repos:
            actor = await self._access_guard.require_member(
                repos, command.dialog_id, command.actor_id
            )
            self._access_guard.require_role(actor, ParticipantRole.OWNER, ParticipantRole.ADMIN)

            target = await self._access_guard.get_participant(
                repos, command.dialog_id, command.target_id
            )
            if target.is_owner:
                raise AccessDeniedError("cannot remove dialog owner")
            await repos.participants.delete(command.dialog_id, command.target_id)

        logger.info(
            f"[RemoveParticipant] {command.target_id.value} removed from {command.dialog_id.value} by {command.actor_id.value}"
        )
        return True
