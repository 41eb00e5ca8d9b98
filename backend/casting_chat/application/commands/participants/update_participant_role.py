"""
Update Participant Role Command - owner only.

Granting "owner" transfers ownership: the target becomes owner and the
previous owner becomes admin in the same transaction, so a dialog always
has exactly one owner.
"""

import logging
from dataclasses import dataclass

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.exceptions import DomainValidationError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import ParticipantRole
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateParticipantRoleCommand(Command[bool]):
    actor_id: UserId
    dialog_id: DialogId
    target_id: UserId
    new_role: str


class UpdateParticipantRoleHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, command: UpdateParticipantRoleCommand) -> bool:
        async with self._uow.transaction() as repos:
            actor = await self._access_guard.require_member(
                repos, command.dialog_id, command.actor_id
            )
            self._access_guard.require_role(actor, ParticipantRole.OWNER)
            new_role = ParticipantRole.parse(command.new_role)
            if command.target_id == command.actor_id:
                raise DomainValidationError("dialog owner cannot change their own role")

            target = await self._access_guard.get_participant(
                repos, command.dialog_id, command.target_id
            )
            target.role = new_role
            await repos.participants.save(target)

            if new_role == ParticipantRole.OWNER:
                actor.role = ParticipantRole.ADMIN
                await repos.participants.save(actor)

        logger.info(
            f"[UpdateParticipantRole] {command.target_id.value} is now {new_role.value} in {command.dialog_id.value}"
        )
        return True
