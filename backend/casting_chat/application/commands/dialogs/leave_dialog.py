"""Leave Dialog Command - self-removal; the owner must hand over ownership first."""

import logging
from dataclasses import dataclass

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.exceptions import DomainValidationError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaveDialogCommand(Command[bool]):
    user_id: UserId
    dialog_id: DialogId


class LeaveDialogHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, command: LeaveDialogCommand) -> bool:
        async with self._uow.transaction() as repos:
            participant = await self._access_guard.require_member(
                repos, command.dialog_id, command.user_id
            )
            if participant.is_owner:
                raise DomainValidationError(
                    "dialog owner must transfer ownership before leaving"
                )
            await repos.participants.delete(command.dialog_id, command.user_id)

        logger.info(f"[LeaveDialog] {command.user_id.value} left dialog {command.dialog_id.value}")
        return True
