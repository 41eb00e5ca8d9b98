"""Delete User Messages Command - platform admin soft-deletes a user's messages in a dialog."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.exceptions import EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteUserMessagesCommand(Command[int]):
    admin_id: UserId
    dialog_id: DialogId
    user_id: UserId


class DeleteUserMessagesHandler(CommandHandler[int]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, command: DeleteUserMessagesCommand) -> int:
        await self._access_guard.require_admin_user(command.admin_id)

        async with self._uow.transaction() as repos:
            if await repos.dialogs.get_by_id(command.dialog_id) is None:
                raise EntityNotFoundError(f"Dialog {command.dialog_id.value} not found")
            deleted = await repos.messages.soft_delete_by_sender(
                command.dialog_id, command.user_id, datetime.now(timezone.utc)
            )

        logger.info(
            f"[DeleteUserMessages] {deleted} message(s) of {command.user_id.value} deleted in {command.dialog_id.value} by admin {command.admin_id.value}"
        )
        return deleted
