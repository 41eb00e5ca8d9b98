"""Delete Message Command - soft delete by the sender or a dialog owner/admin."""

import logging
from dataclasses import dataclass

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.exceptions import AccessDeniedError, EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteMessageCommand(Command[bool]):
    user_id: UserId
    message_id: MessageId


class DeleteMessageHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, command: DeleteMessageCommand) -> bool:
        async with self._uow.transaction() as repos:
            message = await repos.messages.get_by_id(command.message_id)
            if message is None:
                raise EntityNotFoundError(f"Message {command.message_id.value} not found")
            participant = await self._access_guard.require_member(
                repos, message.dialog_id, command.user_id
            )
            if message.sender_id != command.user_id and not participant.can_manage:
                raise AccessDeniedError("can only delete own messages")

            message.soft_delete()
            await repos.messages.save(message)

        logger.info(
            f"[DeleteMessage] Message {message.id.value} deleted by {command.user_id.value}"
        )
        return True
