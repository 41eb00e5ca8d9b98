"""
Mark Messages As Read Command.

Creates a receipt for every visible message of the dialog that the reader
did not send and has not read yet. Running it twice changes nothing.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.entities.read_receipt import ReadReceipt
from casting_chat.domain.ports.unit_of_work import ChatRepositories, UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


async def mark_dialog_read(repos: ChatRepositories, dialog_id: DialogId, user_id: UserId) -> int:
    """Receipt all unread messages of the dialog for user_id. Returns the number created."""
    unread = await repos.messages.get_unread(dialog_id, user_id)
    if not unread:
        return 0
    now = datetime.now(timezone.utc)
    return await repos.receipts.add_many(
        [ReadReceipt(message_id=m.id, user_id=user_id, read_at=now) for m in unread]
    )


@dataclass(frozen=True)
class MarkMessagesAsReadCommand(Command[int]):
    user_id: UserId
    dialog_id: DialogId


class MarkMessagesAsReadHandler(CommandHandler[int]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, command: MarkMessagesAsReadCommand) -> int:
        async with self._uow.transaction() as repos:
            await self._access_guard.require_member(repos, command.dialog_id, command.user_id)
            created = await mark_dialog_read(repos, command.dialog_id, command.user_id)
        if created:
            logger.debug(
                f"[MarkMessagesAsRead] {created} message(s) read by {command.user_id.value} in {command.dialog_id.value}"
            )
        return created
