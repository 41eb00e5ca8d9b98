"""
Clean Old Messages Command - platform admin.

Hard-deletes every message created more than `days` days ago, together with
its reactions and read receipts, in one transaction. Attachment files are
removed through the upload port after commit, best effort.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.dto.admin import CleanupResultResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.attachment_linker import AttachmentLinker
from casting_chat.domain.exceptions import DomainValidationError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanOldMessagesCommand(Command[CleanupResultResponse]):
    admin_id: UserId
    days: int


class CleanOldMessagesHandler(CommandHandler[CleanupResultResponse]):
    def __init__(
        self,
        uow: UnitOfWork,
        access_guard: AccessGuard,
        attachment_linker: AttachmentLinker,
    ):
        self._uow = uow
        self._access_guard = access_guard
        self._attachment_linker = attachment_linker

    @track_errors
    async def execute(self, command: CleanOldMessagesCommand) -> CleanupResultResponse:
        await self._access_guard.require_admin_user(command.admin_id)
        if command.days < 1:
            raise DomainValidationError("days must be at least 1")

        cutoff = datetime.now(timezone.utc) - timedelta(days=command.days)
        async with self._uow.transaction() as repos:
            message_ids = await repos.messages.list_created_before(cutoff)
            await repos.reactions.delete_by_messages(message_ids)
            await repos.receipts.delete_by_messages(message_ids)
            deleted = await repos.messages.delete_many(message_ids)

        removed = await self._attachment_linker.remove_for_messages(command.admin_id, message_ids)
        logger.info(
            f"[CleanOldMessages] Removed {deleted} message(s) older than {command.days} day(s), {removed} attachment(s)"
        )
        return CleanupResultResponse(deleted_messages=deleted, deleted_attachments=removed)
