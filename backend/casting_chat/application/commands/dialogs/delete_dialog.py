"""
Delete Dialog Command - owner only.

Removes the dialog with its messages, reactions, receipts and participants
in one transaction. Attachment files of the removed messages are deleted
through the upload port after commit, best effort.
"""

import logging
from dataclasses import dataclass

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.attachment_linker import AttachmentLinker
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import ParticipantRole
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteDialogCommand(Command[bool]):
    user_id: UserId
    dialog_id: DialogId


class DeleteDialogHandler(CommandHandler[bool]):
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
    async def execute(self, command: DeleteDialogCommand) -> bool:
        async with self._uow.transaction() as repos:
            participant = await self._access_guard.require_member(
                repos, command.dialog_id, command.user_id
            )
            self._access_guard.require_role(participant, ParticipantRole.OWNER)

            message_ids = await repos.messages.list_ids_by_dialog(command.dialog_id)
            await repos.reactions.delete_by_messages(message_ids)
            await repos.receipts.delete_by_messages(message_ids)
            await repos.messages.delete_by_dialog(command.dialog_id)
            await repos.participants.delete_by_dialog(command.dialog_id)
            deleted = await repos.dialogs.delete(command.dialog_id)

        logger.info(
            f"[DeleteDialog] Dialog {command.dialog_id.value} deleted with {len(message_ids)} message(s)"
        )
        await self._attachment_linker.remove_for_messages(command.user_id, message_ids)
        return deleted
