"""
Send Message With Attachments Command.

The message is inserted first, then each file is uploaded against the new
message id inside the same unit of work. Any upload failure deletes the
files already uploaded and rolls the message back; nothing is left behind.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.commands.messages.send_message import post_message
from casting_chat.application.dto.message import MessageResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.attachment_linker import AttachmentLinker
from casting_chat.application.services.notification_dispatcher import (
    NewMessageNotice,
    NotificationDispatcher,
)
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.domain.entities.message import Message
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.ports.upload_service import AttachmentFile, UploadRecord
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import MessageType
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import record_message_sent, track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendMessageWithAttachmentsCommand(Command[MessageResponse]):
    sender_id: UserId
    dialog_id: DialogId
    type: str
    content: str
    files: tuple[AttachmentFile, ...] = field(default_factory=tuple)
    reply_to_id: Optional[MessageId] = None
    forward_from_id: Optional[MessageId] = None


class SendMessageWithAttachmentsHandler(CommandHandler[MessageResponse]):
    def __init__(
        self,
        uow: UnitOfWork,
        access_guard: AccessGuard,
        attachment_linker: AttachmentLinker,
        response_builder: ResponseBuilder,
        dispatcher: NotificationDispatcher,
    ):
        self._uow = uow
        self._access_guard = access_guard
        self._attachment_linker = attachment_linker
        self._response_builder = response_builder
        self._dispatcher = dispatcher

    @track_errors
    async def execute(self, command: SendMessageWithAttachmentsCommand) -> MessageResponse:
        files = list(command.files)
        uploaded: list[UploadRecord] = []
        try:
            async with self._uow.transaction() as repos:
                await self._access_guard.require_member(
                    repos, command.dialog_id, command.sender_id
                )
                message_type = MessageType.parse(command.type)
                # Reject bad files before anything is written or uploaded
                self._attachment_linker.validate(files)
                message = Message.create(
                    dialog_id=command.dialog_id,
                    sender_id=command.sender_id,
                    type=message_type,
                    content=command.content,
                    reply_to_id=command.reply_to_id,
                    forward_from_id=command.forward_from_id,
                )
                await post_message(repos, message)
                uploaded = await self._attachment_linker.link(
                    command.sender_id, message.id, files
                )
        except Exception:
            # link() cleans up after its own failures; this covers a failed commit
            if uploaded:
                await self._attachment_linker.unlink(command.sender_id, uploaded)
            raise

        record_message_sent(message.type.value)
        logger.info(
            f"[SendMessageWithAttachments] Message {message.id.value} sent with {len(uploaded)} attachment(s)"
        )
        self._dispatcher.submit(
            NewMessageNotice(
                dialog_id=message.dialog_id.value,
                sender_id=message.sender_id.value,
                message_id=message.id.value,
            )
        )
        return await self._response_builder.build_message(self._uow.repositories(), message)
