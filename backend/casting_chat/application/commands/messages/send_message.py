"""
Send Message Command.

Steps:
1. Guard: sender must be a participant
2. Validate the type, the reply target (same dialog) and the forward source
3. Insert the message and bump the dialog's updated_at in one transaction
4. After commit, submit a NewMessageNotice to the dispatcher
5. Return the built MessageResponse
"""

import logging
from dataclasses import dataclass
from typing import Optional

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.dto.message import MessageResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.notification_dispatcher import (
    NewMessageNotice,
    NotificationDispatcher,
)
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.domain.entities.message import Message
from casting_chat.domain.exceptions import DomainValidationError, EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import ChatRepositories, UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import MessageType
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import record_message_sent, track_errors

logger = logging.getLogger(__name__)


async def post_message(repos: ChatRepositories, message: Message) -> None:
    """
    Insert a message inside the caller's transaction.

    Checks the reply/forward references and bumps the dialog's updated_at.
    """
    dialog = await repos.dialogs.get_by_id(message.dialog_id)
    if dialog is None:
        raise EntityNotFoundError(f"Dialog {message.dialog_id.value} not found")

    if message.reply_to_id is not None:
        reply_to = await repos.messages.get_by_id(message.reply_to_id)
        if reply_to is None or reply_to.dialog_id != message.dialog_id:
            raise DomainValidationError("Reply target must be a message of the same dialog")

    if message.forward_from_id is not None:
        if await repos.messages.get_by_id(message.forward_from_id) is None:
            raise EntityNotFoundError(f"Message {message.forward_from_id.value} not found")

    await repos.messages.add(message)
    dialog.touch(message.created_at)
    await repos.dialogs.save(dialog)


@dataclass(frozen=True)
class SendMessageCommand(Command[MessageResponse]):
    sender_id: UserId
    dialog_id: DialogId
    type: str
    content: str
    reply_to_id: Optional[MessageId] = None
    forward_from_id: Optional[MessageId] = None


class SendMessageHandler(CommandHandler[MessageResponse]):
    def __init__(
        self,
        uow: UnitOfWork,
        access_guard: AccessGuard,
        response_builder: ResponseBuilder,
        dispatcher: NotificationDispatcher,
    ):
        self._uow = uow
        self._access_guard = access_guard
        self._response_builder = response_builder
        self._dispatcher = dispatcher

    @track_errors
    async def execute(self, command: SendMessageCommand) -> MessageResponse:
        async with self._uow.transaction() as repos:
            await self._access_guard.require_member(repos, command.dialog_id, command.sender_id)
            message_type = MessageType.parse(command.type)
            message = Message.create(
                dialog_id=command.dialog_id,
                sender_id=command.sender_id,
                type=message_type,
                content=command.content,
                reply_to_id=command.reply_to_id,
                forward_from_id=command.forward_from_id,
            )
            await post_message(repos, message)

        record_message_sent(message.type.value)
        logger.debug(
            f"[SendMessage] {command.sender_id.value} -> dialog {command.dialog_id.value}: {message.id.value}"
        )
        self._dispatcher.submit(
            NewMessageNotice(
                dialog_id=message.dialog_id.value,
                sender_id=message.sender_id.value,
                message_id=message.id.value,
            )
        )
        return await self._response_builder.build_message(self._uow.repositories(), message)
