"""
Forward Message Command.

Copies a message into each target dialog as a "forward" message. Targets the
caller is not a member of are skipped; a failure in one target is logged and
does not stop the others.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.commands.messages.send_message import post_message
from casting_chat.application.dto.message import MessageResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.notification_dispatcher import (
    NewMessageNotice,
    NotificationDispatcher,
)
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.domain.entities.message import Message
from casting_chat.domain.exceptions import EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import MessageType
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import (
    error_type_for,
    record_error,
    record_message_sent,
    track_errors,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForwardMessageCommand(Command[Optional[MessageResponse]]):
    user_id: UserId
    message_id: MessageId
    target_dialog_ids: tuple[DialogId, ...]


class ForwardMessageHandler(CommandHandler[Optional[MessageResponse]]):
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
    async def execute(self, command: ForwardMessageCommand) -> Optional[MessageResponse]:
        """
        Returns:
            The last successfully forwarded message, or None if no target succeeded

        Raises:
            EntityNotFoundError: If the original message doesn't exist
            AccessDeniedError: If the caller cannot read the original message
        """
        repos = self._uow.repositories()
        original = await repos.messages.get_by_id(command.message_id)
        if original is None:
            raise EntityNotFoundError(f"Message {command.message_id.value} not found")
        await self._access_guard.require_member(repos, original.dialog_id, command.user_id)

        last: Optional[Message] = None
        for dialog_id in command.target_dialog_ids:
            try:
                async with self._uow.transaction() as tx_repos:
                    if not await self._access_guard.is_member(tx_repos, dialog_id, command.user_id):
                        logger.debug(
                            f"[ForwardMessage] Skipping dialog {dialog_id.value}: not a member"
                        )
                        continue
                    forwarded = Message.create(
                        dialog_id=dialog_id,
                        sender_id=command.user_id,
                        type=MessageType.FORWARD,
                        content=original.content,
                        forward_from_id=original.id,
                    )
                    await post_message(tx_repos, forwarded)
            except Exception as e:
                logger.warning(
                    f"[ForwardMessage] Failed to forward {original.id.value} to {dialog_id.value}: {e}"
                )
                record_error(error_type_for(e))
                continue

            record_message_sent(forwarded.type.value)
            self._dispatcher.submit(
                NewMessageNotice(
                    dialog_id=forwarded.dialog_id.value,
                    sender_id=forwarded.sender_id.value,
                    message_id=forwarded.id.value,
                )
            )
            last = forwarded

        if last is None:
            return None
        return await self._response_builder.build_message(self._uow.repositories(), last)
