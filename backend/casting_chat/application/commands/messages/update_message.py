"""Update Message Command - sender-only edit within the edit window."""

import logging
from dataclasses import dataclass

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.dto.message import MessageResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.config.policies import ChatPolicy
from casting_chat.domain.exceptions import EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateMessageCommand(Command[MessageResponse]):
    user_id: UserId
    message_id: MessageId
    content: str


class UpdateMessageHandler(CommandHandler[MessageResponse]):
    def __init__(
        self,
        uow: UnitOfWork,
        access_guard: AccessGuard,
        response_builder: ResponseBuilder,
        policy: ChatPolicy,
    ):
        self._uow = uow
        self._access_guard = access_guard
        self._response_builder = response_builder
        self._policy = policy

    @track_errors
    async def execute(self, command: UpdateMessageCommand) -> MessageResponse:
        async with self._uow.transaction() as repos:
            message = await repos.messages.get_by_id(command.message_id)
            if message is None:
                raise EntityNotFoundError(f"Message {command.message_id.value} not found")
            await self._access_guard.require_member(repos, message.dialog_id, command.user_id)

            message.edit(command.user_id, command.content, self._policy.edit_window)
            await repos.messages.save(message)

        logger.debug(f"[UpdateMessage] Message {message.id.value} edited")
        return await self._response_builder.build_message(self._uow.repositories(), message)
