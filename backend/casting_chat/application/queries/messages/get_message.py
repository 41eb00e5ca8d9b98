"""Get Message Query."""

from dataclasses import dataclass

from casting_chat.application.common.interfaces import Query, QueryHandler
from casting_chat.application.dto.message import MessageResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.domain.exceptions import EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors


@dataclass(frozen=True)
class GetMessageQuery(Query[MessageResponse]):
    message_id: MessageId
    user_id: UserId


class GetMessageHandler(QueryHandler[MessageResponse]):
    def __init__(
        self,
        uow: UnitOfWork,
        access_guard: AccessGuard,
        response_builder: ResponseBuilder,
    ):
        self._uow = uow
        self._access_guard = access_guard
        self._response_builder = response_builder

    @track_errors
    async def execute(self, query: GetMessageQuery) -> MessageResponse:
        """
        Raises:
            EntityNotFoundError: If the message doesn't exist or was deleted
            AccessDeniedError: If the user is not a member of the message's dialog
        """
        repos = self._uow.repositories()
        message = await repos.messages.get_by_id(query.message_id)
        if message is None:
            raise EntityNotFoundError(f"Message {query.message_id.value} not found")
        await self._access_guard.require_member(repos, message.dialog_id, query.user_id)
        return await self._response_builder.build_message(repos, message)
