"""GetDialogBetweenUsers Query - the direct (non-group) dialog shared by two users."""

from dataclasses import dataclass

from casting_chat.application.common.interfaces import Query, QueryHandler
from casting_chat.application.dto.dialog import DialogResponse
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.domain.exceptions import EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors


@dataclass(frozen=True)
class GetDialogBetweenUsersQuery(Query[DialogResponse]):
    user1_id: UserId
    user2_id: UserId


class GetDialogBetweenUsersHandler(QueryHandler[DialogResponse]):
    def __init__(self, uow: UnitOfWork, response_builder: ResponseBuilder):
        self._uow = uow
        self._response_builder = response_builder

    @track_errors
    async def execute(self, query: GetDialogBetweenUsersQuery) -> DialogResponse:
        repos = self._uow.repositories()
        dialog = await repos.dialogs.find_direct_between(query.user1_id, query.user2_id)
        if dialog is None:
            raise EntityNotFoundError(
                f"No dialog between {query.user1_id.value} and {query.user2_id.value}"
            )
        return await self._response_builder.build_dialog(repos, dialog, query.user1_id)
