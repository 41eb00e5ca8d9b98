"""Get Dialog Query - member only."""

from dataclasses import dataclass

from casting_chat.application.common.interfaces import Query, QueryHandler
from casting_chat.application.dto.dialog import DialogResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.domain.exceptions import EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors


@dataclass(frozen=True)
class GetDialogQuery(Query[DialogResponse]):
    dialog_id: DialogId
    user_id: UserId


class GetDialogHandler(QueryHandler[DialogResponse]):
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
    async def execute(self, query: GetDialogQuery) -> DialogResponse:
        repos = self._uow.repositories()
        await self._access_guard.require_member(repos, query.dialog_id, query.user_id)
        dialog = await repos.dialogs.get_by_id(query.dialog_id)
        if dialog is None:
            raise EntityNotFoundError(f"Dialog {query.dialog_id.value} not found")
        return await self._response_builder.build_dialog(repos, dialog, query.user_id)
