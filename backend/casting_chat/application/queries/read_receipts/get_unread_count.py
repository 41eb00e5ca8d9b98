"""Get Unread Count Query."""

from dataclasses import dataclass

from casting_chat.application.common.interfaces import Query, QueryHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors


@dataclass(frozen=True)
class GetUnreadCountQuery(Query[int]):
    dialog_id: DialogId
    user_id: UserId


class GetUnreadCountHandler(QueryHandler[int]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, query: GetUnreadCountQuery) -> int:
        repos = self._uow.repositories()
        await self._access_guard.require_member(repos, query.dialog_id, query.user_id)
        return await repos.messages.count_unread(query.dialog_id, query.user_id)
