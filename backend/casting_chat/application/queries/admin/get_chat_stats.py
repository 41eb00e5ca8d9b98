"""GetChatStats Query - platform-wide dialog and message counters."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from casting_chat.application.common.interfaces import Query, QueryHandler
from casting_chat.application.dto.admin import ChatStatsResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

ACTIVE_DIALOG_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class GetChatStatsQuery(Query[ChatStatsResponse]):
    admin_id: UserId


class GetChatStatsHandler(QueryHandler[ChatStatsResponse]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, query: GetChatStatsQuery) -> ChatStatsResponse:
        await self._access_guard.require_admin_user(query.admin_id)

        repos = self._uow.repositories()
        now = datetime.now(timezone.utc)
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return ChatStatsResponse(
            total_dialogs=await repos.dialogs.count(),
            total_messages=await repos.messages.count(),
            active_dialogs=await repos.dialogs.count(updated_since=now - ACTIVE_DIALOG_WINDOW),
            messages_today=await repos.messages.count(created_since=start_of_day),
            messages_this_week=await repos.messages.count(created_since=now - timedelta(days=7)),
            messages_by_type=await repos.messages.count_by_type(),
        )
