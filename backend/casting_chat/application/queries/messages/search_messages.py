"""
SearchMessages Query - case-insensitive substring search within one dialog.

Scans at most ChatPolicy.search_scan_limit of the newest messages, so it is
only meant for small dialogs.
"""

import logging
from dataclasses import dataclass

from casting_chat.application.common.interfaces import Query, QueryHandler
from casting_chat.application.dto.message import MessageResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.config.policies import ChatPolicy
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.criteria import MessageCriteria
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import MetricsErrorType, record_error, track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchMessagesQuery(Query[list[MessageResponse]]):
    user_id: UserId
    dialog_id: DialogId
    query: str


class SearchMessagesHandler(QueryHandler[list[MessageResponse]]):
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
    async def execute(self, query: SearchMessagesQuery) -> list[MessageResponse]:
        repos = self._uow.repositories()
        await self._access_guard.require_member(repos, query.dialog_id, query.user_id)

        needle = query.query.lower()
        results: list[MessageResponse] = []
        offset = 0
        # Page through the newest messages until the scan limit is reached
        while offset < self._policy.search_scan_limit:
            criteria = MessageCriteria(
                limit=min(100, self._policy.search_scan_limit - offset), offset=offset
            )
            messages, total = await repos.messages.get_by_dialog(query.dialog_id, criteria)
            for message in messages:
                if needle not in message.content.lower():
                    continue
                try:
                    results.append(await self._response_builder.build_message(repos, message))
                except Exception as e:
                    logger.warning(f"[SearchMessages] Skipping message {message.id.value}: {e}")
                    record_error(MetricsErrorType.PROJECTION_FAILED)
            offset += len(messages)
            if not messages or offset >= total:
                break
        return results
