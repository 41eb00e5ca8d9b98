"""
GetMessages Query - One page of a dialog's messages, newest first.

Paging metadata follows the offset/limit of the criteria:
page = offset // limit + 1, total_pages = ceil(total / limit).
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from casting_chat.application.common.interfaces import Query, QueryHandler
from casting_chat.application.dto.message import MessageListResponse, MessageResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.config.policies import ChatPolicy
from casting_chat.domain.entities.message import Message
from casting_chat.domain.ports.unit_of_work import ChatRepositories, UnitOfWork
from casting_chat.domain.value_objects.criteria import MessageCriteria
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import MetricsErrorType, record_error, track_errors

logger = logging.getLogger(__name__)


async def build_message_page(
    response_builder: ResponseBuilder,
    repos: ChatRepositories,
    messages: list[Message],
    total: int,
    criteria: MessageCriteria,
) -> MessageListResponse:
    views: list[MessageResponse] = []
    for message in messages:
        try:
            views.append(await response_builder.build_message(repos, message))
        except Exception as e:
            logger.warning(f"[GetMessages] Skipping message {message.id.value}: {e}")
            record_error(MetricsErrorType.PROJECTION_FAILED)

    total_pages = math.ceil(total / criteria.limit) if total else 0
    return MessageListResponse(
        messages=views,
        total=total,
        page=criteria.page,
        page_size=criteria.limit,
        total_pages=total_pages,
        has_more=criteria.offset + len(messages) < total,
    )


@dataclass(frozen=True)
class GetMessagesQuery(Query[MessageListResponse]):
    dialog_id: DialogId
    user_id: UserId
    # None means the first page at the configured page size
    criteria: Optional[MessageCriteria] = None


class GetMessagesHandler(QueryHandler[MessageListResponse]):
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
    async def execute(self, query: GetMessagesQuery) -> MessageListResponse:
        repos = self._uow.repositories()
        await self._access_guard.require_member(repos, query.dialog_id, query.user_id)
        criteria = query.criteria or MessageCriteria(limit=self._policy.message_page_limit)
        messages, total = await repos.messages.get_by_dialog(query.dialog_id, criteria)
        return await build_message_page(self._response_builder, repos, messages, total, criteria)
