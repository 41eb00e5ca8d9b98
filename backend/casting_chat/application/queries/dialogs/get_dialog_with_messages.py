"""
GetDialogWithMessages Query - Open a dialog: its view plus one page of messages.

Runs in one transaction and marks the dialog's messages as read for the
caller. A failure to mark them is logged and does not fail the query.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from casting_chat.application.commands.read_receipts.mark_messages_as_read import (
    mark_dialog_read,
)
from casting_chat.application.common.interfaces import Query, QueryHandler
from casting_chat.application.dto.dialog import DialogWithMessagesResponse
from casting_chat.application.queries.messages.get_messages import build_message_page
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.config.policies import ChatPolicy
from casting_chat.domain.exceptions import EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.criteria import MessageCriteria
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import error_type_for, record_error, track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetDialogWithMessagesQuery(Query[DialogWithMessagesResponse]):
    dialog_id: DialogId
    user_id: UserId
    criteria: Optional[MessageCriteria] = None


class GetDialogWithMessagesHandler(QueryHandler[DialogWithMessagesResponse]):
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
    async def execute(self, query: GetDialogWithMessagesQuery) -> DialogWithMessagesResponse:
        async with self._uow.transaction() as repos:
            await self._access_guard.require_member(repos, query.dialog_id, query.user_id)
            dialog = await repos.dialogs.get_by_id(query.dialog_id)
            if dialog is None:
                raise EntityNotFoundError(f"Dialog {query.dialog_id.value} not found")

            criteria = query.criteria or MessageCriteria(limit=self._policy.message_page_limit)
            messages, total = await repos.messages.get_by_dialog(query.dialog_id, criteria)

            try:
                await mark_dialog_read(repos, query.dialog_id, query.user_id)
            except Exception as e:
                logger.warning(
                    f"[GetDialogWithMessages] Could not mark dialog {query.dialog_id.value} read: {e}"
                )
                record_error(error_type_for(e))

            dialog_view = await self._response_builder.build_dialog(repos, dialog, query.user_id)
            page = await build_message_page(
                self._response_builder, repos, messages, total, criteria
            )

        return DialogWithMessagesResponse(dialog=dialog_view, messages=page)
