"""
GetUserDialogs Query - every dialog the user belongs to, newest activity first.

A dialog whose view cannot be built is logged and left out rather than
failing the whole list.
"""

import logging
from dataclasses import dataclass

from casting_chat.application.common.interfaces import Query, QueryHandler
from casting_chat.application.dto.dialog import DialogResponse
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import MetricsErrorType, record_error, track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetUserDialogsQuery(Query[list[DialogResponse]]):
    user_id: UserId


class GetUserDialogsHandler(QueryHandler[list[DialogResponse]]):
    def __init__(self, uow: UnitOfWork, response_builder: ResponseBuilder):
        self._uow = uow
        self._response_builder = response_builder

    @track_errors
    async def execute(self, query: GetUserDialogsQuery) -> list[DialogResponse]:
        repos = self._uow.repositories()
        responses: list[DialogResponse] = []
        for dialog in await repos.dialogs.get_by_user(query.user_id):
            try:
                responses.append(
                    await self._response_builder.build_dialog(repos, dialog, query.user_id)
                )
            except Exception as e:
                logger.warning(f"[GetUserDialogs] Skipping dialog {dialog.id.value}: {e}")
                record_error(MetricsErrorType.PROJECTION_FAILED)
        return responses
