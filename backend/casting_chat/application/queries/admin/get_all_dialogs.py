"""
GetAllDialogs Query - platform-admin listing of every dialog.

Returns lightweight dialog views (no participants, unread counts or last
message) with page/page_size paging.
"""

import math
from dataclasses import dataclass, field

from casting_chat.application.common.interfaces import Query, QueryHandler
from casting_chat.application.dto.dialog import DialogListResponse, DialogResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.criteria import DialogCriteria
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors


@dataclass(frozen=True)
class GetAllDialogsQuery(Query[DialogListResponse]):
    admin_id: UserId
    criteria: DialogCriteria = field(default_factory=DialogCriteria)


class GetAllDialogsHandler(QueryHandler[DialogListResponse]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, query: GetAllDialogsQuery) -> DialogListResponse:
        await self._access_guard.require_admin_user(query.admin_id)

        criteria = query.criteria
        dialogs, total = await self._uow.repositories().dialogs.search(criteria)
        return DialogListResponse(
            dialogs=[
                DialogResponse(
                    id=d.id.value,
                    is_group=d.is_group,
                    title=d.title,
                    image_url=d.image_url,
                    casting_id=d.casting_id,
                    participants=[],
                    created_at=d.created_at,
                    updated_at=d.updated_at,
                )
                for d in dialogs
            ],
            total=total,
            page=criteria.page,
            page_size=criteria.page_size,
            total_pages=math.ceil(total / criteria.page_size) if total else 0,
        )
