"""Update Dialog Command - title and image, owner or admin only."""

import logging
from dataclasses import dataclass
from typing import Optional

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.dto.dialog import DialogResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.domain.exceptions import EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import ParticipantRole
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateDialogCommand(Command[DialogResponse]):
    user_id: UserId
    dialog_id: DialogId
    title: Optional[str] = None
    image_url: Optional[str] = None


class UpdateDialogHandler(CommandHandler[DialogResponse]):
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
    async def execute(self, command: UpdateDialogCommand) -> DialogResponse:
        async with self._uow.transaction() as repos:
            participant = await self._access_guard.require_member(
                repos, command.dialog_id, command.user_id
            )
            self._access_guard.require_role(
                participant, ParticipantRole.OWNER, ParticipantRole.ADMIN
            )
            dialog = await repos.dialogs.get_by_id(command.dialog_id)
            if dialog is None:
                raise EntityNotFoundError(f"Dialog {command.dialog_id.value} not found")
            dialog.update(title=command.title, image_url=command.image_url)
            await repos.dialogs.save(dialog)

        logger.info(f"[UpdateDialog] Dialog {dialog.id.value} updated by {command.user_id.value}")
        return await self._response_builder.build_dialog(
            self._uow.repositories(), dialog, command.user_id
        )
