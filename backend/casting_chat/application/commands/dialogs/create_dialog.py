"""
Create Dialog Command.

Steps:
1. Build the member list: [creator] + participant_ids, deduplicated in order
2. Check every id against the user directory before writing anything
3. Insert the dialog and its participants in one transaction
   (first entry becomes owner, the rest members)
4. Return the built DialogResponse for the creator
"""

import logging
from dataclasses import dataclass
from typing import Optional

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.dto.dialog import DialogResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.domain.entities.dialog import Dialog
from casting_chat.domain.entities.participant import Participant
from casting_chat.domain.exceptions import DomainValidationError
from casting_chat.domain.ports.unit_of_work import ChatRepositories, UnitOfWork
from casting_chat.domain.value_objects.enums import ParticipantRole
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import DialogKind, record_dialog_created, track_errors

logger = logging.getLogger(__name__)


async def insert_dialog(
    repos: ChatRepositories, dialog: Dialog, member_ids: list[UserId]
) -> list[Participant]:
    """Insert a dialog with member_ids[0] as owner. Runs inside the caller's transaction."""
    member_ids = list(dict.fromkeys(member_ids))
    if dialog.casting_id is not None:
        if await repos.dialogs.get_by_casting(dialog.casting_id) is not None:
            raise DomainValidationError(f"Dialog for casting {dialog.casting_id} already exists")

    participants = [
        Participant.create(
            dialog.id,
            user_id,
            ParticipantRole.OWNER if i == 0 else ParticipantRole.MEMBER,
        )
        for i, user_id in enumerate(member_ids)
    ]
    await repos.dialogs.add(dialog)
    await repos.participants.add_many(participants)
    return participants


@dataclass(frozen=True)
class CreateDialogCommand(Command[DialogResponse]):
    creator_id: UserId
    participant_ids: tuple[UserId, ...]
    is_group: bool = False
    title: Optional[str] = None
    image_url: Optional[str] = None
    casting_id: Optional[str] = None


class CreateDialogHandler(CommandHandler[DialogResponse]):
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
    async def execute(self, command: CreateDialogCommand) -> DialogResponse:
        if not command.participant_ids:
            raise DomainValidationError("participant_ids cannot be empty")

        member_ids = list(dict.fromkeys([command.creator_id, *command.participant_ids]))
        for user_id in member_ids:
            await self._access_guard.require_user(user_id)

        dialog = Dialog.create(
            is_group=command.is_group,
            title=command.title,
            image_url=command.image_url,
            casting_id=command.casting_id,
        )
        async with self._uow.transaction() as repos:
            await insert_dialog(repos, dialog, member_ids)

        if dialog.casting_id:
            kind = DialogKind.CASTING
        else:
            kind = DialogKind.GROUP if dialog.is_group else DialogKind.DIRECT
        record_dialog_created(kind)
        logger.info(
            f"[CreateDialog] Dialog {dialog.id.value} created by {command.creator_id.value} with {len(member_ids)} participant(s)"
        )
        return await self._response_builder.build_dialog(
            self._uow.repositories(), dialog, command.creator_id
        )
