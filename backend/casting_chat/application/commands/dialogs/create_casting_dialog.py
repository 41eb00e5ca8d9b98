"""
Create Casting Dialog Command.

Opens the one-to-one dialog between an employer and a model for a casting.
The employer owns it; the dialog is titled after the casting. Once committed,
a system message announcing the chat is posted in its own transaction; a
failure there is logged and does not undo the dialog.
"""

import logging
from dataclasses import dataclass

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.commands.dialogs.create_dialog import insert_dialog
from casting_chat.application.commands.messages.send_message import post_message
from casting_chat.application.dto.dialog import DialogResponse
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.application.services.response_builder import ResponseBuilder
from casting_chat.domain.entities.dialog import Dialog
from casting_chat.domain.entities.message import Message
from casting_chat.domain.exceptions import DomainValidationError, EntityNotFoundError
from casting_chat.domain.ports.casting_workflow import CastingWorkflow
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import (
    DialogKind,
    MetricsErrorType,
    record_dialog_created,
    record_error,
    record_message_sent,
    track_errors,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateCastingDialogCommand(Command[DialogResponse]):
    casting_id: str
    employer_id: UserId
    model_id: UserId


class CreateCastingDialogHandler(CommandHandler[DialogResponse]):
    def __init__(
        self,
        uow: UnitOfWork,
        access_guard: AccessGuard,
        response_builder: ResponseBuilder,
        casting_workflow: CastingWorkflow,
    ):
        self._uow = uow
        self._access_guard = access_guard
        self._response_builder = response_builder
        self._casting_workflow = casting_workflow

    @track_errors
    async def execute(self, command: CreateCastingDialogCommand) -> DialogResponse:
        casting = await self._casting_workflow.find_casting_by_id(command.casting_id)
        if casting is None:
            raise EntityNotFoundError(f"Casting {command.casting_id} not found")
        if command.employer_id == command.model_id:
            raise DomainValidationError("employer and model must be different users")
        await self._access_guard.require_user(command.employer_id)
        await self._access_guard.require_user(command.model_id)

        dialog = Dialog.create(is_group=False, title=casting.title, casting_id=casting.id)
        async with self._uow.transaction() as repos:
            await insert_dialog(repos, dialog, [command.employer_id, command.model_id])
        record_dialog_created(DialogKind.CASTING)
        logger.info(
            f"[CreateCastingDialog] Dialog {dialog.id.value} opened for casting {casting.id}"
        )

        try:
            async with self._uow.transaction() as repos:
                await post_message(
                    repos,
                    Message.system(dialog.id, f"Chat created for casting '{casting.title}'"),
                )
            record_message_sent("system")
        except Exception as e:
            logger.error(
                f"[CreateCastingDialog] System message for dialog {dialog.id.value} failed: {e}"
            )
            record_error(MetricsErrorType.SYSTEM_MESSAGE_FAILED)

        repos = self._uow.repositories()
        stored = await repos.dialogs.get_by_id(dialog.id)
        return await self._response_builder.build_dialog(
            repos, stored or dialog, command.employer_id
        )
