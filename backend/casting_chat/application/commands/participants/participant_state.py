"""Self-service participant state: mute, typing indicator and last-seen."""

from dataclasses import dataclass
from datetime import datetime, timezone

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.config.policies import ChatPolicy
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors


@dataclass(frozen=True)
class MuteDialogCommand(Command[bool]):
    user_id: UserId
    dialog_id: DialogId
    muted: bool


class MuteDialogHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, command: MuteDialogCommand) -> bool:
        async with self._uow.transaction() as repos:
            participant = await self._access_guard.require_member(
                repos, command.dialog_id, command.user_id
            )
            participant.is_muted = command.muted
            await repos.participants.save(participant)
        return True


@dataclass(frozen=True)
class SetTypingCommand(Command[bool]):
    user_id: UserId
    dialog_id: DialogId
    typing: bool


class SetTypingHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard, policy: ChatPolicy):
        self._uow = uow
        self._access_guard = access_guard
        self._policy = policy

    @track_errors
    async def execute(self, command: SetTypingCommand) -> bool:
        async with self._uow.transaction() as repos:
            participant = await self._access_guard.require_member(
                repos, command.dialog_id, command.user_id
            )
            participant.set_typing(
                command.typing, self._policy.typing_ttl, datetime.now(timezone.utc)
            )
            await repos.participants.save(participant)
        return True


@dataclass(frozen=True)
class UpdateLastSeenCommand(Command[bool]):
    user_id: UserId
    dialog_id: DialogId


class UpdateLastSeenHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, command: UpdateLastSeenCommand) -> bool:
        async with self._uow.transaction() as repos:
            participant = await self._access_guard.require_member(
                repos, command.dialog_id, command.user_id
            )
            participant.mark_seen()
            await repos.participants.save(participant)
        return True
