"""Add Reaction Command - one reaction per user per message, replaced on repeat."""

from dataclasses import dataclass

from casting_chat.application.common.interfaces import Command, CommandHandler
from casting_chat.application.services.access_guard import AccessGuard
from casting_chat.domain.entities.reaction import MessageReaction
from casting_chat.domain.exceptions import EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import track_errors


@dataclass(frozen=True)
class AddReactionCommand(Command[bool]):
    user_id: UserId
    message_id: MessageId
    emoji: str


class AddReactionHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
        self._uow = uow
        self._access_guard = access_guard

    @track_errors
    async def execute(self, command: AddReactionCommand) -> bool:
        async with self._uow.transaction() as repos:
            message = await repos.messages.get_by_id(command.message_id)
            if message is None:
                raise EntityNotFoundError(f"Message {command.message_id.value} not found")
            await self._access_guard.require_member(repos, message.dialog_id, command.user_id)

            reaction = MessageReaction.create(message.id, command.user_id, command.emoji)
            existing = await repos.reactions.get(message.id, command.user_id)
            if existing is not None:
                existing.emoji = reaction.emoji
                reaction = existing
            await repos.reactions.save(reaction)
        return True
