"""
Unit of Work Port - Transaction boundary around the chat repositories.

    async with uow.transaction() as repos:
        await repos.dialogs.add(dialog)
        await repos.participants.add_many(participants)

A clean exit commits; an exception rolls every write back and propagates.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from casting_chat.domain.ports.repositories import (
    DialogRepository,
    MessageRepository,
    ParticipantRepository,
    ReactionRepository,
    ReadReceiptRepository,
)


@dataclass(frozen=True)
class ChatRepositories:
    dialogs: DialogRepository
    participants: ParticipantRepository
    messages: MessageRepository
    reactions: ReactionRepository
    receipts: ReadReceiptRepository


class UnitOfWork(ABC):
    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[ChatRepositories]: ...

    @abstractmethod
    def repositories(self) -> ChatRepositories:
        """Repositories bound to committed state, for plain reads."""
        ...
