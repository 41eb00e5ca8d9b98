"""
Participant Repository Port - Interface for dialog membership persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional

from casting_chat.domain.entities.participant import Participant
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId


class ParticipantRepository(ABC):
    @abstractmethod
    async def get(self, dialog_id: DialogId, user_id: UserId) -> Optional[Participant]: ...

    @abstractmethod
    async def list_by_dialog(self, dialog_id: DialogId) -> list[Participant]:
        """Participants ordered by join time."""
        ...

    @abstractmethod
    async def add_many(self, participants: list[Participant]) -> None: ...

    @abstractmethod
    async def save(self, participant: Participant) -> None: ...

    @abstractmethod
    async def delete(self, dialog_id: DialogId, user_id: UserId) -> bool: ...

    @abstractmethod
    async def delete_by_dialog(self, dialog_id: DialogId) -> int: ...
