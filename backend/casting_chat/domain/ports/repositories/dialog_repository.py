"""
Dialog Repository Port - Interface for dialog persistence.
Implementations: infrastructure/persistence/prisma_dialog_repository.py,
infrastructure/memory/repositories.py
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from casting_chat.domain.entities.dialog import Dialog
from casting_chat.domain.value_objects.criteria import DialogCriteria
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId


class DialogRepository(ABC):
    @abstractmethod
    async def get_by_id(self, dialog_id: DialogId) -> Optional[Dialog]: ...

    @abstractmethod
    async def get_by_casting(self, casting_id: str) -> Optional[Dialog]: ...

    @abstractmethod
    async def get_by_user(self, user_id: UserId) -> list[Dialog]:
        """Dialogs the user participates in, most recently updated first."""
        ...

    @abstractmethod
    async def find_direct_between(
        self, user1_id: UserId, user2_id: UserId
    ) -> Optional[Dialog]: ...

    @abstractmethod
    async def search(self, criteria: DialogCriteria) -> tuple[list[Dialog], int]:
        """Return one page of matching dialogs and the total match count."""
        ...

    @abstractmethod
    async def add(self, dialog: Dialog) -> None: ...

    @abstractmethod
    async def save(self, dialog: Dialog) -> None: ...

    @abstractmethod
    async def delete(self, dialog_id: DialogId) -> bool: ...

    @abstractmethod
    async def count(self, updated_since: Optional[datetime] = None) -> int: ...
