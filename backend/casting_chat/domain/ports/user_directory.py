"""
User Directory Port - Read access to platform users.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UserRecord:
    id: str
    display_name: str
    role: str


class UserDirectory(ABC):
    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[UserRecord]: ...
