"""
Casting Workflow Port - Lookup of castings that anchor dialogs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CastingRecord:
    id: str
    title: str


class CastingWorkflow(ABC):
    @abstractmethod
    async def find_casting_by_id(self, casting_id: str) -> Optional[CastingRecord]: ...
