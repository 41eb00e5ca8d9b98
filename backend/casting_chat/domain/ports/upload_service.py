"""
Upload Service Port - File storage owned by the upload subsystem.

Chat binds uploads to messages through (entity_type, entity_id).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AttachmentFile:
    filename: str
    content: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class UploadRecord:
    id: str
    user_id: str
    module: str
    entity_type: str
    entity_id: str
    usage: str
    is_public: bool
    filename: str
    mime_type: str
    size: int
    url: str
    created_at: Optional[datetime] = None


class UploadService(ABC):
    @abstractmethod
    async def upload(
        self,
        user_id: str,
        module: str,
        entity_type: str,
        entity_id: str,
        usage: str,
        is_public: bool,
        file: AttachmentFile,
    ) -> UploadRecord: ...

    @abstractmethod
    async def get_by_entity(self, entity_type: str, entity_id: str) -> list[UploadRecord]: ...

    @abstractmethod
    async def delete(self, user_id: str, upload_id: str) -> bool: ...
