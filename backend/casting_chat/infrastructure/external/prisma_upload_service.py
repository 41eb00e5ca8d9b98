"""
Prisma UploadService - files on disk, records in the uploads table.

upload() writes the file first and the record second; if the record fails
the file is removed again. delete() soft-deletes the record and removes the
file from disk.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from prisma import Prisma
from prisma.models import Upload as PrismaUpload

from casting_chat.domain.ports.upload_service import AttachmentFile, UploadRecord, UploadService
from casting_chat.infrastructure.persistence.errors import wrap_prisma_errors
from casting_chat.infrastructure.storage.file_storage import FileStorage

logger = logging.getLogger(__name__)


class PrismaUploadService(UploadService):
    _prisma: Prisma

    def __init__(self, prisma: Prisma, storage: FileStorage, base_url: str = "/uploads"):
        self._prisma = prisma
        self._storage = storage
        self._base_url = base_url.rstrip("/")

    def _to_record(self, record: PrismaUpload) -> UploadRecord:
        return UploadRecord(
            id=record.id,
            user_id=record.user_id,
            module=record.module,
            entity_type=record.entity_type,
            entity_id=record.entity_id,
            usage=record.usage,
            is_public=record.is_public,
            filename=record.filename,
            mime_type=record.mime_type,
            size=record.size,
            url=record.url,
            created_at=record.created_at,
        )

    @wrap_prisma_errors
    async def upload(
        self,
        user_id: str,
        module: str,
        entity_type: str,
        entity_id: str,
        usage: str,
        is_public: bool,
        file: AttachmentFile,
    ) -> UploadRecord:
        directory = self._storage.entity_dir(module, entity_type, entity_id)
        path = self._storage.save_file(file.content, directory, file.filename)
        try:
            record = await self._prisma.upload.create(
                data={
                    "user_id": user_id,
                    "module": module,
                    "entity_type": entity_type,
                    "entity_id": entity_id,
                    "usage": usage,
                    "is_public": is_public,
                    "filename": file.filename,
                    "mime_type": file.mime_type,
                    "size": file.size,
                    "storage_path": path,
                    "url": f"{self._base_url}/{self._storage.relative_path(path)}",
                }
            )
        except Exception:
            self._storage.delete_file(path)
            raise
        logger.info(f"[Uploads] Stored {file.filename} for {entity_type}/{entity_id}")
        return self._to_record(record)

    @wrap_prisma_errors
    async def get_by_entity(self, entity_type: str, entity_id: str) -> list[UploadRecord]:
        records = await self._prisma.upload.find_many(
            where={"entity_type": entity_type, "entity_id": entity_id, "deleted_at": None},
            order={"created_at": "asc"},
        )
        return [self._to_record(record) for record in records]

    @wrap_prisma_errors
    async def delete(self, user_id: str, upload_id: str) -> bool:
        record: Optional[PrismaUpload] = await self._prisma.upload.find_first(
            where={"id": upload_id, "deleted_at": None}
        )
        if record is None:
            return False
        await self._prisma.upload.update(
            where={"id": upload_id},
            data={"deleted_at": datetime.now(timezone.utc)},
        )
        self._storage.delete_file(record.storage_path)
        logger.info(f"[Uploads] Deleted upload {upload_id} by {user_id}")
        return True
