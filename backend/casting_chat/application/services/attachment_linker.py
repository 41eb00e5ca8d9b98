"""
AttachmentLinker - Binds uploaded files to a message through the upload port.

Files are stored by the upload subsystem with
(module="chat", entity_type="message", entity_id=<message id>).
"""

import logging

from casting_chat.config.policies import AttachmentPolicy
from casting_chat.domain.exceptions import DomainValidationError
from casting_chat.domain.ports.upload_service import AttachmentFile, UploadRecord, UploadService
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import MetricsErrorType, record_error

logger = logging.getLogger(__name__)

ATTACHMENT_MODULE = "chat"
ATTACHMENT_ENTITY_TYPE = "message"
ATTACHMENT_USAGE = "message_attachment"


class AttachmentLinker:
    def __init__(self, upload_service: UploadService, policy: AttachmentPolicy):
        self._upload_service = upload_service
        self._policy = policy

    def validate(self, files: list[AttachmentFile]) -> None:
        for file in files:
            if not file.filename:
                raise DomainValidationError("Attachment filename cannot be empty")
            if file.size == 0:
                raise DomainValidationError(f"Attachment {file.filename} is empty")
            if file.size > self._policy.max_size_bytes:
                raise DomainValidationError(
                    f"Attachment {file.filename} exceeds {self._policy.max_size_bytes} bytes"
                )
            if not self._policy.allows(file.mime_type):
                raise DomainValidationError(
                    f"Attachment type {file.mime_type} is not allowed"
                )

    async def link(
        self, user_id: UserId, message_id: MessageId, files: list[AttachmentFile]
    ) -> list[UploadRecord]:
        """
        Upload every file against the message.

        The message must already be inserted in the caller's unit of work.
        If any upload fails, the files uploaded so far are deleted and the
        error propagates so the caller can roll the message back.
        """
        self.validate(files)

        uploaded: list[UploadRecord] = []
        for file in files:
            try:
                record = await self._upload_service.upload(
                    user_id=user_id.value,
                    module=ATTACHMENT_MODULE,
                    entity_type=ATTACHMENT_ENTITY_TYPE,
                    entity_id=message_id.value,
                    usage=ATTACHMENT_USAGE,
                    is_public=False,
                    file=file,
                )
            except Exception as e:
                logger.error(
                    f"[AttachmentLinker] Upload of {file.filename} for message {message_id.value} failed: {e}"
                )
                record_error(MetricsErrorType.ATTACHMENT_FAILED)
                await self.unlink(user_id, uploaded)
                raise
            uploaded.append(record)

        logger.debug(
            f"[AttachmentLinker] Linked {len(uploaded)} file(s) to message {message_id.value}"
        )
        return uploaded

    async def unlink(self, user_id: UserId, uploads: list[UploadRecord]) -> int:
        """Best-effort delete of uploads. Returns how many were removed."""
        removed = 0
        for record in uploads:
            try:
                if await self._upload_service.delete(user_id.value, record.id):
                    removed += 1
            except Exception as e:
                logger.warning(f"[AttachmentLinker] Could not delete upload {record.id}: {e}")
                record_error(MetricsErrorType.CLEANUP_FAILED)
        return removed

    async def remove_for_messages(self, user_id: UserId, message_ids: list[MessageId]) -> int:
        """Delete the files of messages that no longer exist. Run after commit."""
        removed = 0
        for message_id in message_ids:
            try:
                uploads = await self._upload_service.get_by_entity(
                    ATTACHMENT_ENTITY_TYPE, message_id.value
                )
            except Exception as e:
                logger.warning(
                    f"[AttachmentLinker] Could not list uploads of message {message_id.value}: {e}"
                )
                record_error(MetricsErrorType.CLEANUP_FAILED)
                continue
            removed += await self.unlink(user_id, uploads)
        return removed
