"""
FileStorage - Pure disk I/O for uploaded attachments.

Layout: {upload_base}/{module}/{entity_type}/{entity_id}/{timestamp}_{name}

This is a SYNC service - no database, no async. Upload records live in the
database; see infrastructure/external/prisma_upload_service.py.
"""

import os
import re
import logging
from datetime import datetime
from typing import Optional

from casting_chat.config.settings import Config

logger = logging.getLogger(__name__)


class FileStorage:
    def __init__(self, upload_base: Optional[str] = None):
        self.upload_base = upload_base or Config.UPLOAD_BASE

    def entity_dir(self, module: str, entity_type: str, entity_id: str) -> str:
        return os.path.join(
            self.upload_base,
            self._sanitize(module),
            self._sanitize(entity_type),
            self._sanitize(entity_id),
        )

    def save_file(self, content: bytes, directory: str, filename: str) -> str:
        """
        Save file content under directory with a timestamp prefix.

        Returns:
            Path to the saved file
        """
        os.makedirs(directory, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S%f")
        file_path = os.path.join(directory, f"{timestamp}_{self._sanitize(filename)}")

        with open(file_path, "wb") as f:
            f.write(content)

        logger.debug(f"[FileStorage] Saved file: {file_path} ({len(content)} bytes)")
        return file_path

    def relative_path(self, file_path: str) -> str:
        """Path of a saved file below upload_base, with forward slashes."""
        return os.path.relpath(file_path, self.upload_base).replace(os.sep, "/")

    def delete_file(self, file_path: str) -> bool:
        """Returns True if deleted, False if the file didn't exist."""
        if not os.path.exists(file_path):
            logger.warning(f"[FileStorage] File not found for deletion: {file_path}")
            return False
        os.remove(file_path)
        logger.debug(f"[FileStorage] Deleted file: {file_path}")
        return True

    def _sanitize(self, name: str) -> str:
        # Replace unsafe characters with underscore
        safe = re.sub(r"[^\w\-_\. ]", "_", name).strip()
        if not safe or safe in {".", ".."}:
            safe = "unnamed_file"
        return safe
