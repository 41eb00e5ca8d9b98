"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "")
    # "prisma" or "memory"
    CHAT_STORAGE_BACKEND = os.getenv("CHAT_STORAGE_BACKEND", "prisma").lower()

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE", "")
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Chat rules
    EDIT_WINDOW_MINUTES = int(os.getenv("EDIT_WINDOW_MINUTES", "15"))
    TYPING_TTL_SECONDS = int(os.getenv("TYPING_TTL_SECONDS", "10"))
    SEARCH_SCAN_LIMIT = int(os.getenv("SEARCH_SCAN_LIMIT", "1000"))
    MESSAGE_PAGE_LIMIT = int(os.getenv("MESSAGE_PAGE_LIMIT", "50"))
    REFERENCE_DEPTH = int(os.getenv("REFERENCE_DEPTH", "3"))

    # File upload
    UPLOAD_BASE = os.getenv("UPLOAD_BASE", "uploads")
    MAX_ATTACHMENT_MB = float(os.getenv("MAX_ATTACHMENT_MB", "25"))
    ATTACHMENT_MIME_TYPES = os.getenv(
        "ATTACHMENT_MIME_TYPES",
        "image/jpeg,image/png,image/gif,image/webp,video/mp4,video/quicktime,application/pdf,text/plain",
    ).split(",")

    # Notifications
    NOTIFICATION_QUEUE_SIZE = int(os.getenv("NOTIFICATION_QUEUE_SIZE", "1000"))
