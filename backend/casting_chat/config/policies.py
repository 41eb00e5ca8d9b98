"""
Immutable policy objects handed to handlers at construction time.

Built once from Config by the container; tests build their own.
"""

from dataclasses import dataclass, field
from datetime import timedelta

from casting_chat.config.settings import Config


@dataclass(frozen=True)
class ChatPolicy:
    edit_window: timedelta = timedelta(minutes=15)
    typing_ttl: timedelta = timedelta(seconds=10)
    search_scan_limit: int = 1000
    message_page_limit: int = 50
    reference_depth: int = 3

    @classmethod
    def from_config(cls) -> "ChatPolicy":
        return cls(
            edit_window=timedelta(minutes=Config.EDIT_WINDOW_MINUTES),
            typing_ttl=timedelta(seconds=Config.TYPING_TTL_SECONDS),
            search_scan_limit=Config.SEARCH_SCAN_LIMIT,
            message_page_limit=Config.MESSAGE_PAGE_LIMIT,
            reference_depth=Config.REFERENCE_DEPTH,
        )


@dataclass(frozen=True)
class AttachmentPolicy:
    max_size_bytes: int = 25 * 1024 * 1024
    allowed_mime_types: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_config(cls) -> "AttachmentPolicy":
        return cls(
            max_size_bytes=int(Config.MAX_ATTACHMENT_MB * 1024 * 1024),
            allowed_mime_types=frozenset(
                m.strip().lower() for m in Config.ATTACHMENT_MIME_TYPES if m.strip()
            ),
        )

    def allows(self, mime_type: str) -> bool:
        # An empty allow-list accepts every type
        if not self.allowed_mime_types:
            return True
        return mime_type.lower() in self.allowed_mime_types
