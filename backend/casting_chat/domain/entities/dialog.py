"""
Dialog Entity - A direct or group conversation, optionally tied to a casting.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import ClassVar, Optional

from casting_chat.domain.exceptions import DomainValidationError
from casting_chat.domain.value_objects.dialog_id import DialogId


@dataclass
class Dialog:
    id: DialogId
    is_group: bool
    created_at: datetime
    updated_at: datetime
    title: Optional[str] = None
    image_url: Optional[str] = None
    casting_id: Optional[str] = None

    TITLE_MAX_LENGTH: ClassVar[int] = 100

    @classmethod
    def create(
        cls,
        is_group: bool,
        title: Optional[str] = None,
        image_url: Optional[str] = None,
        casting_id: Optional[str] = None,
    ) -> Dialog:
        """Factory method to create a new Dialog with a generated ID and timestamps."""
        cls._check_title(title)
        now = datetime.now(timezone.utc)
        return cls(
            id=DialogId.generate(),
            is_group=is_group,
            created_at=now,
            updated_at=now,
            title=title,
            image_url=image_url,
            casting_id=casting_id,
        )

    def update(self, title: Optional[str] = None, image_url: Optional[str] = None) -> None:
        """Apply a partial update; None leaves the field unchanged."""
        if title is not None:
            self._check_title(title)
            self.title = title
        if image_url is not None:
            self.image_url = image_url
        self.updated_at = datetime.now(timezone.utc)

    def touch(self, when: Optional[datetime] = None) -> None:
        self.updated_at = when or datetime.now(timezone.utc)

    @classmethod
    def _check_title(cls, title: Optional[str]) -> None:
        if title is not None and len(title) > cls.TITLE_MAX_LENGTH:
            raise DomainValidationError(
                f"Title cannot exceed {cls.TITLE_MAX_LENGTH} characters"
            )
