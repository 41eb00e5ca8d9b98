"""
Participant Entity - A user's membership record in a dialog.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import MANAGER_ROLES, ParticipantRole
from casting_chat.domain.value_objects.user_id import UserId


@dataclass
class Participant:
    dialog_id: DialogId
    user_id: UserId
    role: ParticipantRole
    joined_at: datetime
    last_seen_at: datetime
    is_muted: bool = False
    typing_until: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        dialog_id: DialogId,
        user_id: UserId,
        role: ParticipantRole = ParticipantRole.MEMBER,
    ) -> Participant:
        now = datetime.now(timezone.utc)
        return cls(
            dialog_id=dialog_id,
            user_id=user_id,
            role=role,
            joined_at=now,
            last_seen_at=now,
        )

    @property
    def is_owner(self) -> bool:
        return self.role == ParticipantRole.OWNER

    @property
    def can_manage(self) -> bool:
        """Owners and admins may manage membership and dialog settings."""
        return self.role in MANAGER_ROLES

    def set_typing(self, typing: bool, ttl: timedelta, now: Optional[datetime] = None) -> None:
        if typing:
            self.typing_until = (now or datetime.now(timezone.utc)) + ttl
        else:
            self.typing_until = None

    def is_typing(self, now: Optional[datetime] = None) -> bool:
        if self.typing_until is None:
            return False
        return self.typing_until > (now or datetime.now(timezone.utc))

    def mark_seen(self, now: Optional[datetime] = None) -> None:
        self.last_seen_at = now or datetime.now(timezone.utc)
