"""
MessageReaction Entity - One emoji reaction per user per message.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from casting_chat.domain.exceptions import DomainValidationError
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId

EMOJI_MAX_LENGTH = 10


@dataclass
class MessageReaction:
    id: str
    message_id: MessageId
    user_id: UserId
    emoji: str
    created_at: datetime

    @classmethod
    def create(cls, message_id: MessageId, user_id: UserId, emoji: str) -> MessageReaction:
        emoji = emoji.strip()
        if not emoji or len(emoji) > EMOJI_MAX_LENGTH:
            raise DomainValidationError(
                f"Emoji must be 1-{EMOJI_MAX_LENGTH} characters"
            )
        return cls(
            id=str(uuid4()),
            message_id=message_id,
            user_id=user_id,
            emoji=emoji,
            created_at=datetime.now(timezone.utc),
        )
