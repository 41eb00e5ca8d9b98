"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation
"""

from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId, SYSTEM_SENDER
from casting_chat.domain.value_objects.enums import (
    MANAGER_ROLES,
    MessageStatus,
    MessageType,
    ParticipantRole,
)
from casting_chat.domain.value_objects.criteria import DialogCriteria, MessageCriteria

__all__ = [
    "DialogId",
    "MessageId",
    "UserId",
    "SYSTEM_SENDER",
    "MessageType",
    "ParticipantRole",
    "MessageStatus",
    "MANAGER_ROLES",
    "MessageCriteria",
    "DialogCriteria",
]
