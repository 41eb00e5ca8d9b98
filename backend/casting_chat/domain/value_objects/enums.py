"""
Chat enumerations - message types, participant roles and message statuses.
"""

from enum import Enum

from casting_chat.domain.exceptions.validation_error import DomainValidationError


class MessageType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    FILE = "file"
    SYSTEM = "system"
    FORWARD = "forward"

    @classmethod
    def parse(cls, value: str) -> "MessageType":
        try:
            return cls(value)
        except ValueError:
            raise DomainValidationError(f"Invalid message type: {value}") from None


class ParticipantRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"

    @classmethod
    def parse(cls, value: str) -> "ParticipantRole":
        try:
            return cls(value)
        except ValueError:
            raise DomainValidationError(f"Invalid participant role: {value}") from None


class MessageStatus(str, Enum):
    SENT = "sent"
    EDITED = "edited"


MANAGER_ROLES = frozenset({ParticipantRole.OWNER, ParticipantRole.ADMIN})
