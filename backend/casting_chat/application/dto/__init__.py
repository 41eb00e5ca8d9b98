"""
DTOs - Data Transfer Objects

- message.py → MessageResponse, ReactionResponse, AttachmentResponse, ReadReceiptResponse
- dialog.py  → DialogResponse, ParticipantResponse, DialogWithMessagesResponse
- admin.py   → ChatStatsResponse, CleanupResultResponse

Note: These are different from domain entities.
DTOs are for output, entities are for business logic.
"""

from casting_chat.application.dto.message import (
    AttachmentResponse,
    MessageListResponse,
    MessageResponse,
    ReactionResponse,
    ReadReceiptResponse,
)
from casting_chat.application.dto.dialog import (
    DialogListResponse,
    DialogResponse,
    DialogWithMessagesResponse,
    ParticipantResponse,
)
from casting_chat.application.dto.admin import ChatStatsResponse, CleanupResultResponse

__all__ = [
    "AttachmentResponse",
    "MessageListResponse",
    "MessageResponse",
    "ReactionResponse",
    "ReadReceiptResponse",
    "DialogListResponse",
    "DialogResponse",
    "DialogWithMessagesResponse",
    "ParticipantResponse",
    "ChatStatsResponse",
    "CleanupResultResponse",
]
