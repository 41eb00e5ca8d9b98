"""Dialog DTOs returned to callers of the chat core."""

from datetime import datetime
from pydantic import BaseModel
from typing import Optional

from casting_chat.application.dto.message import MessageListResponse, MessageResponse


class ParticipantResponse(BaseModel):
    user_id: str
    user_name: str
    role: str
    joined_at: datetime
    last_seen_at: datetime
    is_muted: bool
    is_typing: bool
    # Presence is not tracked
    is_online: bool = False


class DialogResponse(BaseModel):
    id: str
    is_group: bool
    title: Optional[str] = None
    image_url: Optional[str] = None
    casting_id: Optional[str] = None
    participants: list[ParticipantResponse]
    last_message: Optional[MessageResponse] = None
    unread_count: int = 0
    is_muted: bool = False
    created_at: datetime
    updated_at: datetime


class DialogWithMessagesResponse(BaseModel):
    dialog: DialogResponse
    messages: MessageListResponse


class DialogListResponse(BaseModel):
    dialogs: list[DialogResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
