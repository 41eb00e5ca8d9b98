"""Message DTOs returned to callers of the chat core."""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class ReactionResponse(BaseModel):
    user_id: str
    user_name: str
    emoji: str
    created_at: datetime


class AttachmentResponse(BaseModel):
    id: str
    filename: str
    mime_type: str
    size: int
    url: str


class ReadReceiptResponse(BaseModel):
    user_id: str
    read_at: datetime


class MessageResponse(BaseModel):
    """
    A message with everything a chat window needs to render it.

    reply_to and forward_from are nested previews of the referenced
    messages, cut off after a bounded depth.
    """

    id: str
    dialog_id: str
    sender_id: str
    sender_name: str
    type: str
    content: str
    status: str
    reply_to: Optional[MessageResponse] = None
    forward_from: Optional[MessageResponse] = None
    reactions: list[ReactionResponse] = []
    attachments: list[AttachmentResponse] = []
    read_by: list[ReadReceiptResponse] = []
    created_at: datetime
    updated_at: datetime


class MessageListResponse(BaseModel):
    messages: list[MessageResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_more: bool


MessageResponse.model_rebuild()
