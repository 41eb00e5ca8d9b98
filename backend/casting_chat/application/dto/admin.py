"""Admin DTOs."""

from pydantic import BaseModel


class ChatStatsResponse(BaseModel):
    total_dialogs: int
    total_messages: int
    active_dialogs: int
    messages_today: int
    messages_this_week: int
    messages_by_type: dict[str, int]


class CleanupResultResponse(BaseModel):
    deleted_messages: int
    deleted_attachments: int
