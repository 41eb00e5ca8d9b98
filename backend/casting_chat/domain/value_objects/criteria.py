"""
Query criteria for paged message and dialog listings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from casting_chat.domain.value_objects.enums import MessageType
from casting_chat.domain.value_objects.user_id import UserId

DEFAULT_MESSAGE_LIMIT = 50
MAX_MESSAGE_LIMIT = 100
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class MessageCriteria:
    types: tuple[MessageType, ...] = field(default_factory=tuple)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    limit: int = DEFAULT_MESSAGE_LIMIT
    offset: int = 0

    def __post_init__(self):
        # Out-of-range paging falls back to defaults instead of failing
        if self.limit <= 0:
            object.__setattr__(self, "limit", DEFAULT_MESSAGE_LIMIT)
        elif self.limit > MAX_MESSAGE_LIMIT:
            object.__setattr__(self, "limit", MAX_MESSAGE_LIMIT)
        if self.offset < 0:
            object.__setattr__(self, "offset", 0)

    @property
    def page(self) -> int:
        return self.offset // self.limit + 1


@dataclass(frozen=True)
class DialogCriteria:
    is_group: Optional[bool] = None
    casting_id: Optional[str] = None
    user_id: Optional[UserId] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.page < 1:
            object.__setattr__(self, "page", 1)
        if self.page_size < 1:
            object.__setattr__(self, "page_size", DEFAULT_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size
