"""Message queries."""

from .get_message import GetMessageQuery, GetMessageHandler
from .get_messages import GetMessagesQuery, GetMessagesHandler, build_message_page
from .search_messages import SearchMessagesQuery, SearchMessagesHandler

__all__ = [
    "GetMessageQuery",
    "GetMessageHandler",
    "GetMessagesQuery",
    "GetMessagesHandler",
    "build_message_page",
    "SearchMessagesQuery",
    "SearchMessagesHandler",
]
