"""Admin queries."""

from .get_all_dialogs import GetAllDialogsQuery, GetAllDialogsHandler
from .get_chat_stats import GetChatStatsQuery, GetChatStatsHandler

__all__ = [
    "GetAllDialogsQuery",
    "GetAllDialogsHandler",
    "GetChatStatsQuery",
    "GetChatStatsHandler",
]
