"""Read receipt queries."""

from .get_unread_count import GetUnreadCountQuery, GetUnreadCountHandler
from .get_read_receipts import GetReadReceiptsQuery, GetReadReceiptsHandler

__all__ = [
    "GetUnreadCountQuery",
    "GetUnreadCountHandler",
    "GetReadReceiptsQuery",
    "GetReadReceiptsHandler",
]
