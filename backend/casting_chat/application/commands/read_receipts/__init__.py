"""Read receipt commands."""

from .mark_messages_as_read import (
    MarkMessagesAsReadCommand,
    MarkMessagesAsReadHandler,
    mark_dialog_read,
)

__all__ = [
    "MarkMessagesAsReadCommand",
    "MarkMessagesAsReadHandler",
    "mark_dialog_read",
]
