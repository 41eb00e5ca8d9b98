"""Message commands."""

from .send_message import SendMessageCommand, SendMessageHandler, post_message
from .send_message_with_attachments import (
    SendMessageWithAttachmentsCommand,
    SendMessageWithAttachmentsHandler,
)
from .update_message import UpdateMessageCommand, UpdateMessageHandler
from .delete_message import DeleteMessageCommand, DeleteMessageHandler
from .forward_message import ForwardMessageCommand, ForwardMessageHandler

__all__ = [
    "SendMessageCommand",
    "SendMessageHandler",
    "post_message",
    "SendMessageWithAttachmentsCommand",
    "SendMessageWithAttachmentsHandler",
    "UpdateMessageCommand",
    "UpdateMessageHandler",
    "DeleteMessageCommand",
    "DeleteMessageHandler",
    "ForwardMessageCommand",
    "ForwardMessageHandler",
]
