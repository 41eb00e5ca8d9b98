"""Admin commands."""

from .clean_old_messages import CleanOldMessagesCommand, CleanOldMessagesHandler
from .delete_user_messages import DeleteUserMessagesCommand, DeleteUserMessagesHandler

__all__ = [
    "CleanOldMessagesCommand",
    "CleanOldMessagesHandler",
    "DeleteUserMessagesCommand",
    "DeleteUserMessagesHandler",
]
