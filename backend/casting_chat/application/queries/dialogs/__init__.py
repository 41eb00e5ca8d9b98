"""Dialog queries."""

from .get_dialog import GetDialogQuery, GetDialogHandler
from .get_user_dialogs import GetUserDialogsQuery, GetUserDialogsHandler
from .get_dialog_between_users import GetDialogBetweenUsersQuery, GetDialogBetweenUsersHandler
from .get_dialog_with_messages import GetDialogWithMessagesQuery, GetDialogWithMessagesHandler

__all__ = [
    "GetDialogQuery",
    "GetDialogHandler",
    "GetUserDialogsQuery",
    "GetUserDialogsHandler",
    "GetDialogBetweenUsersQuery",
    "GetDialogBetweenUsersHandler",
    "GetDialogWithMessagesQuery",
    "GetDialogWithMessagesHandler",
]
