"""Dialog commands."""

from .create_dialog import CreateDialogCommand, CreateDialogHandler, insert_dialog
from .create_casting_dialog import CreateCastingDialogCommand, CreateCastingDialogHandler
from .update_dialog import UpdateDialogCommand, UpdateDialogHandler
from .delete_dialog import DeleteDialogCommand, DeleteDialogHandler
from .leave_dialog import LeaveDialogCommand, LeaveDialogHandler

__all__ = [
    "CreateDialogCommand",
    "CreateDialogHandler",
    "insert_dialog",
    "CreateCastingDialogCommand",
    "CreateCastingDialogHandler",
    "UpdateDialogCommand",
    "UpdateDialogHandler",
    "DeleteDialogCommand",
    "DeleteDialogHandler",
    "LeaveDialogCommand",
    "LeaveDialogHandler",
]
