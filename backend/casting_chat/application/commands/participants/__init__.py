"""Participant commands."""

from .add_participants import AddParticipantsCommand, AddParticipantsHandler
from .remove_participant import RemoveParticipantCommand, RemoveParticipantHandler
from .update_participant_role import (
    UpdateParticipantRoleCommand,
    UpdateParticipantRoleHandler,
)
from .participant_state import (
    MuteDialogCommand,
    MuteDialogHandler,
    SetTypingCommand,
    SetTypingHandler,
    UpdateLastSeenCommand,
    UpdateLastSeenHandler,
)

__all__ = [
    "AddParticipantsCommand",
    "AddParticipantsHandler",
    "RemoveParticipantCommand",
    "RemoveParticipantHandler",
    "UpdateParticipantRoleCommand",
    "UpdateParticipantRoleHandler",
    "MuteDialogCommand",
    "MuteDialogHandler",
    "SetTypingCommand",
    "SetTypingHandler",
    "UpdateLastSeenCommand",
    "UpdateLastSeenHandler",
]
