"""Plain-dict tables backing the in-memory chat store."""

from dataclasses import dataclass, field

from casting_chat.domain.entities import (
    Dialog,
    Message,
    MessageReaction,
    Participant,
    ReadReceipt,
)


@dataclass
class ChatTables:
    dialogs: dict[str, Dialog] = field(default_factory=dict)
    # keyed by (dialog_id, user_id)
    participants: dict[tuple[str, str], Participant] = field(default_factory=dict)
    messages: dict[str, Message] = field(default_factory=dict)
    # keyed by (message_id, user_id)
    reactions: dict[tuple[str, str], MessageReaction] = field(default_factory=dict)
    receipts: dict[tuple[str, str], ReadReceipt] = field(default_factory=dict)
