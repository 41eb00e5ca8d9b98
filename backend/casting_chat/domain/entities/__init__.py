"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Has behavior (methods)
- Can change state over time
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from casting_chat.domain.entities.dialog import Dialog
from casting_chat.domain.entities.participant import Participant
from casting_chat.domain.entities.message import Message
from casting_chat.domain.entities.reaction import MessageReaction
from casting_chat.domain.entities.read_receipt import ReadReceipt

__all__ = [
    "Dialog",
    "Participant",
    "Message",
    "MessageReaction",
    "ReadReceipt",
]
