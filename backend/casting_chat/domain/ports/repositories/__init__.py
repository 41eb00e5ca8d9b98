"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the chat core needs
- Does NOT specify implementation (Prisma, in-memory, etc.)

Infrastructure layer provides implementations.
"""

from casting_chat.domain.ports.repositories.dialog_repository import DialogRepository
from casting_chat.domain.ports.repositories.participant_repository import ParticipantRepository
from casting_chat.domain.ports.repositories.message_repository import MessageRepository
from casting_chat.domain.ports.repositories.reaction_repository import ReactionRepository
from casting_chat.domain.ports.repositories.read_receipt_repository import ReadReceiptRepository

__all__ = [
    "DialogRepository",
    "ParticipantRepository",
    "MessageRepository",
    "ReactionRepository",
    "ReadReceiptRepository",
]
