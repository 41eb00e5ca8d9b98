"""
PERSISTENCE - Prisma implementations of the chat repository ports.
"""

from casting_chat.infrastructure.persistence.prisma_dialog_repository import PrismaDialogRepository
from casting_chat.infrastructure.persistence.prisma_participant_repository import (
    PrismaParticipantRepository,
)
from casting_chat.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)
from casting_chat.infrastructure.persistence.prisma_reaction_repository import (
    PrismaReactionRepository,
)
from casting_chat.infrastructure.persistence.prisma_read_receipt_repository import (
    PrismaReadReceiptRepository,
)
from casting_chat.infrastructure.persistence.prisma_unit_of_work import PrismaUnitOfWork

__all__ = [
    "PrismaDialogRepository",
    "PrismaParticipantRepository",
    "PrismaMessageRepository",
    "PrismaReactionRepository",
    "PrismaReadReceiptRepository",
    "PrismaUnitOfWork",
]
