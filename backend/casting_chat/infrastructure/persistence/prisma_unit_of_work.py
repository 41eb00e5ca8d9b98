"""
PrismaUnitOfWork - UnitOfWork backed by Prisma interactive transactions.

transaction() opens prisma.tx(); repositories built on the transaction client
see its uncommitted writes, and an exception rolls everything back.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from prisma import Prisma
from prisma.errors import PrismaError

from casting_chat.domain.exceptions import PersistenceError
from casting_chat.domain.ports.unit_of_work import ChatRepositories, UnitOfWork
from casting_chat.infrastructure.persistence.prisma_dialog_repository import PrismaDialogRepository
from casting_chat.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)
from casting_chat.infrastructure.persistence.prisma_participant_repository import (
    PrismaParticipantRepository,
)
from casting_chat.infrastructure.persistence.prisma_reaction_repository import (
    PrismaReactionRepository,
)
from casting_chat.infrastructure.persistence.prisma_read_receipt_repository import (
    PrismaReadReceiptRepository,
)

logger = logging.getLogger(__name__)


def build_repositories(prisma: Prisma) -> ChatRepositories:
    return ChatRepositories(
        dialogs=PrismaDialogRepository(prisma),
        participants=PrismaParticipantRepository(prisma),
        messages=PrismaMessageRepository(prisma),
        reactions=PrismaReactionRepository(prisma),
        receipts=PrismaReadReceiptRepository(prisma),
    )


class PrismaUnitOfWork(UnitOfWork):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def repositories(self) -> ChatRepositories:
        return build_repositories(self._prisma)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[ChatRepositories]:
        try:
            async with self._prisma.tx() as tx:
                yield build_repositories(tx)
        except PrismaError as e:
            logger.error(f"[PrismaUnitOfWork] Transaction failed: {e}")
            raise PersistenceError("Transaction failed", cause=e) from e
