"""
InMemoryUnitOfWork - process-local chat store with transactional semantics.

A transaction takes the store lock, works on a deep copy of the committed
tables and swaps the copy in only on a clean exit. Any exception discards
the copy, so a failed multi-step write leaves no trace. Plain reads through
repositories() see the last committed state.
"""

import asyncio
import copy
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from casting_chat.domain.ports.unit_of_work import ChatRepositories, UnitOfWork
from casting_chat.infrastructure.memory.repositories import (
    InMemoryDialogRepository,
    InMemoryMessageRepository,
    InMemoryParticipantRepository,
    InMemoryReactionRepository,
    InMemoryReadReceiptRepository,
    TableSource,
)
from casting_chat.infrastructure.memory.tables import ChatTables

logger = logging.getLogger(__name__)


def _bundle(tables: TableSource) -> ChatRepositories:
    return ChatRepositories(
        dialogs=InMemoryDialogRepository(tables),
        participants=InMemoryParticipantRepository(tables),
        messages=InMemoryMessageRepository(tables),
        reactions=InMemoryReactionRepository(tables),
        receipts=InMemoryReadReceiptRepository(tables),
    )


class InMemoryUnitOfWork(UnitOfWork):
    def __init__(self, tables: ChatTables | None = None):
        self._tables = tables or ChatTables()
        self._lock = asyncio.Lock()

    @property
    def tables(self) -> ChatTables:
        """Committed tables. Tests use this to seed or inspect state."""
        return self._tables

    def repositories(self) -> ChatRepositories:
        return _bundle(lambda: self._tables)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[ChatRepositories]:
        async with self._lock:
            working = copy.deepcopy(self._tables)
            try:
                yield _bundle(lambda: working)
            except BaseException:
                logger.debug("[InMemoryUnitOfWork] Rolled back")
                raise
            self._tables = working
