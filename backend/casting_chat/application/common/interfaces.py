"""
Base interfaces for CQRS pattern.

Usage:
    @dataclass(frozen=True)
    class MuteDialogCommand(Command[bool]):
        user_id: UserId
        dialog_id: DialogId
        muted: bool

    class MuteDialogHandler(CommandHandler[bool]):
        def __init__(self, uow: UnitOfWork, access_guard: AccessGuard):
            self._uow = uow
            self._access_guard = access_guard

        async def execute(self, command: MuteDialogCommand) -> bool:
            async with self._uow.transaction() as repos:
                ...
"""
from abc import ABC, abstractmethod
from typing import TypeVar, Generic

T = TypeVar("T")
class Command(ABC, Generic[T]):
    """Base class for write operations"""
    pass

class CommandHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, command: Command[T]) -> T:
        """Execute the command and return a result of type T"""
        ...

class Query(ABC, Generic[T]):
    """Base class for read operations"""
    pass

class QueryHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, query: Query[T]) -> T:
        """Execute the query and return a result of type T"""
        ...
