"""Translation of Prisma driver errors into PersistenceError."""

import functools
import logging

from prisma.errors import PrismaError

from casting_chat.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def wrap_prisma_errors(func):
    """Re-raise PrismaError from an async repository method as PersistenceError."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PrismaError as e:
            logger.error(f"[Persistence] {func.__qualname__} failed: {e}")
            raise PersistenceError(f"{func.__qualname__} failed", cause=e) from e

    return wrapper
