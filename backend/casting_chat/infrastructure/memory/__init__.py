"""In-memory chat store and collaborator adapters for tests and local runs."""

from casting_chat.infrastructure.memory.store import InMemoryUnitOfWork
from casting_chat.infrastructure.memory.tables import ChatTables
from casting_chat.infrastructure.memory.collaborators import (
    InMemoryCastingWorkflow,
    InMemoryNotificationService,
    InMemoryUploadService,
    InMemoryUserDirectory,
    SentNotification,
)

__all__ = [
    "InMemoryUnitOfWork",
    "ChatTables",
    "InMemoryCastingWorkflow",
    "InMemoryNotificationService",
    "InMemoryUploadService",
    "InMemoryUserDirectory",
    "SentNotification",
]
