"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the chat core needs,
without specifying HOW it's done.

Subfolders:
- repositories/  → Data persistence interfaces
- (root files)   → Unit of work and external collaborators
"""

from casting_chat.domain.ports.casting_workflow import CastingRecord, CastingWorkflow
from casting_chat.domain.ports.notification_service import NotificationService
from casting_chat.domain.ports.unit_of_work import ChatRepositories, UnitOfWork
from casting_chat.domain.ports.upload_service import AttachmentFile, UploadRecord, UploadService
from casting_chat.domain.ports.user_directory import UserDirectory, UserRecord

__all__ = [
    "CastingRecord",
    "CastingWorkflow",
    "NotificationService",
    "ChatRepositories",
    "UnitOfWork",
    "AttachmentFile",
    "UploadRecord",
    "UploadService",
    "UserDirectory",
    "UserRecord",
]
