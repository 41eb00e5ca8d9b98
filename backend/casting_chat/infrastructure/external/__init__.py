"""
EXTERNAL - Prisma-backed adapters for the collaborator ports
(user directory, casting workflow, notifications, uploads).
"""

from casting_chat.infrastructure.external.prisma_user_directory import PrismaUserDirectory
from casting_chat.infrastructure.external.prisma_casting_workflow import PrismaCastingWorkflow
from casting_chat.infrastructure.external.prisma_notification_service import (
    PrismaNotificationService,
)
from casting_chat.infrastructure.external.prisma_upload_service import PrismaUploadService

__all__ = [
    "PrismaUserDirectory",
    "PrismaCastingWorkflow",
    "PrismaNotificationService",
    "PrismaUploadService",
]
