"""
Dishka DI Container Setup.

- ChatProvider: policies, application services and every command/query handler
- PrismaProvider: Prisma client, unit of work and collaborator adapters
- InMemoryProvider: the same ports backed by process memory

Scopes:
- APP: Prisma client, unit of work, policies, notification dispatcher
- REQUEST: access guard, builders and handlers

The unit of work is APP-scoped because the notification dispatcher worker
outlives any single request and reads through it.

Usage:
    container = await create_container()
    async with container() as request:
        handler = await request.get(SendMessageHandler)
        await handler.execute(SendMessageCommand(...))
    await container.close()
"""

import logging
from typing import AsyncIterable

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from prisma import Prisma

from casting_chat.application.commands.admin import (
    CleanOldMessagesHandler,
    DeleteUserMessagesHandler,
)
from casting_chat.application.commands.dialogs import (
    CreateCastingDialogHandler,
    CreateDialogHandler,
    DeleteDialogHandler,
    LeaveDialogHandler,
    UpdateDialogHandler,
)
from casting_chat.application.commands.messages import (
    DeleteMessageHandler,
    ForwardMessageHandler,
    SendMessageHandler,
    SendMessageWithAttachmentsHandler,
    UpdateMessageHandler,
)
from casting_chat.application.commands.participants import (
    AddParticipantsHandler,
    MuteDialogHandler,
    RemoveParticipantHandler,
    SetTypingHandler,
    UpdateLastSeenHandler,
    UpdateParticipantRoleHandler,
)
from casting_chat.application.commands.reactions import AddReactionHandler, RemoveReactionHandler
from casting_chat.application.commands.read_receipts import MarkMessagesAsReadHandler
from casting_chat.application.queries.admin import GetAllDialogsHandler, GetChatStatsHandler
from casting_chat.application.queries.dialogs import (
    GetDialogBetweenUsersHandler,
    GetDialogHandler,
    GetDialogWithMessagesHandler,
    GetUserDialogsHandler,
)
from casting_chat.application.queries.messages import (
    GetMessageHandler,
    GetMessagesHandler,
    SearchMessagesHandler,
)
from casting_chat.application.queries.reactions import GetMessageReactionsHandler
from casting_chat.application.queries.read_receipts import (
    GetReadReceiptsHandler,
    GetUnreadCountHandler,
)
from casting_chat.application.services import (
    AccessGuard,
    AttachmentLinker,
    NewMessageFanOut,
    NotificationDispatcher,
    QueuedNotificationDispatcher,
    ResponseBuilder,
)
from casting_chat.config.logging_config import setup_logging
from casting_chat.config.policies import AttachmentPolicy, ChatPolicy
from casting_chat.config.settings import Config
from casting_chat.domain.ports import (
    CastingWorkflow,
    NotificationService,
    UnitOfWork,
    UploadService,
    UserDirectory,
)
from casting_chat.infrastructure.external import (
    PrismaCastingWorkflow,
    PrismaNotificationService,
    PrismaUploadService,
    PrismaUserDirectory,
)
from casting_chat.infrastructure.memory import (
    InMemoryCastingWorkflow,
    InMemoryNotificationService,
    InMemoryUnitOfWork,
    InMemoryUploadService,
    InMemoryUserDirectory,
)
from casting_chat.infrastructure.persistence import PrismaUnitOfWork
from casting_chat.infrastructure.storage.file_storage import FileStorage

logger = logging.getLogger(__name__)


class PrismaProvider(Provider):
    """Ports backed by PostgreSQL through Prisma."""

    # ==================== DATABASE ====================

    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        Connected on first use, disconnected when the container closes.
        """
        prisma = Prisma()
        await prisma.connect()
        yield prisma
        await prisma.disconnect()

    @provide(scope=Scope.APP)
    def get_unit_of_work(self, prisma: Prisma) -> UnitOfWork:
        return PrismaUnitOfWork(prisma)

    # ==================== COLLABORATORS ====================

    @provide(scope=Scope.APP)
    def get_user_directory(self, prisma: Prisma) -> UserDirectory:
        return PrismaUserDirectory(prisma)

    @provide(scope=Scope.APP)
    def get_casting_workflow(self, prisma: Prisma) -> CastingWorkflow:
        return PrismaCastingWorkflow(prisma)

    @provide(scope=Scope.APP)
    def get_notification_service(self, prisma: Prisma) -> NotificationService:
        return PrismaNotificationService(prisma)

    @provide(scope=Scope.APP)
    def get_upload_service(self, prisma: Prisma) -> UploadService:
        return PrismaUploadService(prisma, FileStorage(Config.UPLOAD_BASE))


class InMemoryProvider(Provider):
    """Ports backed by process memory, for tests and local runs."""

    @provide(scope=Scope.APP)
    def get_unit_of_work(self) -> UnitOfWork:
        return InMemoryUnitOfWork()

    @provide(scope=Scope.APP)
    def get_user_directory(self) -> UserDirectory:
        return InMemoryUserDirectory()

    @provide(scope=Scope.APP)
    def get_casting_workflow(self) -> CastingWorkflow:
        return InMemoryCastingWorkflow()

    @provide(scope=Scope.APP)
    def get_notification_service(self) -> NotificationService:
        return InMemoryNotificationService()

    @provide(scope=Scope.APP)
    def get_upload_service(self) -> UploadService:
        return InMemoryUploadService()


class ChatProvider(Provider):
    """Policies, application services and handlers."""

    # ==================== POLICIES ====================

    @provide(scope=Scope.APP)
    def get_chat_policy(self) -> ChatPolicy:
        return ChatPolicy.from_config()

    @provide(scope=Scope.APP)
    def get_attachment_policy(self) -> AttachmentPolicy:
        return AttachmentPolicy.from_config()

    # ==================== NOTIFICATIONS ====================

    @provide(scope=Scope.APP)
    async def get_dispatcher(
        self,
        uow: UnitOfWork,
        user_directory: UserDirectory,
        notification_service: NotificationService,
    ) -> AsyncIterable[NotificationDispatcher]:
        """
        Provide the queued dispatcher; its worker is drained and stopped
        when the container closes.
        """
        dispatcher = QueuedNotificationDispatcher(
            NewMessageFanOut(uow, user_directory, notification_service),
            max_size=Config.NOTIFICATION_QUEUE_SIZE,
        )
        dispatcher.start()
        yield dispatcher
        await dispatcher.stop()

    # ==================== SERVICES ====================

    @provide(scope=Scope.REQUEST)
    def get_access_guard(self, user_directory: UserDirectory) -> AccessGuard:
        return AccessGuard(user_directory)

    @provide(scope=Scope.REQUEST)
    def get_attachment_linker(
        self, upload_service: UploadService, policy: AttachmentPolicy
    ) -> AttachmentLinker:
        return AttachmentLinker(upload_service, policy)

    @provide(scope=Scope.REQUEST)
    def get_response_builder(
        self,
        user_directory: UserDirectory,
        upload_service: UploadService,
        policy: ChatPolicy,
    ) -> ResponseBuilder:
        return ResponseBuilder(user_directory, upload_service, policy)

    # ==================== HANDLERS ====================
    # Dishka builds each handler from its __init__ type hints

    create_dialog = provide(CreateDialogHandler, scope=Scope.REQUEST)
    create_casting_dialog = provide(CreateCastingDialogHandler, scope=Scope.REQUEST)
    update_dialog = provide(UpdateDialogHandler, scope=Scope.REQUEST)
    delete_dialog = provide(DeleteDialogHandler, scope=Scope.REQUEST)
    leave_dialog = provide(LeaveDialogHandler, scope=Scope.REQUEST)
    get_dialog = provide(GetDialogHandler, scope=Scope.REQUEST)
    get_user_dialogs = provide(GetUserDialogsHandler, scope=Scope.REQUEST)
    get_dialog_between_users = provide(GetDialogBetweenUsersHandler, scope=Scope.REQUEST)
    get_dialog_with_messages = provide(GetDialogWithMessagesHandler, scope=Scope.REQUEST)

    add_participants = provide(AddParticipantsHandler, scope=Scope.REQUEST)
    remove_participant = provide(RemoveParticipantHandler, scope=Scope.REQUEST)
    update_participant_role = provide(UpdateParticipantRoleHandler, scope=Scope.REQUEST)
    mute_dialog = provide(MuteDialogHandler, scope=Scope.REQUEST)
    set_typing = provide(SetTypingHandler, scope=Scope.REQUEST)
    update_last_seen = provide(UpdateLastSeenHandler, scope=Scope.REQUEST)

    send_message = provide(SendMessageHandler, scope=Scope.REQUEST)
    send_message_with_attachments = provide(
        SendMessageWithAttachmentsHandler, scope=Scope.REQUEST
    )
    update_message = provide(UpdateMessageHandler, scope=Scope.REQUEST)
    delete_message = provide(DeleteMessageHandler, scope=Scope.REQUEST)
    forward_message = provide(ForwardMessageHandler, scope=Scope.REQUEST)
    get_message = provide(GetMessageHandler, scope=Scope.REQUEST)
    get_messages = provide(GetMessagesHandler, scope=Scope.REQUEST)
    search_messages = provide(SearchMessagesHandler, scope=Scope.REQUEST)

    add_reaction = provide(AddReactionHandler, scope=Scope.REQUEST)
    remove_reaction = provide(RemoveReactionHandler, scope=Scope.REQUEST)
    get_message_reactions = provide(GetMessageReactionsHandler, scope=Scope.REQUEST)
    mark_messages_as_read = provide(MarkMessagesAsReadHandler, scope=Scope.REQUEST)
    get_unread_count = provide(GetUnreadCountHandler, scope=Scope.REQUEST)
    get_read_receipts = provide(GetReadReceiptsHandler, scope=Scope.REQUEST)

    get_all_dialogs = provide(GetAllDialogsHandler, scope=Scope.REQUEST)
    get_chat_stats = provide(GetChatStatsHandler, scope=Scope.REQUEST)
    clean_old_messages = provide(CleanOldMessagesHandler, scope=Scope.REQUEST)
    delete_user_messages = provide(DeleteUserMessagesHandler, scope=Scope.REQUEST)


def storage_provider(backend: str) -> Provider:
    if backend == "memory":
        return InMemoryProvider()
    if backend == "prisma":
        return PrismaProvider()
    raise ValueError(f"Unknown CHAT_STORAGE_BACKEND: {backend}")


async def create_container(backend: str | None = None) -> AsyncContainer:
    """
    Create and configure the DI container.

    - Configures logging from Config
    - Picks the storage provider from CHAT_STORAGE_BACKEND unless given
    - Call this ONCE at startup; close() it on shutdown
    """
    setup_logging(Config.LOG_LEVEL, Config.LOG_FILE or None)
    backend = (backend or Config.CHAT_STORAGE_BACKEND).lower()
    logger.info(f"[Container] Using {backend} storage backend")
    return make_async_container(storage_provider(backend), ChatProvider())
