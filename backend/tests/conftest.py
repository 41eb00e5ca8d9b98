"""
Shared fixtures for the chat core tests.

Everything runs against the in-memory store and collaborators; no database
or generated Prisma client is needed.
"""

import os
import sys

# Add backend directory to path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__) + "/.."))

import pytest
import pytest_asyncio

from casting_chat.application.commands.dialogs.create_dialog import (
    CreateDialogCommand,
    CreateDialogHandler,
)
from casting_chat.application.commands.messages.send_message import (
    SendMessageCommand,
    SendMessageHandler,
)
from casting_chat.application.services import (
    AccessGuard,
    AttachmentLinker,
    ResponseBuilder,
)
from casting_chat.config.policies import AttachmentPolicy, ChatPolicy
from casting_chat.domain.ports.casting_workflow import CastingRecord
from casting_chat.domain.ports.user_directory import UserRecord
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.infrastructure.memory import (
    InMemoryCastingWorkflow,
    InMemoryNotificationService,
    InMemoryUnitOfWork,
    InMemoryUploadService,
    InMemoryUserDirectory,
)
from fakes import RecordingDispatcher

ALICE = UserId("user-alice")
BOB = UserId("user-bob")
CAROL = UserId("user-carol")
DAVE = UserId("user-dave")
ADMIN = UserId("user-admin")

CASTING_ID = "casting-summer"
CASTING_TITLE = "Summer Campaign"


@pytest.fixture
def users():
    return InMemoryUserDirectory(
        [
            UserRecord(id=ALICE.value, display_name="Alice Employer", role="employer"),
            UserRecord(id=BOB.value, display_name="Bob Model", role="model"),
            UserRecord(id=CAROL.value, display_name="Carol Model", role="model"),
            UserRecord(id=DAVE.value, display_name="Dave Outsider", role="model"),
            UserRecord(id=ADMIN.value, display_name="Platform Admin", role="admin"),
        ]
    )


@pytest.fixture
def castings():
    return InMemoryCastingWorkflow([CastingRecord(id=CASTING_ID, title=CASTING_TITLE)])


@pytest.fixture
def uow():
    return InMemoryUnitOfWork()


@pytest.fixture
def uploads():
    return InMemoryUploadService()


@pytest.fixture
def notifications():
    return InMemoryNotificationService()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def chat_policy():
    return ChatPolicy()


@pytest.fixture
def attachment_policy():
    return AttachmentPolicy(
        max_size_bytes=1024,
        allowed_mime_types=frozenset({"image/png", "application/pdf"}),
    )


@pytest.fixture
def access_guard(users):
    return AccessGuard(users)


@pytest.fixture
def response_builder(users, uploads, chat_policy):
    return ResponseBuilder(users, uploads, chat_policy)


@pytest.fixture
def attachment_linker(uploads, attachment_policy):
    return AttachmentLinker(uploads, attachment_policy)


@pytest.fixture
def create_dialog(uow, access_guard, response_builder):
    return CreateDialogHandler(uow, access_guard, response_builder)


@pytest.fixture
def send_message(uow, access_guard, response_builder, dispatcher):
    return SendMessageHandler(uow, access_guard, response_builder, dispatcher)


@pytest_asyncio.fixture
async def direct_dialog(create_dialog):
    """Direct dialog owned by Alice with Bob."""
    response = await create_dialog.execute(
        CreateDialogCommand(creator_id=ALICE, participant_ids=(BOB,))
    )
    return DialogId(response.id)


@pytest_asyncio.fixture
async def group_dialog(create_dialog):
    """Group dialog owned by Alice with Bob and Carol."""
    response = await create_dialog.execute(
        CreateDialogCommand(
            creator_id=ALICE,
            participant_ids=(BOB, CAROL),
            is_group=True,
            title="Callback crew",
        )
    )
    return DialogId(response.id)


@pytest.fixture
def post(send_message):
    """Send a text message and return its id."""

    async def _post(dialog_id: DialogId, sender: UserId, content: str, **kwargs) -> MessageId:
        response = await send_message.execute(
            SendMessageCommand(
                sender_id=sender,
                dialog_id=dialog_id,
                type=kwargs.pop("type", "text"),
                content=content,
                **kwargs,
            )
        )
        return MessageId(response.id)

    return _post
