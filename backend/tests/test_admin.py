"""
Platform-admin tests: dialog listing, stats and bulk message cleanup.
"""

from datetime import timedelta

import pytest

from casting_chat.application.commands.admin import (
    CleanOldMessagesCommand,
    CleanOldMessagesHandler,
    DeleteUserMessagesCommand,
    DeleteUserMessagesHandler,
)
from casting_chat.application.commands.dialogs import CreateDialogCommand
from casting_chat.application.commands.reactions import AddReactionCommand, AddReactionHandler
from casting_chat.application.queries.admin import (
    GetAllDialogsHandler,
    GetAllDialogsQuery,
    GetChatStatsHandler,
    GetChatStatsQuery,
)
from casting_chat.application.services.attachment_linker import ATTACHMENT_ENTITY_TYPE
from casting_chat.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
)
from casting_chat.domain.ports.upload_service import AttachmentFile
from casting_chat.domain.value_objects import DialogCriteria, DialogId
from conftest import ADMIN, ALICE, BOB, CAROL, CASTING_ID


@pytest.fixture
def all_dialogs(uow, access_guard):
    return GetAllDialogsHandler(uow, access_guard)


@pytest.fixture
def stats(uow, access_guard):
    return GetChatStatsHandler(uow, access_guard)


@pytest.fixture
def clean_old(uow, access_guard, attachment_linker):
    return CleanOldMessagesHandler(uow, access_guard, attachment_linker)


@pytest.fixture
def delete_user_messages(uow, access_guard):
    return DeleteUserMessagesHandler(uow, access_guard)


class TestAdminAccess:
    """Every admin operation requires the platform admin role"""

    @pytest.mark.asyncio
    async def test_regular_user_denied(
        self, all_dialogs, stats, clean_old, delete_user_messages, direct_dialog
    ):
        with pytest.raises(AccessDeniedError, match="admin access required"):
            await all_dialogs.execute(GetAllDialogsQuery(admin_id=ALICE))
        with pytest.raises(AccessDeniedError):
            await stats.execute(GetChatStatsQuery(admin_id=ALICE))
        with pytest.raises(AccessDeniedError):
            await clean_old.execute(CleanOldMessagesCommand(admin_id=ALICE, days=30))
        with pytest.raises(AccessDeniedError):
            await delete_user_messages.execute(
                DeleteUserMessagesCommand(admin_id=ALICE, dialog_id=direct_dialog, user_id=BOB)
            )


class TestGetAllDialogs:
    @pytest.mark.asyncio
    async def test_paging_and_lightweight_views(self, all_dialogs, create_dialog):
        for participant in (BOB, CAROL, BOB):
            await create_dialog.execute(
                CreateDialogCommand(creator_id=ALICE, participant_ids=(participant,), is_group=True)
            )

        response = await all_dialogs.execute(
            GetAllDialogsQuery(admin_id=ADMIN, criteria=DialogCriteria(page=2, page_size=2))
        )

        assert response.total == 3
        assert response.page == 2
        assert response.total_pages == 2
        assert len(response.dialogs) == 1
        assert response.dialogs[0].participants == []

    @pytest.mark.asyncio
    async def test_filters(self, all_dialogs, create_dialog, direct_dialog, group_dialog):
        casting = await create_dialog.execute(
            CreateDialogCommand(creator_id=ALICE, participant_ids=(BOB,), casting_id=CASTING_ID)
        )

        groups = await all_dialogs.execute(
            GetAllDialogsQuery(admin_id=ADMIN, criteria=DialogCriteria(is_group=True))
        )
        by_casting = await all_dialogs.execute(
            GetAllDialogsQuery(admin_id=ADMIN, criteria=DialogCriteria(casting_id=CASTING_ID))
        )
        with_carol = await all_dialogs.execute(
            GetAllDialogsQuery(admin_id=ADMIN, criteria=DialogCriteria(user_id=CAROL))
        )

        assert [d.id for d in groups.dialogs] == [group_dialog.value]
        assert [d.id for d in by_casting.dialogs] == [casting.id]
        assert [d.id for d in with_carol.dialogs] == [group_dialog.value]

    @pytest.mark.asyncio
    async def test_empty(self, all_dialogs):
        response = await all_dialogs.execute(GetAllDialogsQuery(admin_id=ADMIN))

        assert response.dialogs == []
        assert response.total == 0
        assert response.total_pages == 0


class TestChatStats:
    @pytest.mark.asyncio
    async def test_counts(self, stats, uow, direct_dialog, group_dialog, post):
        await post(direct_dialog, ALICE, "hi")
        await post(direct_dialog, BOB, "hello")
        await post(group_dialog, CAROL, "", type="image")
        old = await post(group_dialog, ALICE, "last month")
        uow.tables.messages[old.value].created_at -= timedelta(days=30)
        uow.tables.dialogs[direct_dialog.value].updated_at -= timedelta(days=30)

        response = await stats.execute(GetChatStatsQuery(admin_id=ADMIN))

        assert response.total_dialogs == 2
        assert response.active_dialogs == 1
        assert response.total_messages == 4
        assert response.messages_this_week == 3
        assert response.messages_by_type == {"text": 3, "image": 1}


class TestCleanOldMessages:
    @pytest.mark.asyncio
    async def test_removes_old_messages_with_dependents(
        self, clean_old, uow, access_guard, uploads, direct_dialog, post
    ):
        old = await post(direct_dialog, BOB, "ancient")
        fresh = await post(direct_dialog, BOB, "recent")
        await AddReactionHandler(uow, access_guard).execute(
            AddReactionCommand(user_id=ALICE, message_id=old, emoji="👍")
        )
        await uploads.upload(
            user_id=BOB.value,
            module="chat",
            entity_type=ATTACHMENT_ENTITY_TYPE,
            entity_id=old.value,
            usage="message_attachment",
            is_public=False,
            file=AttachmentFile("old.pdf", b"%PDF", "application/pdf"),
        )
        uow.tables.messages[old.value].created_at -= timedelta(days=40)

        result = await clean_old.execute(CleanOldMessagesCommand(admin_id=ADMIN, days=30))

        assert result.deleted_messages == 1
        assert result.deleted_attachments == 1
        assert list(uow.tables.messages) == [fresh.value]
        assert uow.tables.reactions == {}
        assert uploads.records == {}

    @pytest.mark.asyncio
    async def test_days_must_be_positive(self, clean_old):
        with pytest.raises(DomainValidationError):
            await clean_old.execute(CleanOldMessagesCommand(admin_id=ADMIN, days=0))


class TestDeleteUserMessages:
    @pytest.mark.asyncio
    async def test_soft_deletes_only_that_user(
        self, delete_user_messages, uow, group_dialog, post
    ):
        await post(group_dialog, BOB, "spam 1")
        await post(group_dialog, BOB, "spam 2")
        keep = await post(group_dialog, CAROL, "legit")

        deleted = await delete_user_messages.execute(
            DeleteUserMessagesCommand(admin_id=ADMIN, dialog_id=group_dialog, user_id=BOB)
        )

        assert deleted == 2
        visible = [m.id for m in uow.tables.messages.values() if m.deleted_at is None]
        assert visible == [keep]

    @pytest.mark.asyncio
    async def test_missing_dialog(self, delete_user_messages):
        with pytest.raises(EntityNotFoundError):
            await delete_user_messages.execute(
                DeleteUserMessagesCommand(admin_id=ADMIN, dialog_id=DialogId.generate(), user_id=BOB)
            )
