"""
Participant management tests: membership, roles, mute, typing, last seen.
"""

from datetime import timedelta

import pytest

from casting_chat.application.commands.participants import (
    AddParticipantsCommand,
    AddParticipantsHandler,
    MuteDialogCommand,
    MuteDialogHandler,
    RemoveParticipantCommand,
    RemoveParticipantHandler,
    SetTypingCommand,
    SetTypingHandler,
    UpdateLastSeenCommand,
    UpdateLastSeenHandler,
    UpdateParticipantRoleCommand,
    UpdateParticipantRoleHandler,
)
from casting_chat.application.queries.dialogs import GetDialogHandler, GetDialogQuery
from casting_chat.config.policies import ChatPolicy
from casting_chat.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
)
from casting_chat.domain.value_objects import ParticipantRole, UserId
from conftest import ALICE, BOB, CAROL, DAVE


def _role(uow, dialog_id, user_id):
    return uow.tables.participants[(dialog_id.value, user_id.value)].role


class TestAddParticipants:
    @pytest.fixture
    def handler(self, uow, access_guard):
        return AddParticipantsHandler(uow, access_guard)

    @pytest.mark.asyncio
    async def test_existing_members_skipped(self, handler, uow, group_dialog):
        added = await handler.execute(
            AddParticipantsCommand(actor_id=ALICE, dialog_id=group_dialog, user_ids=(BOB, DAVE))
        )

        assert added == 1
        assert _role(uow, group_dialog, DAVE) == ParticipantRole.MEMBER

    @pytest.mark.asyncio
    async def test_member_cannot_add(self, handler, uow, group_dialog):
        with pytest.raises(AccessDeniedError):
            await handler.execute(
                AddParticipantsCommand(actor_id=BOB, dialog_id=group_dialog, user_ids=(DAVE,))
            )
        assert (group_dialog.value, DAVE.value) not in uow.tables.participants

    @pytest.mark.asyncio
    async def test_unknown_user(self, handler, uow, group_dialog):
        with pytest.raises(EntityNotFoundError):
            await handler.execute(
                AddParticipantsCommand(
                    actor_id=ALICE,
                    dialog_id=group_dialog,
                    user_ids=(DAVE, UserId("user-ghost")),
                )
            )
        # Nothing from the batch is kept
        assert (group_dialog.value, DAVE.value) not in uow.tables.participants

    @pytest.mark.asyncio
    async def test_empty_list(self, handler, group_dialog):
        with pytest.raises(DomainValidationError):
            await handler.execute(
                AddParticipantsCommand(actor_id=ALICE, dialog_id=group_dialog, user_ids=())
            )

    @pytest.mark.asyncio
    async def test_non_member_with_empty_list_denied(self, handler, group_dialog):
        with pytest.raises(AccessDeniedError):
            await handler.execute(
                AddParticipantsCommand(actor_id=DAVE, dialog_id=group_dialog, user_ids=())
            )


class TestRemoveParticipant:
    @pytest.fixture
    def handler(self, uow, access_guard):
        return RemoveParticipantHandler(uow, access_guard)

    @pytest.mark.asyncio
    async def test_owner_removes_member(self, handler, uow, group_dialog):
        assert await handler.execute(
            RemoveParticipantCommand(actor_id=ALICE, dialog_id=group_dialog, target_id=BOB)
        )
        assert (group_dialog.value, BOB.value) not in uow.tables.participants

    @pytest.mark.asyncio
    async def test_owner_cannot_be_removed(self, handler, uow, access_guard, group_dialog):
        await UpdateParticipantRoleHandler(uow, access_guard).execute(
            UpdateParticipantRoleCommand(
                actor_id=ALICE, dialog_id=group_dialog, target_id=BOB, new_role="admin"
            )
        )

        with pytest.raises(AccessDeniedError, match="cannot remove dialog owner"):
            await handler.execute(
                RemoveParticipantCommand(actor_id=BOB, dialog_id=group_dialog, target_id=ALICE)
            )

    @pytest.mark.asyncio
    async def test_missing_target(self, handler, group_dialog):
        with pytest.raises(EntityNotFoundError):
            await handler.execute(
                RemoveParticipantCommand(actor_id=ALICE, dialog_id=group_dialog, target_id=DAVE)
            )

    @pytest.mark.asyncio
    async def test_member_cannot_remove(self, handler, group_dialog):
        with pytest.raises(AccessDeniedError):
            await handler.execute(
                RemoveParticipantCommand(actor_id=BOB, dialog_id=group_dialog, target_id=CAROL)
            )


class TestUpdateParticipantRole:
    @pytest.fixture
    def handler(self, uow, access_guard):
        return UpdateParticipantRoleHandler(uow, access_guard)

    @pytest.mark.asyncio
    async def test_promote_to_admin(self, handler, uow, group_dialog):
        await handler.execute(
            UpdateParticipantRoleCommand(
                actor_id=ALICE, dialog_id=group_dialog, target_id=BOB, new_role="admin"
            )
        )
        assert _role(uow, group_dialog, BOB) == ParticipantRole.ADMIN

    @pytest.mark.asyncio
    async def test_ownership_transfer_keeps_single_owner(self, handler, uow, group_dialog):
        await handler.execute(
            UpdateParticipantRoleCommand(
                actor_id=ALICE, dialog_id=group_dialog, target_id=BOB, new_role="owner"
            )
        )

        owners = [
            p.user_id
            for p in uow.tables.participants.values()
            if p.dialog_id == group_dialog and p.role == ParticipantRole.OWNER
        ]
        assert owners == [BOB]
        assert _role(uow, group_dialog, ALICE) == ParticipantRole.ADMIN

    @pytest.mark.asyncio
    async def test_owner_cannot_change_own_role(self, handler, group_dialog):
        with pytest.raises(DomainValidationError):
            await handler.execute(
                UpdateParticipantRoleCommand(
                    actor_id=ALICE, dialog_id=group_dialog, target_id=ALICE, new_role="member"
                )
            )

    @pytest.mark.asyncio
    async def test_only_owner_changes_roles(self, handler, uow, group_dialog):
        await handler.execute(
            UpdateParticipantRoleCommand(
                actor_id=ALICE, dialog_id=group_dialog, target_id=BOB, new_role="admin"
            )
        )

        with pytest.raises(AccessDeniedError):
            await handler.execute(
                UpdateParticipantRoleCommand(
                    actor_id=BOB, dialog_id=group_dialog, target_id=CAROL, new_role="admin"
                )
            )

    @pytest.mark.asyncio
    async def test_invalid_role(self, handler, uow, group_dialog):
        with pytest.raises(DomainValidationError):
            await handler.execute(
                UpdateParticipantRoleCommand(
                    actor_id=ALICE, dialog_id=group_dialog, target_id=BOB, new_role="moderator"
                )
            )
        assert _role(uow, group_dialog, BOB) == ParticipantRole.MEMBER

    @pytest.mark.asyncio
    async def test_non_member_with_invalid_role_denied(self, handler, uow, group_dialog):
        with pytest.raises(AccessDeniedError):
            await handler.execute(
                UpdateParticipantRoleCommand(
                    actor_id=DAVE, dialog_id=group_dialog, target_id=BOB, new_role="king"
                )
            )
        assert _role(uow, group_dialog, BOB) == ParticipantRole.MEMBER


class TestParticipantState:
    """Mute, typing and last-seen are per participant"""

    @pytest.mark.asyncio
    async def test_mute_shows_in_callers_view(
        self, uow, access_guard, response_builder, direct_dialog
    ):
        await MuteDialogHandler(uow, access_guard).execute(
            MuteDialogCommand(user_id=BOB, dialog_id=direct_dialog, muted=True)
        )
        get_dialog = GetDialogHandler(uow, access_guard, response_builder)

        for_bob = await get_dialog.execute(GetDialogQuery(dialog_id=direct_dialog, user_id=BOB))
        for_alice = await get_dialog.execute(GetDialogQuery(dialog_id=direct_dialog, user_id=ALICE))

        assert for_bob.is_muted is True
        assert for_alice.is_muted is False

    @pytest.mark.asyncio
    async def test_typing_indicator(self, uow, access_guard, response_builder, direct_dialog):
        handler = SetTypingHandler(uow, access_guard, ChatPolicy())
        await handler.execute(SetTypingCommand(user_id=BOB, dialog_id=direct_dialog, typing=True))

        view = await GetDialogHandler(uow, access_guard, response_builder).execute(
            GetDialogQuery(dialog_id=direct_dialog, user_id=ALICE)
        )

        typing = {p.user_id: p.is_typing for p in view.participants}
        assert typing == {ALICE.value: False, BOB.value: True}

    @pytest.mark.asyncio
    async def test_typing_expires(self, uow, access_guard, response_builder, direct_dialog):
        handler = SetTypingHandler(uow, access_guard, ChatPolicy(typing_ttl=timedelta(seconds=-1)))
        await handler.execute(SetTypingCommand(user_id=BOB, dialog_id=direct_dialog, typing=True))

        view = await GetDialogHandler(uow, access_guard, response_builder).execute(
            GetDialogQuery(dialog_id=direct_dialog, user_id=ALICE)
        )

        assert not any(p.is_typing for p in view.participants)

    @pytest.mark.asyncio
    async def test_last_seen_moves_forward(self, uow, access_guard, direct_dialog):
        before = uow.tables.participants[(direct_dialog.value, BOB.value)].last_seen_at

        await UpdateLastSeenHandler(uow, access_guard).execute(
            UpdateLastSeenCommand(user_id=BOB, dialog_id=direct_dialog)
        )

        assert uow.tables.participants[(direct_dialog.value, BOB.value)].last_seen_at >= before

    @pytest.mark.asyncio
    async def test_state_changes_require_membership(self, uow, access_guard, direct_dialog):
        with pytest.raises(AccessDeniedError):
            await MuteDialogHandler(uow, access_guard).execute(
                MuteDialogCommand(user_id=DAVE, dialog_id=direct_dialog, muted=True)
            )
