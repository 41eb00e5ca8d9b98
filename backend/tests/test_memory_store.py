"""
In-memory unit of work tests: commit, rollback and copy isolation.
"""

import pytest

from casting_chat.domain.entities import Dialog, Participant
from casting_chat.domain.value_objects import ParticipantRole
from casting_chat.infrastructure.memory import InMemoryUnitOfWork
from conftest import ALICE, BOB


class TestInMemoryUnitOfWork:
    @pytest.mark.asyncio
    async def test_commit_on_clean_exit(self):
        uow = InMemoryUnitOfWork()
        dialog = Dialog.create(is_group=False)

        async with uow.transaction() as repos:
            await repos.dialogs.add(dialog)
            # Not visible outside the transaction until it commits
            assert await uow.repositories().dialogs.get_by_id(dialog.id) is None

        assert await uow.repositories().dialogs.get_by_id(dialog.id) == dialog

    @pytest.mark.asyncio
    async def test_rollback_on_error(self):
        uow = InMemoryUnitOfWork()
        dialog = Dialog.create(is_group=True, title="Doomed")

        with pytest.raises(RuntimeError):
            async with uow.transaction() as repos:
                await repos.dialogs.add(dialog)
                await repos.participants.add_many(
                    [Participant.create(dialog.id, ALICE, ParticipantRole.OWNER)]
                )
                raise RuntimeError("second write failed")

        assert uow.tables.dialogs == {}
        assert uow.tables.participants == {}

    @pytest.mark.asyncio
    async def test_entities_are_copied(self):
        uow = InMemoryUnitOfWork()
        dialog = Dialog.create(is_group=True, title="Original")
        async with uow.transaction() as repos:
            await repos.dialogs.add(dialog)

        loaded = await uow.repositories().dialogs.get_by_id(dialog.id)
        loaded.title = "Changed without save"

        stored = await uow.repositories().dialogs.get_by_id(dialog.id)
        assert stored.title == "Original"

    @pytest.mark.asyncio
    async def test_direct_dialog_lookup(self):
        uow = InMemoryUnitOfWork()
        direct = Dialog.create(is_group=False)
        group = Dialog.create(is_group=True)
        async with uow.transaction() as repos:
            for dialog in (direct, group):
                await repos.dialogs.add(dialog)
                await repos.participants.add_many(
                    [
                        Participant.create(dialog.id, ALICE, ParticipantRole.OWNER),
                        Participant.create(dialog.id, BOB),
                    ]
                )

        found = await uow.repositories().dialogs.find_direct_between(ALICE, BOB)

        assert found.id == direct.id
