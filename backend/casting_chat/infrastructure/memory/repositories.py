"""
In-memory repository implementations.

Each repository reads its tables through a callable so a bundle bound to the
committed state always sees the latest commit. Entities are copied on the
way in and out; callers must save() to persist a change.
"""

import copy
from datetime import datetime
from typing import Callable, Optional

from casting_chat.domain.entities import (
    Dialog,
    Message,
    MessageReaction,
    Participant,
    ReadReceipt,
)
from casting_chat.domain.ports.repositories import (
    DialogRepository,
    MessageRepository,
    ParticipantRepository,
    ReactionRepository,
    ReadReceiptRepository,
)
from casting_chat.domain.value_objects.criteria import DialogCriteria, MessageCriteria
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.infrastructure.memory.tables import ChatTables

TableSource = Callable[[], ChatTables]


class InMemoryDialogRepository(DialogRepository):
    def __init__(self, tables: TableSource):
        self._tables = tables

    def _member_dialog_ids(self, user_id: UserId) -> set[str]:
        return {
            dialog_id
            for (dialog_id, member_id) in self._tables().participants
            if member_id == user_id.value
        }

    async def get_by_id(self, dialog_id: DialogId) -> Optional[Dialog]:
        dialog = self._tables().dialogs.get(dialog_id.value)
        return copy.copy(dialog) if dialog else None

    async def get_by_casting(self, casting_id: str) -> Optional[Dialog]:
        for dialog in self._tables().dialogs.values():
            if dialog.casting_id == casting_id:
                return copy.copy(dialog)
        return None

    async def get_by_user(self, user_id: UserId) -> list[Dialog]:
        member_of = self._member_dialog_ids(user_id)
        dialogs = [d for d in self._tables().dialogs.values() if d.id.value in member_of]
        dialogs.sort(key=lambda d: d.updated_at, reverse=True)
        return [copy.copy(d) for d in dialogs]

    async def find_direct_between(
        self, user1_id: UserId, user2_id: UserId
    ) -> Optional[Dialog]:
        shared = self._member_dialog_ids(user1_id) & self._member_dialog_ids(user2_id)
        candidates = [
            d
            for d in self._tables().dialogs.values()
            if d.id.value in shared and not d.is_group
        ]
        if not candidates:
            return None
        return copy.copy(max(candidates, key=lambda d: d.updated_at))

    async def search(self, criteria: DialogCriteria) -> tuple[list[Dialog], int]:
        dialogs = list(self._tables().dialogs.values())
        if criteria.is_group is not None:
            dialogs = [d for d in dialogs if d.is_group == criteria.is_group]
        if criteria.casting_id is not None:
            dialogs = [d for d in dialogs if d.casting_id == criteria.casting_id]
        if criteria.user_id is not None:
            member_of = self._member_dialog_ids(criteria.user_id)
            dialogs = [d for d in dialogs if d.id.value in member_of]
        if criteria.start_date is not None:
            dialogs = [d for d in dialogs if d.created_at >= criteria.start_date]
        if criteria.end_date is not None:
            dialogs = [d for d in dialogs if d.created_at <= criteria.end_date]

        dialogs.sort(key=lambda d: d.created_at, reverse=True)
        page = dialogs[criteria.offset : criteria.offset + criteria.page_size]
        return [copy.copy(d) for d in page], len(dialogs)

    async def add(self, dialog: Dialog) -> None:
        self._tables().dialogs[dialog.id.value] = copy.copy(dialog)

    async def save(self, dialog: Dialog) -> None:
        self._tables().dialogs[dialog.id.value] = copy.copy(dialog)

    async def delete(self, dialog_id: DialogId) -> bool:
        return self._tables().dialogs.pop(dialog_id.value, None) is not None

    async def count(self, updated_since: Optional[datetime] = None) -> int:
        dialogs = self._tables().dialogs.values()
        if updated_since is None:
            return len(dialogs)
        return sum(1 for d in dialogs if d.updated_at >= updated_since)


class InMemoryParticipantRepository(ParticipantRepository):
    def __init__(self, tables: TableSource):
        self._tables = tables

    async def get(self, dialog_id: DialogId, user_id: UserId) -> Optional[Participant]:
        participant = self._tables().participants.get((dialog_id.value, user_id.value))
        return copy.copy(participant) if participant else None

    async def list_by_dialog(self, dialog_id: DialogId) -> list[Participant]:
        participants = [
            p for p in self._tables().participants.values() if p.dialog_id == dialog_id
        ]
        participants.sort(key=lambda p: p.joined_at)
        return [copy.copy(p) for p in participants]

    async def add_many(self, participants: list[Participant]) -> None:
        table = self._tables().participants
        for participant in participants:
            table[(participant.dialog_id.value, participant.user_id.value)] = copy.copy(
                participant
            )

    async def save(self, participant: Participant) -> None:
        self._tables().participants[
            (participant.dialog_id.value, participant.user_id.value)
        ] = copy.copy(participant)

    async def delete(self, dialog_id: DialogId, user_id: UserId) -> bool:
        return (
            self._tables().participants.pop((dialog_id.value, user_id.value), None)
            is not None
        )

    async def delete_by_dialog(self, dialog_id: DialogId) -> int:
        table = self._tables().participants
        keys = [key for key in table if key[0] == dialog_id.value]
        for key in keys:
            del table[key]
        return len(keys)


class InMemoryMessageRepository(MessageRepository):
    def __init__(self, tables: TableSource):
        self._tables = tables

    def _visible(self, dialog_id: Optional[DialogId] = None) -> list[Message]:
        """Non-deleted messages, oldest first in insertion order."""
        return [
            m
            for m in self._tables().messages.values()
            if m.deleted_at is None and (dialog_id is None or m.dialog_id == dialog_id)
        ]

    @staticmethod
    def _newest_first(messages: list[Message]) -> list[Message]:
        indexed = list(enumerate(messages))
        indexed.sort(key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [m for _, m in indexed]

    async def get_by_id(self, message_id: MessageId) -> Optional[Message]:
        message = self._tables().messages.get(message_id.value)
        if message is None or message.deleted_at is not None:
            return None
        return copy.copy(message)

    async def get_by_dialog(
        self, dialog_id: DialogId, criteria: MessageCriteria
    ) -> tuple[list[Message], int]:
        messages = self._visible(dialog_id)
        if criteria.types:
            messages = [m for m in messages if m.type in criteria.types]
        if criteria.start_date is not None:
            messages = [m for m in messages if m.created_at >= criteria.start_date]
        if criteria.end_date is not None:
            messages = [m for m in messages if m.created_at <= criteria.end_date]

        ordered = self._newest_first(messages)
        page = ordered[criteria.offset : criteria.offset + criteria.limit]
        return [copy.copy(m) for m in page], len(ordered)

    async def get_latest(self, dialog_id: DialogId) -> Optional[Message]:
        ordered = self._newest_first(self._visible(dialog_id))
        return copy.copy(ordered[0]) if ordered else None

    async def add(self, message: Message) -> None:
        self._tables().messages[message.id.value] = copy.copy(message)

    async def save(self, message: Message) -> None:
        self._tables().messages[message.id.value] = copy.copy(message)

    async def soft_delete_by_sender(
        self, dialog_id: DialogId, sender_id: UserId, when: datetime
    ) -> int:
        deleted = 0
        for message in self._visible(dialog_id):
            if message.sender_id == sender_id:
                message.deleted_at = when
                deleted += 1
        return deleted

    async def list_ids_by_dialog(self, dialog_id: DialogId) -> list[MessageId]:
        return [m.id for m in self._tables().messages.values() if m.dialog_id == dialog_id]

    async def delete_by_dialog(self, dialog_id: DialogId) -> int:
        table = self._tables().messages
        keys = [key for key, m in table.items() if m.dialog_id == dialog_id]
        for key in keys:
            del table[key]
        return len(keys)

    async def list_created_before(self, cutoff: datetime) -> list[MessageId]:
        return [m.id for m in self._tables().messages.values() if m.created_at < cutoff]

    async def delete_many(self, message_ids: list[MessageId]) -> int:
        table = self._tables().messages
        return sum(1 for mid in message_ids if table.pop(mid.value, None) is not None)

    async def count(self, created_since: Optional[datetime] = None) -> int:
        messages = self._visible()
        if created_since is None:
            return len(messages)
        return sum(1 for m in messages if m.created_at >= created_since)

    async def count_by_type(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for message in self._visible():
            counts[message.type.value] = counts.get(message.type.value, 0) + 1
        return counts

    async def get_unread(self, dialog_id: DialogId, user_id: UserId) -> list[Message]:
        receipts = self._tables().receipts
        return [
            copy.copy(m)
            for m in self._visible(dialog_id)
            if m.sender_id != user_id and (m.id.value, user_id.value) not in receipts
        ]

    async def count_unread(self, dialog_id: DialogId, user_id: UserId) -> int:
        return len(await self.get_unread(dialog_id, user_id))


class InMemoryReactionRepository(ReactionRepository):
    def __init__(self, tables: TableSource):
        self._tables = tables

    async def get(self, message_id: MessageId, user_id: UserId) -> Optional[MessageReaction]:
        reaction = self._tables().reactions.get((message_id.value, user_id.value))
        return copy.copy(reaction) if reaction else None

    async def list_by_message(self, message_id: MessageId) -> list[MessageReaction]:
        reactions = [r for r in self._tables().reactions.values() if r.message_id == message_id]
        reactions.sort(key=lambda r: r.created_at)
        return [copy.copy(r) for r in reactions]

    async def save(self, reaction: MessageReaction) -> None:
        self._tables().reactions[
            (reaction.message_id.value, reaction.user_id.value)
        ] = copy.copy(reaction)

    async def delete(self, message_id: MessageId, user_id: UserId) -> bool:
        return (
            self._tables().reactions.pop((message_id.value, user_id.value), None)
            is not None
        )

    async def delete_by_messages(self, message_ids: list[MessageId]) -> int:
        wanted = {mid.value for mid in message_ids}
        table = self._tables().reactions
        keys = [key for key in table if key[0] in wanted]
        for key in keys:
            del table[key]
        return len(keys)


class InMemoryReadReceiptRepository(ReadReceiptRepository):
    def __init__(self, tables: TableSource):
        self._tables = tables

    async def list_by_message(self, message_id: MessageId) -> list[ReadReceipt]:
        receipts = [r for r in self._tables().receipts.values() if r.message_id == message_id]
        receipts.sort(key=lambda r: r.read_at)
        return [copy.copy(r) for r in receipts]

    async def add_many(self, receipts: list[ReadReceipt]) -> int:
        table = self._tables().receipts
        created = 0
        for receipt in receipts:
            key = (receipt.message_id.value, receipt.user_id.value)
            if key in table:
                continue
            table[key] = copy.copy(receipt)
            created += 1
        return created

    async def delete_by_messages(self, message_ids: list[MessageId]) -> int:
        wanted = {mid.value for mid in message_ids}
        table = self._tables().receipts
        keys = [key for key in table if key[0] in wanted]
        for key in keys:
            del table[key]
        return len(keys)
