"""
Domain entity and value object tests.

These run without any store: they exercise the rules the entities enforce
on their own (edit window, typing expiry, title and emoji limits, paging
defaults).
"""

from datetime import datetime, timedelta, timezone

import pytest

from casting_chat.domain.entities import Dialog, Message, MessageReaction, Participant
from casting_chat.domain.exceptions import AccessDeniedError, DomainValidationError
from casting_chat.domain.value_objects import (
    DialogCriteria,
    DialogId,
    MessageCriteria,
    MessageId,
    MessageStatus,
    MessageType,
    ParticipantRole,
    UserId,
)

SENDER = UserId("user-sender")
OTHER = UserId("user-other")
WINDOW = timedelta(minutes=15)


def _text(content="hello") -> Message:
    return Message.create(DialogId.generate(), SENDER, MessageType.TEXT, content)


class TestMessageEdit:
    """Message.edit enforces authorship and the edit window"""

    def test_edit_within_window(self):
        message = _text()
        now = message.created_at + timedelta(minutes=5)

        message.edit(SENDER, "fixed typo", WINDOW, now=now)

        assert message.content == "fixed typo"
        assert message.status == MessageStatus.EDITED
        assert message.updated_at == now

    def test_edit_after_window_rejected(self):
        message = _text()

        with pytest.raises(DomainValidationError, match="within 15 minutes"):
            message.edit(SENDER, "too late", WINDOW, now=message.created_at + timedelta(minutes=20))

        assert message.content == "hello"
        assert message.status == MessageStatus.SENT

    def test_edit_by_other_user_rejected(self):
        message = _text()

        with pytest.raises(AccessDeniedError, match="own messages"):
            message.edit(OTHER, "not mine", WINDOW)

    def test_edit_to_blank_text_rejected(self):
        message = _text()

        with pytest.raises(DomainValidationError):
            message.edit(SENDER, "   ", WINDOW)


class TestMessageCreate:
    def test_blank_text_rejected(self):
        with pytest.raises(DomainValidationError):
            _text("  ")

    def test_blank_content_allowed_for_files(self):
        message = Message.create(DialogId.generate(), SENDER, MessageType.FILE, "")
        assert message.content == ""

    def test_system_message_uses_reserved_sender(self):
        message = Message.system(DialogId.generate(), "Chat created")

        assert message.sender_id.is_system
        assert message.type == MessageType.SYSTEM

    def test_soft_delete(self):
        message = _text()
        assert not message.is_deleted

        message.soft_delete()

        assert message.is_deleted


class TestParticipant:
    def test_typing_expires_after_ttl(self):
        participant = Participant.create(DialogId.generate(), SENDER)
        now = datetime.now(timezone.utc)

        participant.set_typing(True, timedelta(seconds=10), now=now)

        assert participant.is_typing(now + timedelta(seconds=5))
        assert not participant.is_typing(now + timedelta(seconds=11))

    def test_typing_cleared(self):
        participant = Participant.create(DialogId.generate(), SENDER)
        participant.set_typing(True, timedelta(seconds=10))

        participant.set_typing(False, timedelta(seconds=10))

        assert participant.typing_until is None
        assert not participant.is_typing()

    @pytest.mark.parametrize(
        "role,can_manage",
        [
            (ParticipantRole.OWNER, True),
            (ParticipantRole.ADMIN, True),
            (ParticipantRole.MEMBER, False),
        ],
    )
    def test_can_manage(self, role, can_manage):
        participant = Participant.create(DialogId.generate(), SENDER, role)
        assert participant.can_manage is can_manage


class TestDialog:
    def test_title_limit(self):
        with pytest.raises(DomainValidationError):
            Dialog.create(is_group=True, title="x" * 101)

    def test_partial_update_keeps_other_fields(self):
        dialog = Dialog.create(is_group=True, title="Old", image_url="/img/a.png")

        dialog.update(title="New")

        assert dialog.title == "New"
        assert dialog.image_url == "/img/a.png"


class TestReaction:
    def test_emoji_is_stripped(self):
        reaction = MessageReaction.create(MessageId.generate(), SENDER, " 👍 ")
        assert reaction.emoji == "👍"

    @pytest.mark.parametrize("emoji", ["", "   ", "x" * 11])
    def test_invalid_emoji(self, emoji):
        with pytest.raises(DomainValidationError):
            MessageReaction.create(MessageId.generate(), SENDER, emoji)


class TestValueObjects:
    def test_unknown_message_type(self):
        with pytest.raises(DomainValidationError, match="Invalid message type"):
            MessageType.parse("sticker")

    def test_unknown_role(self):
        with pytest.raises(DomainValidationError):
            ParticipantRole.parse("superuser")

    def test_empty_user_id(self):
        with pytest.raises(ValueError):
            UserId("")

    def test_dialog_id_must_be_uuid(self):
        with pytest.raises(ValueError):
            DialogId("not-a-uuid")


class TestCriteria:
    """Out-of-range paging values fall back to defaults"""

    @pytest.mark.parametrize(
        "limit,expected",
        [(0, 50), (-5, 50), (20, 20), (100, 100), (500, 100)],
    )
    def test_message_limit(self, limit, expected):
        assert MessageCriteria(limit=limit).limit == expected

    def test_negative_offset(self):
        assert MessageCriteria(offset=-10).offset == 0

    def test_message_page(self):
        assert MessageCriteria(limit=20, offset=40).page == 3

    def test_dialog_page_offset(self):
        criteria = DialogCriteria(page=3, page_size=10)
        assert criteria.offset == 20

    def test_dialog_page_defaults(self):
        criteria = DialogCriteria(page=0, page_size=0)
        assert criteria.page == 1
        assert criteria.page_size == 10
