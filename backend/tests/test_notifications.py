"""
Notification fan-out and dispatcher tests, plus the metric helpers they feed.
"""

import pytest
from prometheus_client import REGISTRY

from casting_chat.application.commands.messages import SendMessageCommand, SendMessageHandler
from casting_chat.application.commands.participants import MuteDialogCommand, MuteDialogHandler
from casting_chat.application.services import (
    NewMessageFanOut,
    NewMessageNotice,
    QueuedNotificationDispatcher,
)
from casting_chat.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    set_correlation_id,
)
from casting_chat.domain.exceptions import AccessDeniedError
from casting_chat.observability.metrics import (
    MetricsErrorType,
    NotificationOutcome,
    error_type_for,
    get_metrics_content,
    track_errors,
)
from conftest import ALICE, BOB, CAROL
from fakes import FailingNotificationService


def _sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def _notice(dialog_id, sender, message_id):
    return NewMessageNotice(
        dialog_id=dialog_id.value, sender_id=sender.value, message_id=message_id.value
    )


class TestNewMessageFanOut:
    """Everyone but the sender and muted participants is notified"""

    @pytest.mark.asyncio
    async def test_skips_sender_and_muted(
        self, uow, access_guard, users, notifications, group_dialog, post
    ):
        await MuteDialogHandler(uow, access_guard).execute(
            MuteDialogCommand(user_id=CAROL, dialog_id=group_dialog, muted=True)
        )
        message_id = await post(group_dialog, ALICE, "Callbacks at noon")
        fan_out = NewMessageFanOut(uow, users, notifications)

        sent = await fan_out.deliver(_notice(group_dialog, ALICE, message_id))

        assert sent == 1
        assert [(n.recipient_id, n.sender_display_name, n.dialog_id) for n in notifications.sent] == [
            (BOB.value, "Alice Employer", group_dialog.value)
        ]

    @pytest.mark.asyncio
    async def test_failures_are_counted_not_raised(self, uow, users, group_dialog, post):
        failing = FailingNotificationService(failing_recipients={BOB.value})
        message_id = await post(group_dialog, ALICE, "Callbacks at noon")
        failed_before = _sample("chat_notifications_total", {"outcome": NotificationOutcome.FAILED})

        sent = await NewMessageFanOut(uow, users, failing).deliver(
            _notice(group_dialog, ALICE, message_id)
        )

        assert sent == 1
        assert [n.recipient_id for n in failing.sent] == [CAROL.value]
        assert (
            _sample("chat_notifications_total", {"outcome": NotificationOutcome.FAILED})
            == failed_before + 1
        )

    @pytest.mark.asyncio
    async def test_unknown_sender_falls_back_to_id(
        self, uow, users, notifications, direct_dialog, post
    ):
        message_id = await post(direct_dialog, BOB, "hello")
        users.remove(BOB.value)

        await NewMessageFanOut(uow, users, notifications).deliver(
            _notice(direct_dialog, BOB, message_id)
        )

        assert [n.sender_display_name for n in notifications.sent] == [BOB.value]


class TestQueuedNotificationDispatcher:
    @pytest.mark.asyncio
    async def test_send_delivers_after_commit(
        self, uow, access_guard, response_builder, users, notifications, direct_dialog
    ):
        dispatcher = QueuedNotificationDispatcher(NewMessageFanOut(uow, users, notifications))
        handler = SendMessageHandler(uow, access_guard, response_builder, dispatcher)

        await handler.execute(
            SendMessageCommand(sender_id=ALICE, dialog_id=direct_dialog, type="text", content="Hi")
        )
        await dispatcher.join()
        await dispatcher.stop()

        assert [n.recipient_id for n in notifications.sent] == [BOB.value]
        assert not dispatcher.running

    @pytest.mark.asyncio
    async def test_full_queue_drops(self, uow, users, notifications, direct_dialog, post):
        message_id = await post(direct_dialog, ALICE, "one")
        dispatcher = QueuedNotificationDispatcher(
            NewMessageFanOut(uow, users, notifications), max_size=1
        )
        dropped_before = _sample("chat_notifications_total", {"outcome": NotificationOutcome.DROPPED})

        # The worker cannot run until this coroutine yields, so the queue fills up
        for _ in range(3):
            dispatcher.submit(_notice(direct_dialog, ALICE, message_id))
        await dispatcher.stop(drain=True)

        assert len(notifications.sent) == 1
        assert (
            _sample("chat_notifications_total", {"outcome": NotificationOutcome.DROPPED})
            == dropped_before + 2
        )

    @pytest.mark.asyncio
    async def test_worker_survives_fan_out_errors(self, uow, users, direct_dialog, post):
        class ExplodingFanOut(NewMessageFanOut):
            async def deliver(self, notice):
                raise RuntimeError("boom")

        message_id = await post(direct_dialog, ALICE, "one")
        dispatcher = QueuedNotificationDispatcher(ExplodingFanOut(uow, users, None))

        dispatcher.submit(_notice(direct_dialog, ALICE, message_id))
        dispatcher.submit(_notice(direct_dialog, ALICE, message_id))
        await dispatcher.join()

        assert dispatcher.running
        await dispatcher.stop()

    @pytest.mark.asyncio
    async def test_worker_logs_under_submitters_correlation_id(
        self, uow, users, notifications, direct_dialog, post
    ):
        seen = []

        class RecordingFanOut(NewMessageFanOut):
            async def deliver(self, notice):
                seen.append(correlation_id_var.get())
                return await super().deliver(notice)

        message_id = await post(direct_dialog, ALICE, "one")
        dispatcher = QueuedNotificationDispatcher(RecordingFanOut(uow, users, notifications))
        # The worker copies its context here, before the caller binds an id
        dispatcher.start()

        token = set_correlation_id("req-42")
        try:
            dispatcher.submit(_notice(direct_dialog, ALICE, message_id))
        finally:
            correlation_id_var.reset(token)
        dispatcher.submit(_notice(direct_dialog, ALICE, message_id))
        await dispatcher.join()
        await dispatcher.stop()

        assert seen == ["req-42", NO_CORRELATION_ID]
        assert len(notifications.sent) == 2

    @pytest.mark.asyncio
    async def test_stop_without_start(self, uow, users, notifications):
        dispatcher = QueuedNotificationDispatcher(NewMessageFanOut(uow, users, notifications))

        await dispatcher.stop()

        assert not dispatcher.running


class TestMetrics:
    def test_error_type_mapping(self):
        assert error_type_for(AccessDeniedError("no")) == MetricsErrorType.ACCESS_DENIED
        assert error_type_for(RuntimeError("x")) == MetricsErrorType.UNEXPECTED

    @pytest.mark.asyncio
    async def test_track_errors_counts_and_reraises(self):
        @track_errors
        async def guarded():
            raise AccessDeniedError("access denied")

        labels = {"error_type": MetricsErrorType.ACCESS_DENIED}
        before = _sample("chat_errors_total", labels)

        with pytest.raises(AccessDeniedError):
            await guarded()

        assert _sample("chat_errors_total", labels) == before + 1

    def test_metrics_exposition(self):
        content, content_type = get_metrics_content()

        assert b"chat_messages_sent_total" in content
        assert content_type.startswith("text/plain")
