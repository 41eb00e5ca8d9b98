"""
Notification Dispatcher - Post-commit fan-out of new-message notifications.

Handlers submit a NewMessageNotice after their transaction commits. The
queued dispatcher hands notices to a single worker task draining a bounded
asyncio.Queue, so submission never blocks and never fails the caller.

Delivery is best effort: failures are logged and counted, never retried,
and a full queue drops the notice.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from casting_chat.config.logging_config import correlation_id_var, set_correlation_id
from casting_chat.domain.ports.notification_service import NotificationService
from casting_chat.domain.ports.unit_of_work import UnitOfWork
from casting_chat.domain.ports.user_directory import UserDirectory
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import (
    MetricsErrorType,
    NotificationOutcome,
    record_error,
    record_notification,
    set_notification_queue_depth,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewMessageNotice:
    dialog_id: str
    sender_id: str
    message_id: str
    # Captured where the notice is built; the worker binds it while delivering
    correlation_id: str = field(default_factory=correlation_id_var.get)


class NotificationDispatcher(ABC):
    @abstractmethod
    def submit(self, notice: NewMessageNotice) -> None:
        """Hand a notice over for delivery. Must not block or raise."""
        ...


class NewMessageFanOut:
    """Notify every participant of a dialog except the sender and muted ones."""

    def __init__(
        self,
        uow: UnitOfWork,
        user_directory: UserDirectory,
        notification_service: NotificationService,
    ):
        self._uow = uow
        self._user_directory = user_directory
        self._notification_service = notification_service

    async def deliver(self, notice: NewMessageNotice) -> int:
        """Returns the number of notifications created."""
        try:
            repos = self._uow.repositories()
            participants = await repos.participants.list_by_dialog(DialogId(notice.dialog_id))
            sender = await self._user_directory.find_by_id(notice.sender_id)
        except Exception as e:
            logger.error(
                f"[NotificationDispatcher] Could not prepare fan-out for message {notice.message_id}: {e}"
            )
            record_error(MetricsErrorType.NOTIFICATION_FAILED)
            record_notification(NotificationOutcome.FAILED)
            return 0

        sender_name = sender.display_name if sender else notice.sender_id
        sender_id = UserId(notice.sender_id)

        sent = 0
        for participant in participants:
            if participant.user_id == sender_id or participant.is_muted:
                continue
            try:
                await self._notification_service.create_new_message_notification(
                    participant.user_id.value, sender_name, notice.dialog_id
                )
            except Exception as e:
                logger.warning(
                    f"[NotificationDispatcher] Notify {participant.user_id.value} failed: {e}"
                )
                record_error(MetricsErrorType.NOTIFICATION_FAILED)
                record_notification(NotificationOutcome.FAILED)
                continue
            record_notification(NotificationOutcome.SENT)
            sent += 1
        return sent


class QueuedNotificationDispatcher(NotificationDispatcher):
    def __init__(self, fan_out: NewMessageFanOut, max_size: int = 1000):
        self._fan_out = fan_out
        self._queue: asyncio.Queue[NewMessageNotice] = asyncio.Queue(maxsize=max_size)
        self._worker: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        """Start the worker on the running loop. Safe to call repeatedly."""
        if self.running:
            return
        self._worker = asyncio.get_running_loop().create_task(self._run())
        logger.info("[NotificationDispatcher] Worker started")

    async def stop(self, drain: bool = True) -> None:
        if drain and self.running:
            await self._queue.join()
        if self._worker is None:
            return
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        logger.info("[NotificationDispatcher] Worker stopped")

    async def join(self) -> None:
        """Wait until every submitted notice has been processed."""
        await self._queue.join()

    def submit(self, notice: NewMessageNotice) -> None:
        if not self.running:
            self.start()
        try:
            self._queue.put_nowait(notice)
        except asyncio.QueueFull:
            logger.warning(
                f"[NotificationDispatcher] Queue full, dropping notice for message {notice.message_id}"
            )
            record_notification(NotificationOutcome.DROPPED)
            return
        set_notification_queue_depth(self._queue.qsize())

    async def _run(self) -> None:
        while True:
            notice = await self._queue.get()
            token = set_correlation_id(notice.correlation_id)
            try:
                await self._fan_out.deliver(notice)
            except Exception as e:
                logger.error(f"[NotificationDispatcher] Unexpected fan-out failure: {e}")
                record_error(MetricsErrorType.NOTIFICATION_FAILED)
            finally:
                correlation_id_var.reset(token)
                self._queue.task_done()
                set_notification_queue_depth(self._queue.qsize())
