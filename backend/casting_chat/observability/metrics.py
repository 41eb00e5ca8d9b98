"""
Prometheus Metrics for the chat core.

DEPENDENCY:
    pip install prometheus-client

METRIC TYPES:
    - Gauge: Value goes up/down (e.g., notification queue depth)
    - Counter: Value only goes up (e.g., messages sent)
"""

import functools

from prometheus_client import (
    Gauge,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

from casting_chat.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
    PersistenceError,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
MESSAGES_SENT_TOTAL = Counter(
    "chat_messages_sent_total",
    "Total number of messages sent by type",
    ["type"],
)

DIALOGS_CREATED_TOTAL = Counter(
    "chat_dialogs_created_total",
    "Total number of dialogs created by kind",
    ["kind"],
)

NOTIFICATIONS_TOTAL = Counter(
    "chat_notifications_total",
    "Total number of new-message notifications by outcome",
    ["outcome"],
)

NOTIFICATION_QUEUE_DEPTH = Gauge(
    "chat_notification_queue_depth",
    "Number of notification jobs waiting in the dispatcher queue",
)

ERRORS_TOTAL = Counter(
    "chat_errors_total",
    "Total number of errors by type",
    ["error_type"],
)


# =============================================================================
# LABEL CONSTANTS (avoid hardcoding strings throughout codebase)
# =============================================================================
class MetricsErrorType:
    """Error type labels for chat_errors_total metric."""

    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    PERSISTENCE = "persistence"
    SYSTEM_MESSAGE_FAILED = "system_message_failed"
    NOTIFICATION_FAILED = "notification_failed"
    ATTACHMENT_FAILED = "attachment_failed"
    PROJECTION_FAILED = "projection_failed"
    CLEANUP_FAILED = "cleanup_failed"
    UNEXPECTED = "unexpected"


class DialogKind:
    DIRECT = "direct"
    GROUP = "group"
    CASTING = "casting"


class NotificationOutcome:
    SENT = "sent"
    FAILED = "failed"
    DROPPED = "dropped"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def record_message_sent(message_type: str):
    MESSAGES_SENT_TOTAL.labels(type=message_type).inc()


def record_dialog_created(kind: str):
    DIALOGS_CREATED_TOTAL.labels(kind=kind).inc()


def record_notification(outcome: str):
    NOTIFICATIONS_TOTAL.labels(outcome=outcome).inc()


def set_notification_queue_depth(depth: int):
    NOTIFICATION_QUEUE_DEPTH.set(depth)


def record_error(error_type: str):
    """Call from except blocks. Use MetricsErrorType constants for error_type."""
    ERRORS_TOTAL.labels(error_type=error_type).inc()


def error_type_for(exc: Exception) -> str:
    """Map a chat exception to its chat_errors_total label."""
    if isinstance(exc, AccessDeniedError):
        return MetricsErrorType.ACCESS_DENIED
    if isinstance(exc, EntityNotFoundError):
        return MetricsErrorType.NOT_FOUND
    if isinstance(exc, DomainValidationError):
        return MetricsErrorType.VALIDATION
    if isinstance(exc, PersistenceError):
        return MetricsErrorType.PERSISTENCE
    return MetricsErrorType.UNEXPECTED


def track_errors(func):
    """Count every exception escaping an async handler method, then re-raise."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except Exception as exc:
            record_error(error_type_for(exc))
            raise

    return wrapper


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


# =============================================================================
# EXPORTS
# =============================================================================
__all__ = [
    "record_message_sent",
    "record_dialog_created",
    "record_notification",
    "set_notification_queue_depth",
    "record_error",
    "error_type_for",
    "track_errors",
    "get_metrics_content",
    "MetricsErrorType",
    "DialogKind",
    "NotificationOutcome",
]
