"""
ReadReceipt Entity - Marks that a user has read a message.
"""

from dataclasses import dataclass
from datetime import datetime

from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId


@dataclass
class ReadReceipt:
    message_id: MessageId
    user_id: UserId
    read_at: datetime
