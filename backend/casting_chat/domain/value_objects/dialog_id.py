"""
DialogId Value Object - UUID wrapper for dialog identity.
"""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DialogId:
    value: str  # dialog_id, presented as UUID string

    def __post_init__(self):
        if not self.value:
            raise ValueError("Dialog ID cannot be empty")
        UUID(self.value)  # raises ValueError if invalid UUID

    @classmethod
    def generate(cls) -> "DialogId":
        return cls(str(uuid4()))

    def __str__(self) -> str:
        return self.value
