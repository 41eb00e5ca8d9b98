"""
UserId Value Object

User ids are owned by the user directory, so only emptiness is checked here.
The literal "system" is reserved for automated messages.
"""

from dataclasses import dataclass

SYSTEM_SENDER = "system"


@dataclass(frozen=True)
class UserId:
    value: str  # user_id

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("UserId cannot be empty")

    @classmethod
    def system(cls) -> "UserId":
        return cls(SYSTEM_SENDER)

    @property
    def is_system(self) -> bool:
        return self.value == SYSTEM_SENDER

    def __str__(self) -> str:
        return self.value
