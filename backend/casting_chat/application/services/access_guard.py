"""
AccessGuard - Membership and role checks run before any dialog state is touched.

Non-members always get AccessDeniedError, never EntityNotFoundError, so a
caller cannot learn which dialog ids exist.
"""

import logging

from casting_chat.domain.entities.participant import Participant
from casting_chat.domain.exceptions import AccessDeniedError, EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import ChatRepositories
from casting_chat.domain.ports.user_directory import UserDirectory, UserRecord
from casting_chat.domain.value_objects.dialog_id import DialogId
from casting_chat.domain.value_objects.enums import ParticipantRole
from casting_chat.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)

PLATFORM_ADMIN_ROLE = "admin"


class AccessGuard:
    def __init__(self, user_directory: UserDirectory):
        self._user_directory = user_directory

    async def is_member(
        self, repos: ChatRepositories, dialog_id: DialogId, user_id: UserId
    ) -> bool:
        return await repos.participants.get(dialog_id, user_id) is not None

    async def get_participant(
        self, repos: ChatRepositories, dialog_id: DialogId, user_id: UserId
    ) -> Participant:
        participant = await repos.participants.get(dialog_id, user_id)
        if participant is None:
            raise EntityNotFoundError(
                f"Participant {user_id.value} not found in dialog {dialog_id.value}"
            )
        return participant

    async def require_member(
        self, repos: ChatRepositories, dialog_id: DialogId, user_id: UserId
    ) -> Participant:
        participant = await repos.participants.get(dialog_id, user_id)
        if participant is None:
            logger.info(
                f"[AccessGuard] Denied {user_id.value} on dialog {dialog_id.value}: not a member"
            )
            raise AccessDeniedError("access denied")
        return participant

    @staticmethod
    def require_role(participant: Participant, *roles: ParticipantRole) -> None:
        if participant.role not in roles:
            raise AccessDeniedError("insufficient permissions")

    async def require_user(self, user_id: UserId) -> UserRecord:
        """Look a user up in the directory; unknown ids raise EntityNotFoundError."""
        user = await self._user_directory.find_by_id(user_id.value)
        if user is None:
            raise EntityNotFoundError(f"User {user_id.value} not found")
        return user

    async def require_admin_user(self, user_id: UserId) -> UserRecord:
        user = await self._user_directory.find_by_id(user_id.value)
        if user is None or user.role != PLATFORM_ADMIN_ROLE:
            raise AccessDeniedError("admin access required")
        return user
