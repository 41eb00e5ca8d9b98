"""
ResponseBuilder - Read-only projection of dialogs and messages into DTOs.

Resolves user names through the user directory and attachments through the
upload port. Reply and forward references are expanded recursively up to
ChatPolicy.reference_depth levels, and a visited set stops cycles.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from casting_chat.application.dto.dialog import DialogResponse, ParticipantResponse
from casting_chat.application.dto.message import (
    AttachmentResponse,
    MessageResponse,
    ReactionResponse,
    ReadReceiptResponse,
)
from casting_chat.application.services.attachment_linker import ATTACHMENT_ENTITY_TYPE
from casting_chat.config.policies import ChatPolicy
from casting_chat.domain.entities.dialog import Dialog
from casting_chat.domain.entities.message import Message
from casting_chat.domain.exceptions import EntityNotFoundError
from casting_chat.domain.ports.unit_of_work import ChatRepositories
from casting_chat.domain.ports.upload_service import UploadService
from casting_chat.domain.ports.user_directory import UserDirectory
from casting_chat.domain.value_objects.message_id import MessageId
from casting_chat.domain.value_objects.user_id import UserId
from casting_chat.observability.metrics import MetricsErrorType, record_error

logger = logging.getLogger(__name__)

SYSTEM_SENDER_NAME = "System"
UNKNOWN_SENDER_NAME = "Unknown user"


class ResponseBuilder:
    def __init__(
        self,
        user_directory: UserDirectory,
        upload_service: UploadService,
        policy: ChatPolicy,
    ):
        self._user_directory = user_directory
        self._upload_service = upload_service
        self._policy = policy

    async def build_dialog(
        self, repos: ChatRepositories, dialog: Dialog, user_id: UserId
    ) -> DialogResponse:
        """
        Build the dialog view as seen by user_id.

        Raises:
            EntityNotFoundError: If a participant's user record no longer exists
        """
        now = datetime.now(timezone.utc)
        participants = await repos.participants.list_by_dialog(dialog.id)

        views: list[ParticipantResponse] = []
        caller_muted = False
        for participant in participants:
            user = await self._user_directory.find_by_id(participant.user_id.value)
            if user is None:
                raise EntityNotFoundError(f"User {participant.user_id.value} not found")
            if participant.user_id == user_id:
                caller_muted = participant.is_muted
            views.append(
                ParticipantResponse(
                    user_id=participant.user_id.value,
                    user_name=user.display_name,
                    role=participant.role.value,
                    joined_at=participant.joined_at,
                    last_seen_at=participant.last_seen_at,
                    is_muted=participant.is_muted,
                    is_typing=participant.is_typing(now),
                )
            )

        last_message = None
        latest = await repos.messages.get_latest(dialog.id)
        if latest is not None:
            last_message = await self.build_message(repos, latest)

        unread_count = await repos.messages.count_unread(dialog.id, user_id)

        return DialogResponse(
            id=dialog.id.value,
            is_group=dialog.is_group,
            title=dialog.title,
            image_url=dialog.image_url,
            casting_id=dialog.casting_id,
            participants=views,
            last_message=last_message,
            unread_count=unread_count,
            is_muted=caller_muted,
            created_at=dialog.created_at,
            updated_at=dialog.updated_at,
        )

    async def build_message(
        self,
        repos: ChatRepositories,
        message: Message,
        depth: Optional[int] = None,
        visited: Optional[frozenset[MessageId]] = None,
    ) -> MessageResponse:
        if depth is None:
            depth = self._policy.reference_depth
        visited = (visited or frozenset()) | {message.id}

        reply_to = await self._build_reference(repos, message.reply_to_id, depth, visited)
        forward_from = await self._build_reference(
            repos, message.forward_from_id, depth, visited
        )

        return MessageResponse(
            id=message.id.value,
            dialog_id=message.dialog_id.value,
            sender_id=message.sender_id.value,
            sender_name=await self._sender_name(message.sender_id),
            type=message.type.value,
            content=message.content,
            status=message.status.value,
            reply_to=reply_to,
            forward_from=forward_from,
            reactions=await self.build_reactions(repos, message.id),
            attachments=await self._attachments(message.id),
            read_by=[
                ReadReceiptResponse(user_id=r.user_id.value, read_at=r.read_at)
                for r in await repos.receipts.list_by_message(message.id)
            ],
            created_at=message.created_at,
            updated_at=message.updated_at,
        )

    async def _build_reference(
        self,
        repos: ChatRepositories,
        reference_id: Optional[MessageId],
        depth: int,
        visited: frozenset[MessageId],
    ) -> Optional[MessageResponse]:
        if reference_id is None or depth <= 0 or reference_id in visited:
            return None
        referenced = await repos.messages.get_by_id(reference_id)
        if referenced is None:
            return None
        return await self.build_message(repos, referenced, depth - 1, visited)

    async def _sender_name(self, sender_id: UserId) -> str:
        if sender_id.is_system:
            return SYSTEM_SENDER_NAME
        user = await self._user_directory.find_by_id(sender_id.value)
        return user.display_name if user else UNKNOWN_SENDER_NAME

    async def build_reactions(
        self, repos: ChatRepositories, message_id: MessageId
    ) -> list[ReactionResponse]:
        views = []
        for reaction in await repos.reactions.list_by_message(message_id):
            user = await self._user_directory.find_by_id(reaction.user_id.value)
            if user is None:
                # Reactions of users that no longer exist are not shown
                continue
            views.append(
                ReactionResponse(
                    user_id=reaction.user_id.value,
                    user_name=user.display_name,
                    emoji=reaction.emoji,
                    created_at=reaction.created_at,
                )
            )
        return views

    async def _attachments(self, message_id: MessageId) -> list[AttachmentResponse]:
        try:
            uploads = await self._upload_service.get_by_entity(
                ATTACHMENT_ENTITY_TYPE, message_id.value
            )
        except Exception as e:
            logger.warning(
                f"[ResponseBuilder] Attachment lookup failed for message {message_id.value}: {e}"
            )
            record_error(MetricsErrorType.PROJECTION_FAILED)
            return []
        return [
            AttachmentResponse(
                id=u.id,
                filename=u.filename,
                mime_type=u.mime_type,
                size=u.size,
                url=u.url,
            )
            for u in uploads
        ]
