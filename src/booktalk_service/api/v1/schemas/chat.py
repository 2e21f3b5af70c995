from __future__ import annotations

from datetime import datetime
from uuid import UUID

from booktalk_service.api.v1.schemas.common import CamelModel


class ChatSummaryResponse(CamelModel):
    other_user_id: UUID
    first_name: str | None
    last_name: str | None
    last_message: str
    last_message_time: datetime
    unread_count: int


class ChatListResponse(CamelModel):
    chats: list[ChatSummaryResponse]
