from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, Field

from booktalk_service.api.v1.schemas.common import CamelModel


class SendMessageRequest(CamelModel):
    # Optional so that a missing field reaches the service and yields a 400.
    receiver_id: str | None = Field(
        None, validation_alias=AliasChoices("receiverId", "receiverID", "receiver_id"),
    )
    text: str | None = None


class MessageResponse(CamelModel):
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    text: str
    read: bool
    read_at: datetime | None
    created_at: datetime


class MessageEnvelope(CamelModel):
    message: MessageResponse


class MessageListResponse(CamelModel):
    messages: list[MessageResponse]
