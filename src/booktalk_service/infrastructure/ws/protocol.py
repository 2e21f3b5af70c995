"""WebSocket envelope and the typed payload of each event kind."""
from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from booktalk_service.api.v1.schemas.message import MessageResponse
from booktalk_service.domain.value_objects.enums import ServerEvent


class WsInbound(BaseModel):
    """Client → Server."""

    event: str  # sendMessage | ping
    data: dict[str, Any] = {}


class WsOutbound(BaseModel):
    """Server → Client."""

    event: ServerEvent
    data: dict[str, Any] = {}


class SendMessageEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    receiver_id: str | None = Field(
        None, validation_alias=AliasChoices("receiverId", "receiverID", "receiver_id"),
    )
    text: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.receiver_id and self.receiver_id.strip() and self.text and self.text.strip())


class ReceiveMessageEvent(BaseModel):
    message: MessageResponse


class ErrorEvent(BaseModel):
    message: str


def receive_message_frame(event: ReceiveMessageEvent) -> str:
    return WsOutbound(
        event=ServerEvent.RECEIVE_MESSAGE,
        data=event.model_dump(by_alias=True, mode="json"),
    ).model_dump_json()


def error_frame(message: str) -> str:
    return WsOutbound(
        event=ServerEvent.ERROR,
        data=ErrorEvent(message=message).model_dump(mode="json"),
    ).model_dump_json()


def pong_frame() -> str:
    return WsOutbound(event=ServerEvent.PONG).model_dump_json()
