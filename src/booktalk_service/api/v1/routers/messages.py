from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from booktalk_service.api.deps import ChannelsDep, CurrentPrincipal, UoWDep
from booktalk_service.api.v1.schemas.chat import ChatListResponse, ChatSummaryResponse
from booktalk_service.api.v1.schemas.message import (
    MessageEnvelope,
    MessageListResponse,
    MessageResponse,
    SendMessageRequest,
)
from booktalk_service.application.exceptions import ValidationError
from booktalk_service.services import chat_list_service, message_service

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.post("", response_model=MessageEnvelope, status_code=201)
async def send_message(
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    channels: ChannelsDep,
) -> MessageEnvelope:
    if not body.receiver_id or not body.text:
        raise ValidationError("Missing fields")
    msg = await message_service.create_message(
        principal.user_id, body.receiver_id, body.text, uow,
    )
    await channels.broadcast_message(msg)
    return MessageEnvelope(message=MessageResponse.model_validate(msg))


@router.get("", response_model=MessageListResponse)
async def list_my_messages(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageListResponse:
    messages = await message_service.list_messages_for_user(principal, uow)
    return MessageListResponse(
        messages=[MessageResponse.model_validate(m) for m in messages],
    )


@router.get("/chats", response_model=ChatListResponse)
async def list_chats(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ChatListResponse:
    chats = await chat_list_service.list_chats(principal, uow)
    return ChatListResponse(
        chats=[ChatSummaryResponse.model_validate(c) for c in chats],
    )


@router.get("/conversation/{other_user_id}", response_model=MessageListResponse)
async def get_conversation(
    other_user_id: str,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageListResponse:
    messages = await message_service.list_conversation(principal, other_user_id, uow)
    return MessageListResponse(
        messages=[MessageResponse.model_validate(m) for m in messages],
    )


@router.get("/{user_id}", response_model=MessageListResponse)
async def list_messages_for_user(
    user_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageListResponse:
    messages = await message_service.list_messages_for_user(principal, uow, user_id=user_id)
    return MessageListResponse(
        messages=[MessageResponse.model_validate(m) for m in messages],
    )
