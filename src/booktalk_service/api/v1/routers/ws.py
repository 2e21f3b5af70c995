from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from pydantic import ValidationError as PydanticValidationError
from starlette.websockets import WebSocketState

from booktalk_service.api.deps import ChannelsDep, UoWFactoryDep, VerifierDep
from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.exceptions import AuthError, ValidationError
from booktalk_service.application.uow import UoWFactory
from booktalk_service.config import settings
from booktalk_service.domain.value_objects.enums import ClientEvent
from booktalk_service.infrastructure.ws.manager import ChannelManager, Connection
from booktalk_service.infrastructure.ws.protocol import (
    SendMessageEvent,
    WsInbound,
    error_frame,
    pong_frame,
)
from booktalk_service.services import message_service
from booktalk_service.services.auth_service import authenticate

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])

AUTH_FAILED_CLOSE_CODE = 4001
INTERNAL_ERROR_CLOSE_CODE = 1011


@router.websocket("/ws/chat")
async def ws_chat(
    websocket: WebSocket,
    verifier: VerifierDep,
    channels: ChannelsDep,
    uow_factory: UoWFactoryDep,
    token: str | None = Query(None),
) -> None:
    conn = Connection(websocket)
    try:
        principal = await authenticate(
            token or websocket.headers.get("authorization"), verifier,
        )
    except AuthError as exc:
        # Closing before accept() refuses the handshake outright.
        conn.close()
        logger.info("WS handshake rejected: %s", exc.detail)
        await websocket.close(code=AUTH_FAILED_CLOSE_CODE, reason="Authentication error")
        return

    conn.authenticate(principal)
    await channels.connect(conn)

    heartbeat_task = asyncio.create_task(
        _heartbeat(conn), name=f"ws-heartbeat-{conn.id}",
    )
    try:
        await _read_loop(conn, principal, channels, uow_factory)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS error for %s", principal.user_id)
        await _close_after_error(websocket)
    finally:
        heartbeat_task.cancel()
        channels.disconnect(conn)


async def _close_after_error(websocket: WebSocket) -> None:
    if websocket.client_state != WebSocketState.CONNECTED:
        return
    try:
        await websocket.close(code=INTERNAL_ERROR_CLOSE_CODE)
    except RuntimeError as exc:
        logger.debug("WS close after error failed: %s", exc)


async def _heartbeat(conn: Connection) -> None:
    interval = settings.WS_HEARTBEAT_SECONDS
    while conn.is_active:
        await asyncio.sleep(interval)
        await conn.send(pong_frame())


async def _read_loop(
    conn: Connection,
    principal: Principal,
    channels: ChannelManager,
    uow_factory: UoWFactory,
) -> None:
    # Each event is fully handled before the next is read: per-connection order.
    while True:
        frame = await conn.ws.receive()
        if frame["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(frame.get("code", 1000))
        raw = frame.get("text")
        if raw is None:
            # Binary frames carry no JSON envelope.
            await conn.send(error_frame("Invalid payload"))
            continue
        try:
            msg = WsInbound.model_validate_json(raw)
        except PydanticValidationError:
            await conn.send(error_frame("Invalid payload"))
            continue

        if msg.event == ClientEvent.PING:
            await conn.send(pong_frame())

        elif msg.event == ClientEvent.SEND_MESSAGE:
            await _handle_send(conn, principal, msg.data, channels, uow_factory)

        else:
            await conn.send(error_frame(f"Unknown event: {msg.event}"))


async def _handle_send(
    conn: Connection,
    principal: Principal,
    data: dict[str, Any],
    channels: ChannelManager,
    uow_factory: UoWFactory,
) -> None:
    try:
        event = SendMessageEvent.model_validate(data)
    except PydanticValidationError:
        await conn.send(error_frame("Invalid payload"))
        return

    if not event.is_complete:
        await conn.send(error_frame("Missing fields"))
        return

    try:
        async with uow_factory() as uow:
            msg = await message_service.create_message(
                principal.user_id, event.receiver_id, event.text, uow,
            )
    except ValidationError as exc:
        await conn.send(error_frame(exc.detail))
        return
    except Exception:
        logger.exception("Saving message from %s failed", principal.user_id)
        await conn.send(error_frame("Message not sent"))
        return

    await channels.broadcast_message(msg)
