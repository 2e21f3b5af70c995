"""In-process registry of per-user logical channels."""
from __future__ import annotations

import logging
import uuid
from uuid import UUID

from fastapi import WebSocket

from booktalk_service.api.v1.schemas.message import MessageResponse
from booktalk_service.application.dto.principal import Principal
from booktalk_service.domain.entities.message import Message
from booktalk_service.domain.value_objects.enums import ConnectionState
from booktalk_service.infrastructure.ws.protocol import ReceiveMessageEvent, receive_message_frame

logger = logging.getLogger(__name__)


class Connection:
    """One WebSocket and its lifecycle: connecting → authenticated → active → closed."""

    def __init__(self, ws: WebSocket) -> None:
        self.ws = ws
        self.id = uuid.uuid4().hex[:12]
        self.state = ConnectionState.CONNECTING
        self.user_id: UUID | None = None

    def authenticate(self, principal: Principal) -> None:
        if self.state != ConnectionState.CONNECTING:
            raise RuntimeError(f"Cannot authenticate a {self.state} connection")
        self.user_id = principal.user_id
        self.state = ConnectionState.AUTHENTICATED

    async def activate(self) -> None:
        if self.state != ConnectionState.AUTHENTICATED:
            raise RuntimeError(f"Cannot activate a {self.state} connection")
        await self.ws.accept()
        self.state = ConnectionState.ACTIVE

    def close(self) -> None:
        self.state = ConnectionState.CLOSED

    @property
    def is_active(self) -> bool:
        return self.state == ConnectionState.ACTIVE

    async def send(self, frame: str) -> bool:
        """Deliver one frame. Failure closes only this connection."""
        if not self.is_active:
            return False
        try:
            await self.ws.send_text(frame)
        except Exception as exc:  # noqa: BLE001
            logger.debug("WS send failed on %s: %s", self.id, exc)
            self.close()
            return False
        return True


class ChannelManager:
    """Tracks live connections per user.

    Membership is only mutated from the event loop with no await between
    lookup and update, so joins and leaves for one user never interleave.
    """

    def __init__(self) -> None:
        self._channels: dict[UUID, set[Connection]] = {}

    async def connect(self, conn: Connection) -> None:
        await conn.activate()
        assert conn.user_id is not None
        self._channels.setdefault(conn.user_id, set()).add(conn)
        logger.debug(
            "WS connected: %s conn=%s (members=%d)",
            conn.user_id, conn.id, len(self._channels[conn.user_id]),
        )

    def disconnect(self, conn: Connection) -> None:
        conn.close()
        if conn.user_id is None:
            return
        members = self._channels.get(conn.user_id)
        if members:
            members.discard(conn)
            if not members:
                del self._channels[conn.user_id]
        logger.debug("WS disconnected: %s conn=%s", conn.user_id, conn.id)

    def members(self, user_id: UUID) -> int:
        return len(self._channels.get(user_id, ()))

    @property
    def channel_count(self) -> int:
        return len(self._channels)

    async def send_to_user(self, user_id: UUID, frame: str) -> int:
        """Send a frame to every live connection of a user. Returns deliveries."""
        delivered = 0
        dead: list[Connection] = []
        for conn in list(self._channels.get(user_id, ())):
            if await conn.send(frame):
                delivered += 1
            else:
                dead.append(conn)
        for conn in dead:
            self.disconnect(conn)
        return delivered

    async def broadcast_message(self, message: Message) -> None:
        """Push a stored message to the receiver's and the sender's channels."""
        frame = receive_message_frame(
            ReceiveMessageEvent(message=MessageResponse.model_validate(message))
        )
        # A set so a self-message reaches each connection once.
        for user_id in {message.receiver_id, message.sender_id}:
            await self.send_to_user(user_id, frame)
