from __future__ import annotations

from enum import StrEnum


class ConnectionState(StrEnum):
    CONNECTING = "connecting"
    AUTHENTICATED = "authenticated"
    ACTIVE = "active"
    CLOSED = "closed"


class ClientEvent(StrEnum):
    SEND_MESSAGE = "sendMessage"
    PING = "ping"


class ServerEvent(StrEnum):
    RECEIVE_MESSAGE = "receiveMessage"
    ERROR = "error"
    PONG = "pong"


class UserEventType(StrEnum):
    CREATED = "user.created"
    UPDATED = "user.updated"
    DELETED = "user.deleted"
