"""WebSocket chat tests against an in-memory UoW."""
from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from booktalk_service.api.deps import get_channels, get_uow_factory
from booktalk_service.app import create_app
from booktalk_service.infrastructure.ws.manager import ChannelManager
from tests.conftest import FakeUoW, make_token


@pytest.fixture
def uow() -> FakeUoW:
    return FakeUoW()


@pytest.fixture
def client(uow):
    app = create_app()
    app.dependency_overrides[get_uow_factory] = lambda: (lambda: uow)
    with TestClient(app) as client:
        yield client


def _connect(client: TestClient, user_id: uuid.UUID):
    return client.websocket_connect(f"/ws/chat?token={make_token(user_id)}")


def test_garbage_token_is_refused(client):
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/ws/chat?token=garbage"):
            pass
    assert exc_info.value.code == 4001


def test_expired_token_is_refused(client):
    token = make_token(uuid.uuid4(), expires_in=-60)
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(f"/ws/chat?token={token}"):
            pass


def test_missing_token_is_refused(client):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws/chat"):
            pass


def test_authorization_header_is_accepted(client):
    headers = {"Authorization": f"Bearer {make_token(uuid.uuid4())}"}
    with client.websocket_connect("/ws/chat", headers=headers) as ws:
        ws.send_json({"event": "ping"})
        assert ws.receive_json()["event"] == "pong"


def test_message_reaches_sender_and_receiver_only(client, uow):
    a, b, c = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()

    with _connect(client, a) as ws_a, _connect(client, b) as ws_b, _connect(client, c) as ws_c:
        ws_a.send_json({"event": "sendMessage", "data": {"receiverId": str(b), "text": "hi"}})

        for ws in (ws_a, ws_b):
            frame = ws.receive_json()
            assert frame["event"] == "receiveMessage"
            assert frame["data"]["message"]["text"] == "hi"
            assert frame["data"]["message"]["senderId"] == str(a)

        # C's next frame is the reply to its own ping, nothing queued before it.
        ws_c.send_json({"event": "ping"})
        assert ws_c.receive_json() == {"event": "pong", "data": {}}

    assert [m.text for m in uow.messages._messages] == ["hi"]


def test_missing_text_is_reported_to_sender_only(client, uow):
    a, b = uuid.uuid4(), uuid.uuid4()

    with _connect(client, a) as ws_a, _connect(client, b) as ws_b:
        ws_a.send_json({"event": "sendMessage", "data": {"receiverId": str(b)}})

        assert ws_a.receive_json() == {"event": "error", "data": {"message": "Missing fields"}}

        ws_b.send_json({"event": "ping"})
        assert ws_b.receive_json()["event"] == "pong"

    assert uow.messages._messages == []


def test_storage_failure_reports_message_not_sent(client, uow):
    a = uuid.uuid4()
    uow.messages_w.fail_with = RuntimeError("database down")

    with _connect(client, a) as ws:
        ws.send_json({"event": "sendMessage", "data": {"receiverId": str(uuid.uuid4()), "text": "hi"}})
        assert ws.receive_json() == {"event": "error", "data": {"message": "Message not sent"}}


def test_unknown_event_and_bad_payload(client):
    with _connect(client, uuid.uuid4()) as ws:
        ws.send_json({"event": "dance"})
        assert ws.receive_json()["data"]["message"] == "Unknown event: dance"

        ws.send_text("not json")
        assert ws.receive_json()["data"]["message"] == "Invalid payload"


def test_open_connection_counts_as_a_channel(client):
    with _connect(client, uuid.uuid4()) as ws:
        ws.send_json({"event": "ping"})
        ws.receive_json()
        assert client.get("/healthz").json()["channels"] == 1


def test_binary_frame_is_rejected_and_connection_stays_usable(client):
    with _connect(client, uuid.uuid4()) as ws:
        ws.send_bytes(b"\x00\x01")
        assert ws.receive_json() == {"event": "error", "data": {"message": "Invalid payload"}}

        ws.send_json({"event": "ping"})
        assert ws.receive_json()["event"] == "pong"


def test_unexpected_failure_closes_the_socket(uow):
    class BrokenChannels(ChannelManager):
        async def broadcast_message(self, message) -> None:
            raise RuntimeError("fan-out exploded")

    app = create_app()
    app.dependency_overrides[get_uow_factory] = lambda: (lambda: uow)
    app.dependency_overrides[get_channels] = lambda: BrokenChannels()

    with TestClient(app) as client, _connect(client, uuid.uuid4()) as ws:
        ws.send_json({"event": "sendMessage", "data": {"receiverId": str(uuid.uuid4()), "text": "hi"}})
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()

    assert exc_info.value.code == 1011


def test_events_from_one_connection_are_handled_in_order(client, uow):
    a, b = uuid.uuid4(), uuid.uuid4()
    texts = ["one", "two", "three"]

    with _connect(client, a) as ws_a, _connect(client, b) as ws_b:
        for text in texts:
            ws_a.send_json({"event": "sendMessage", "data": {"receiverId": str(b), "text": text}})

        received_by_b = [ws_b.receive_json()["data"]["message"]["text"] for _ in texts]
        echoed_to_a = [ws_a.receive_json()["data"]["message"]["text"] for _ in texts]

    assert received_by_b == texts
    assert echoed_to_a == texts
    assert [m.text for m in uow.messages._messages] == texts
