"""Tests for the stub target endpoints."""

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from wsprobe.target.app import app


@pytest.fixture
def client():
    return TestClient(app)


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}


def test_echo_closes_after_count(client):
    with client.websocket_connect("/ws/echo?count=2") as ws:
        ws.send_text("hello zig")
        assert ws.receive_text() == "hello zig"
        ws.send_text("hello zig again")
        assert ws.receive_text() == "hello zig again"
        with pytest.raises(WebSocketDisconnect) as exc:
            ws.receive_text()
    assert exc.value.code == 1000


def test_echo_without_count_keeps_going(client):
    with client.websocket_connect("/ws/echo") as ws:
        for i in range(5):
            ws.send_text(str(i))
            assert ws.receive_text() == str(i)


def test_sink_never_replies(client):
    with client.websocket_connect("/ws/sink?count=4") as ws:
        for m in ("hello zig", "hello zig again", "What I'm doing?", "testing the inputs!"):
            ws.send_text(m)
        msg = ws.receive()
    assert msg["type"] == "websocket.close"
    assert msg["code"] == 1000


def test_close_right_after_accept(client):
    with client.websocket_connect("/ws/close") as ws:
        with pytest.raises(WebSocketDisconnect) as exc:
            ws.receive_text()
    assert exc.value.code == 1000
