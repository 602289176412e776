from __future__ import annotations

import asyncio
import contextlib
import socket
import threading

import pytest
import websockets
from websockets.sync.server import serve as serve_sync

from wsprobe.probe.config import Settings


@contextlib.asynccontextmanager
async def _serve_ws(handler, **kwargs):
    async with websockets.serve(handler, "127.0.0.1", 0, **kwargs) as server:
        port = server.sockets[0].getsockname()[1]
        yield f"ws://127.0.0.1:{port}/"


@contextlib.asynccontextmanager
async def _serve_tcp(on_connect):
    server = await asyncio.start_server(on_connect, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield f"ws://127.0.0.1:{port}/"
    finally:
        server.close()
        await server.wait_closed()


@contextlib.contextmanager
def _serve_ws_thread(handler):
    server = serve_sync(handler, "127.0.0.1", 0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"ws://127.0.0.1:{server.socket.getsockname()[1]}/"
    finally:
        server.shutdown()
        thread.join(timeout=5)


@pytest.fixture
def serve_ws():
    """Async context manager factory: websockets server on a free loopback port, yields its URL."""
    return _serve_ws


@pytest.fixture
def serve_tcp():
    """Async context manager factory: raw asyncio TCP server, for handshake-level misbehaviour."""
    return _serve_tcp


@pytest.fixture
def serve_ws_thread():
    """Context manager factory: threaded sync websockets server, for code that calls asyncio.run itself."""
    return _serve_ws_thread


@pytest.fixture
def free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def settings():
    return Settings(_env_file=None, ping_interval_s=None, close_timeout_s=0.5)
