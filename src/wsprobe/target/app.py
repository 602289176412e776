from __future__ import annotations

import argparse
from typing import Optional

import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from wsprobe.probe.config import get_settings

# Stub endpoints with known behaviour, for pointing the probe at something local.
app = FastAPI()


def _debug(route: str, text: str) -> None:
    if get_settings().debug_log_msgs:
        print(f"[target:{route}] {text}")


@app.get("/healthz")
def healthz():
    return {"ok": True}


@app.websocket("/ws/echo")
async def echo(ws: WebSocket, count: Optional[int] = None):
    """Echo every text frame; close cleanly after `count` frames (never, if omitted)."""
    await ws.accept()
    seen = 0
    try:
        while count is None or seen < count:
            raw = await ws.receive_text()
            seen += 1
            _debug("echo", f"in #{seen} len={len(raw)} from={getattr(ws.client, 'host', None)}")
            await ws.send_text(raw)
    except WebSocketDisconnect:
        return
    await ws.close(code=1000)


@app.websocket("/ws/sink")
async def sink(ws: WebSocket, count: Optional[int] = None):
    """Read frames without replying; close cleanly after `count` frames (never, if omitted)."""
    await ws.accept()
    seen = 0
    try:
        while count is None or seen < count:
            raw = await ws.receive_text()
            seen += 1
            _debug("sink", f"in #{seen} len={len(raw)}")
    except WebSocketDisconnect:
        return
    await ws.close(code=1000)


@app.websocket("/ws/close")
async def close_now(ws: WebSocket):
    await ws.accept()
    _debug("close", f"closing {getattr(ws.client, 'host', None)} right after handshake")
    await ws.close(code=1000)


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Run stub WebSocket endpoints (echo / sink / close) for probing.")
    ap.add_argument("--host", default=settings.target_host, help=f"Bind address (default: {settings.target_host})")
    ap.add_argument("--port", type=int, default=settings.target_port, help=f"Bind port (default: {settings.target_port})")
    args = ap.parse_args()

    print(f"[target] listening on ws://{args.host}:{args.port}/ws/{{echo,sink,close}}")
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
