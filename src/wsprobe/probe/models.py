from __future__ import annotations

from typing import Annotated, Literal, Optional, TypeAlias
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

Scheme: TypeAlias = Literal["ws", "wss"]
Direction: TypeAlias = Literal["sent", "received"]
Outcome: TypeAlias = Literal["success", "timeout", "connection_error"]
State: TypeAlias = Literal["idle", "connecting", "open", "closing", "closed", "failed", "timed_out"]

DEFAULT_PORTS = {"ws": 80, "wss": 443}


class Endpoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    scheme: Scheme
    # bare hostname or IP literal (IPv6 without brackets); no userinfo, path or query
    host: Annotated[str, Field(min_length=1, pattern=r"^[^/?#@\s\[\]]+$")]
    port: Annotated[int, Field(ge=1, le=65535)]
    path: Annotated[str, Field(pattern=r"^/[^\s#]*$")] = "/"

    @classmethod
    def parse(cls, url: str) -> Endpoint:
        """
        Build an endpoint from a `ws://` / `wss://` URL.

        A missing port falls back to the scheme default (80 / 443). Raises
        ValueError on anything that is not a usable WebSocket URL.
        """
        parts = urlsplit(url.strip())
        scheme = parts.scheme.lower()
        port = parts.port  # ValueError when outside 0-65535
        if port is None:
            port = DEFAULT_PORTS.get(scheme, 0)
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"
        return cls(scheme=scheme, host=parts.hostname or "", port=port, path=path)

    @property
    def url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}{self.path}"


class TranscriptEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    direction: Direction
    payload: str
    ts: Annotated[int, Field(description="unix epoch ms")]
    offset_ms: Annotated[float, Field(description="ms since probe start (monotonic)")]


class ProbeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint: str
    outcome: Outcome
    state: State
    events: tuple[TranscriptEvent, ...] = ()
    error: Optional[str] = None
    error_kind: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.outcome == "success"

    @property
    def sent(self) -> tuple[TranscriptEvent, ...]:
        return tuple(e for e in self.events if e.direction == "sent")

    @property
    def received(self) -> tuple[TranscriptEvent, ...]:
        return tuple(e for e in self.events if e.direction == "received")
