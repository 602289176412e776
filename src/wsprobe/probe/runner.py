from __future__ import annotations

import asyncio
import sys
import time
from collections.abc import Iterable

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException
from websockets.protocol import State

from .config import Settings, get_settings
from .constants import (
    D_RECEIVED,
    D_SENT,
    O_SUCCESS,
    S_CLOSED,
    S_CLOSING,
    S_CONNECTING,
    S_FAILED,
    S_IDLE,
    S_OPEN,
    S_TIMED_OUT,
    TERMINAL_STATES,
)
from .errors import ConnectionDropped, HandshakeFailure, ProbeError, ProbeTimeout, SendFailure
from .models import Endpoint, ProbeResult
from .transcript import Transcript


class ProbeRunner:
    """
    One probe: open a single connection, send the message sequence in order,
    record inbound frames concurrently, and report how the connection ended.

    Single-use: `run()` may be awaited once per instance.
    """

    def __init__(
        self,
        endpoint: Endpoint | str,
        messages: Iterable[str],
        *,
        settings: Settings | None = None,
    ) -> None:
        self.endpoint = endpoint if isinstance(endpoint, Endpoint) else Endpoint.parse(endpoint)
        if isinstance(messages, str):
            raise TypeError("messages must be a sequence of strings, not a single str")
        self.messages = tuple(messages)
        for i, m in enumerate(self.messages):
            if not isinstance(m, str):
                raise TypeError(f"message #{i} is {type(m).__name__}, expected str")
        self.settings = settings or get_settings()
        self.state = S_IDLE
        self.transcript = Transcript()
        self._ws = None
        self._deadline: float | None = None
        self._started = False

    def _log(self, text: str) -> None:
        if self.settings.debug_log_msgs:
            print(f"[probe] {text}", file=sys.stderr)

    def _transition(self, state: str) -> None:
        self._log(f"state {self.state} -> {state}")
        self.state = state

    async def run(self, timeout: float) -> ProbeResult:
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout!r}")
        if self._started:
            raise RuntimeError("ProbeRunner.run() may only be called once")
        self._started = True

        t0 = time.perf_counter()
        self._deadline = asyncio.get_running_loop().time() + timeout
        self.transcript = Transcript(started=t0)
        error: ProbeError | None = None
        try:
            await asyncio.wait_for(self._exchange(), timeout)
        except asyncio.TimeoutError:
            error = ProbeTimeout(f"no terminal event within {timeout:g}s (last state: {self.state})")
            self._transition(S_TIMED_OUT)
        except ProbeError as e:
            error = e
            self._transition(S_FAILED)
        finally:
            await self._release()

        if error is not None:
            self._log(f"{error.kind}: {error}")
        return ProbeResult(
            endpoint=self.endpoint.url,
            outcome=O_SUCCESS if error is None else error.outcome,
            state=self.state,
            events=self.transcript.seal(),
            error=str(error) if error is not None else None,
            error_kind=error.kind if error is not None else None,
            duration_ms=(time.perf_counter() - t0) * 1000.0,
        )

    async def _exchange(self) -> None:
        self._transition(S_CONNECTING)
        try:
            # open_timeout=None: the probe-wide deadline bounds the handshake
            self._ws = await websockets.connect(
                self.endpoint.url,
                open_timeout=None,
                close_timeout=self.settings.close_timeout_s,
                ping_interval=self.settings.ping_interval_s,
                ping_timeout=self.settings.ping_timeout_s,
                max_size=self.settings.max_size,
            )
        except (OSError, WebSocketException) as e:
            raise HandshakeFailure(f"{self.endpoint.url}: {e!r}") from e

        ws = self._ws
        self._transition(S_OPEN)
        receiver = asyncio.create_task(self._receive(ws))
        try:
            for i, message in enumerate(self.messages):
                try:
                    await ws.send(message)
                except ConnectionClosed as e:
                    raise SendFailure(f"send #{i} of {len(self.messages)} failed: {e}") from e
                self.transcript.append(D_SENT, message)
                self._log(f"-> {message!r}")

            try:
                await receiver
            except ConnectionClosed as e:
                raise ConnectionDropped(str(e)) from e
            self._transition(S_CLOSING)
        finally:
            receiver.cancel()
            await asyncio.gather(receiver, return_exceptions=True)

    async def _receive(self, ws) -> None:
        # Ends quietly on a clean close; raises ConnectionClosedError otherwise.
        async for raw in ws:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8", errors="replace")
            self.transcript.append(D_RECEIVED, raw)
            self._log(f"<- {raw!r}")

    async def _release(self) -> None:
        ws, self._ws = self._ws, None
        if ws is not None and ws.protocol.state is not State.CLOSED:
            if self.state == S_TIMED_OUT:
                ws.transport.abort()
            else:
                # graceful close, but never past the probe deadline
                remaining = self._deadline - asyncio.get_running_loop().time()
                budget = max(0.0, min(self.settings.close_timeout_s, remaining))
                try:
                    await asyncio.wait_for(ws.close(), budget)
                except asyncio.TimeoutError:
                    ws.transport.abort()
        if self.state not in TERMINAL_STATES:
            self._transition(S_CLOSED)


async def run(
    endpoint: Endpoint | str,
    messages: Iterable[str],
    timeout: float,
    *,
    settings: Settings | None = None,
) -> ProbeResult:
    """Run one probe and return its result. Connection failures and timeouts never raise."""
    return await ProbeRunner(endpoint, messages, settings=settings).run(timeout)
