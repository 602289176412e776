from __future__ import annotations

from .constants import O_CONNECTION_ERROR, O_TIMEOUT


class ProbeError(Exception):
    """Base for probe failures. Always reported in the result, never raised to callers of run()."""

    kind = "probe_error"
    outcome = O_CONNECTION_ERROR


class HandshakeFailure(ProbeError):
    # DNS / TCP / TLS / HTTP upgrade failed before the connection opened
    kind = "handshake_failure"


class ConnectionDropped(ProbeError):
    kind = "connection_dropped"


class SendFailure(ProbeError):
    # write attempted on a connection that is no longer open
    kind = "send_failure"


class ProbeTimeout(ProbeError):
    kind = "timeout"
    outcome = O_TIMEOUT
