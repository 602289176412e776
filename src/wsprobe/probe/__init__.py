from .constants import (
    D_RECEIVED,
    D_SENT,
    DEFAULT_MESSAGES,
    EXIT_CODES,
    O_CONNECTION_ERROR,
    O_SUCCESS,
    O_TIMEOUT,
)
from .errors import ConnectionDropped, HandshakeFailure, ProbeError, ProbeTimeout, SendFailure
from .models import Endpoint, ProbeResult, TranscriptEvent
from .runner import ProbeRunner, run

__all__ = [
    "D_RECEIVED",
    "D_SENT",
    "DEFAULT_MESSAGES",
    "EXIT_CODES",
    "O_CONNECTION_ERROR",
    "O_SUCCESS",
    "O_TIMEOUT",
    "ConnectionDropped",
    "HandshakeFailure",
    "ProbeError",
    "ProbeTimeout",
    "SendFailure",
    "Endpoint",
    "ProbeResult",
    "TranscriptEvent",
    "ProbeRunner",
    "run",
]
