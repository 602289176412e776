# Probe vocabulary (stringly-typed; canonical list lives here)

# outcomes
O_SUCCESS = "success"
O_TIMEOUT = "timeout"
O_CONNECTION_ERROR = "connection_error"

# transcript directions
D_SENT = "sent"
D_RECEIVED = "received"

# runner states
S_IDLE = "idle"
S_CONNECTING = "connecting"
S_OPEN = "open"
S_CLOSING = "closing"
S_CLOSED = "closed"
S_FAILED = "failed"
S_TIMED_OUT = "timed_out"

TERMINAL_STATES = frozenset({S_CLOSED, S_FAILED, S_TIMED_OUT})

# CLI exit codes (2 is argparse's usage error)
EXIT_SUCCESS = 0
EXIT_CONNECTION_ERROR = 1
EXIT_TIMEOUT = 124

EXIT_CODES = {
    O_SUCCESS: EXIT_SUCCESS,
    O_CONNECTION_ERROR: EXIT_CONNECTION_ERROR,
    O_TIMEOUT: EXIT_TIMEOUT,
}

DEFAULT_MESSAGES = (
    "hello zig",
    "hello zig again",
    "What I'm doing?",
    "testing the inputs!",
)
