from __future__ import annotations

from .constants import D_SENT, O_SUCCESS
from .models import ProbeResult, TranscriptEvent


def format_event(event: TranscriptEvent) -> str:
    arrow = "->" if event.direction == D_SENT else "<-"
    return f"[{event.offset_ms:9.1f}ms] {arrow} {event.payload}"


def format_result(result: ProbeResult) -> str:
    """
    Human-readable transcript plus a one-line verdict, e.g.

        [      3.2ms] -> hello zig
        [      4.0ms] <- hello zig
        [probe] success ws://127.0.0.1:3333/ sent=1 received=1 in 12.5ms
    """
    lines = [format_event(e) for e in result.events]
    verdict = (
        f"[probe] {result.outcome} {result.endpoint} "
        f"sent={len(result.sent)} received={len(result.received)} in {result.duration_ms:.1f}ms"
    )
    lines.append(verdict)
    if result.outcome != O_SUCCESS:
        lines.append(f"[probe] {result.error_kind}: {result.error}")
    return "\n".join(lines)


def render(result: ProbeResult, *, as_json: bool = False) -> str:
    if as_json:
        return result.model_dump_json(indent=2)
    return format_result(result)
