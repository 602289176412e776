from __future__ import annotations

import time
from dataclasses import dataclass, field

from .models import Direction, TranscriptEvent


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class Transcript:
    """Append-only event log for one probe. Sealed once the probe terminates."""

    started: float = field(default_factory=time.perf_counter)
    sealed: bool = False
    _events: list[TranscriptEvent] = field(default_factory=list, repr=False)

    def append(self, direction: Direction, payload: str) -> TranscriptEvent:
        if self.sealed:
            raise RuntimeError("transcript is sealed")
        event = TranscriptEvent(
            direction=direction,
            payload=payload,
            ts=_now_ms(),
            offset_ms=(time.perf_counter() - self.started) * 1000.0,
        )
        self._events.append(event)
        return event

    def seal(self) -> tuple[TranscriptEvent, ...]:
        self.sealed = True
        return self.events

    @property
    def events(self) -> tuple[TranscriptEvent, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self):
        return iter(self.events)
