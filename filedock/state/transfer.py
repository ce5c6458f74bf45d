"""Per-transfer state for the chunked uploader (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass


class TransferPhase(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    SEEKING = "seeking"
    STREAMING = "streaming"
    FINISHING = "finishing"
    DONE = "done"


@dataclass(slots=True)
class TransferState:
    source_size: int
    sent_offset: int = 0
    running: bool = False
    terminal_error: str | None = None
    phase: TransferPhase = TransferPhase.IDLE

    @property
    def terminal(self) -> bool:
        return self.phase is TransferPhase.DONE

    def advance(self, length: int) -> int:
        """Move ``sent_offset`` forward by ``length`` bytes (never backwards)."""
        if length < 0:
            raise ValueError("length must be >= 0")
        self.sent_offset = min(self.source_size, self.sent_offset + length)
        return self.sent_offset

    def percentage(self) -> float:
        # An empty source is complete by definition.
        if self.source_size == 0:
            return 1.0
        return self.sent_offset / self.source_size


__all__ = ["TransferPhase", "TransferState"]
