from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class Deadline:
    seconds: float
    clock: Callable[[], float] = time.monotonic
    started: float = field(init=False)

    def __post_init__(self) -> None:
        self.started = self.clock()

    def remaining(self) -> float:
        return max(0.0, self.seconds - (self.clock() - self.started))

    def expired(self) -> bool:
        return self.remaining() <= 0

    def clamp_ms(self, timeout_seconds: float) -> int:
        """Per-action timeout in milliseconds, never past the run deadline."""
        return max(1, int(min(timeout_seconds, self.remaining()) * 1000))
