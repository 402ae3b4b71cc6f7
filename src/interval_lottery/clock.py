from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], float]

wall_clock: Clock = time.time


class ManualClock:
    """Clock that only moves when told to. Used by simulations and tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now
