from __future__ import annotations

import time


class Time:
    """Frame clock. ``elapsed`` drives the model animations."""

    def __init__(self) -> None:
        self.start = time.perf_counter()
        self.last = self.start
        self.delta = 0.0
        self.fps = 0.0

    @property
    def elapsed(self) -> float:
        return self.last - self.start

    def tick(self) -> None:
        now = time.perf_counter()
        self.delta = now - self.last
        self.last = now
        if self.delta > 0:
            self.fps = 1.0 / self.delta
