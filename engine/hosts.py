"""
Clocks and frame schedulers for running the engine outside a UI toolkit.
"""

import itertools
import time
from typing import Callable, Dict


class MonotonicClock:
    def now(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to; used for offline recording and tests."""

    def __init__(self, start_ms: float = 0.0):
        self.current = float(start_ms)

    def now(self) -> float:
        return self.current

    def advance(self, ms: float):
        self.current += ms


class ManualFrameScheduler:
    """
    Animation-frame queue driven by step().

    Each step runs the callbacks requested before it started, like one
    display refresh; callbacks requested during a step wait for the next.
    """

    def __init__(self):
        self._pending: Dict[int, Callable[[], None]] = {}
        self._ids = itertools.count(1)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request(self, callback: Callable[[], None]) -> int:
        request_id = next(self._ids)
        self._pending[request_id] = callback
        return request_id

    def cancel(self, request_id: int):
        self._pending.pop(request_id, None)

    def step(self) -> int:
        batch, self._pending = self._pending, {}
        for callback in batch.values():
            callback()
        return len(batch)
