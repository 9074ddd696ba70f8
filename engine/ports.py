"""
Host-side collaborators the engine talks to.
"""

from typing import Callable, Protocol

import numpy as np


class TimeProvider(Protocol):
    def now(self) -> float:
        """Milliseconds on a monotonic clock."""


class FrameScheduler(Protocol):
    def request(self, callback: Callable[[], None]) -> int:
        ...

    def cancel(self, request_id: int) -> None:
        ...


class GifEncoder(Protocol):
    def begin(self, width: int, height: int, fps: int) -> None:
        ...

    def add_frame(self, pixels: np.ndarray) -> None:
        ...

    def finish(self) -> bytes:
        ...
