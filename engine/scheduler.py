"""
Live playback loop.

Every tick maps wall time onto a cycle frame index and paints that frame at
index * CYCLE_INTERVAL_MS, the same instant the exporter uses for the same
index, so what plays on screen is what ends up in the GIF.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from config.common import (
    CYCLE_COUNT,
    CYCLE_INTERVAL_MS,
    LOOP_DURATION_MS,
    MIN_FRAME_INTERVAL_MS
)
from rendering.base import RendererCapability
from wiggle.jitter import JitterConfig
from wiggle.types import Drawing
from .ports import FrameScheduler, TimeProvider


def cycle_index_at(elapsed_time_ms: float) -> int:
    return int((elapsed_time_ms % LOOP_DURATION_MS) // CYCLE_INTERVAL_MS) % CYCLE_COUNT


def cycle_time(cycle_index: int) -> float:
    return cycle_index * CYCLE_INTERVAL_MS


@dataclass(frozen=True)
class LiveFrame:
    drawing: Drawing
    drawing_revision: int
    jitter_config: JitterConfig
    editing: bool = False  # an uncommitted stroke is in the drawing


class RenderScheduler:
    def __init__(self, renderer, frame_source: Callable[[], LiveFrame],
                 clock: TimeProvider, frames: FrameScheduler,
                 min_frame_interval_ms: float = MIN_FRAME_INTERVAL_MS,
                 on_frame: Optional[Callable[[int], None]] = None):
        self.renderer = renderer
        self.frame_source = frame_source
        self.clock = clock
        self.frames = frames
        self.min_frame_interval_ms = min_frame_interval_ms
        self.on_frame = on_frame

        self.started_at = clock.now()
        self.frames_rendered = 0
        self._request_id: Optional[int] = None
        self._active = False
        self._last_render_at: Optional[float] = None
        self._last_key: Optional[Tuple] = None

    @property
    def running(self) -> bool:
        return self._active

    def start(self):
        if self.running:
            return
        self._active = True
        self.started_at = self.clock.now()
        self.request_repaint()
        self._request_id = self.frames.request(self._loop)

    def stop(self):
        self._active = False
        if self._request_id is not None:
            self.frames.cancel(self._request_id)
            self._request_id = None

    def request_repaint(self):
        """Paint on the next tick even if the frame looks unchanged."""
        self._last_render_at = None
        self._last_key = None

    def elapsed(self) -> float:
        return self.clock.now() - self.started_at

    def _loop(self):
        self._request_id = None
        if not self._active:
            return
        self.tick()
        if self._active:
            self._request_id = self.frames.request(self._loop)

    def tick(self) -> bool:
        """Paint the current cycle frame if due. Returns True when something was painted."""
        now = self.clock.now()
        if (self._last_render_at is not None
                and now - self._last_render_at < self.min_frame_interval_ms):
            return False

        frame = self.frame_source()
        cycle_index = cycle_index_at(now - self.started_at)
        key = (cycle_index, frame.drawing_revision, frame.jitter_config.signature)
        if not frame.editing and key == self._last_key:
            return False

        if self.renderer.capability is RendererCapability.CACHING and not frame.editing:
            with self.renderer.get_cycle_bitmap(
                drawing=frame.drawing,
                drawing_revision=frame.drawing_revision,
                cycle_index=cycle_index,
                jitter_config=frame.jitter_config,
                elapsed_time_ms=cycle_time(cycle_index)
            ) as bitmap:
                self.renderer.flush_from_bitmap(bitmap)
        else:
            self.renderer.render(frame.drawing, frame.drawing_revision,
                                 cycle_time(cycle_index), frame.jitter_config)

        # an in-progress stroke repaints every tick, so it never counts as cached
        self._last_key = None if frame.editing else key
        self._last_render_at = now
        self.frames_rendered += 1
        if self.on_frame is not None:
            self.on_frame(cycle_index)
        return True
