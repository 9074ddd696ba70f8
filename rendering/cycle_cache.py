"""
Cycle bitmap cache.

One rendered bitmap per cycle frame, keyed by (drawing revision, jitter
signature, cycle index). A change of revision or jitter replaces the whole
frame set, never single frames. The set being replaced is parked in a small
history cache keyed by drawing content, so undo/redo can bring it back.
"""

from collections import OrderedDict
from typing import Dict, Optional, Tuple

import cairo
import numpy as np

from config.common import CYCLE_COUNT, CYCLE_INTERVAL_MS, MAX_HISTORY_CACHE_SIZE
from config.render_config import RenderConfig
from wiggle.drawing import drawing_hash
from wiggle.jitter import JitterConfig
from wiggle.types import Drawing
from .base import RendererCapability, copy_surface, surface_to_numpy
from .drawing_renderer import DrawingRenderer

CacheKey = Tuple[int, Tuple[float, float]]
HistoryKey = Tuple[str, Tuple[float, float]]


class CycleBitmap:
    """
    A lent copy of one cached frame.

    Release it with close() or a `with` block; the cache keeps its own copy.
    """

    def __init__(self, surface: cairo.ImageSurface, cycle_index: int):
        self._surface = surface
        self.cycle_index = cycle_index

    @property
    def closed(self) -> bool:
        return self._surface is None

    @property
    def surface(self) -> cairo.ImageSurface:
        if self._surface is None:
            raise ValueError("CycleBitmap already released")
        return self._surface

    def to_numpy(self) -> np.ndarray:
        return surface_to_numpy(self.surface)

    def close(self):
        if self._surface is not None:
            self._surface.finish()
            self._surface = None

    def __enter__(self) -> 'CycleBitmap':
        return self

    def __exit__(self, *args):
        self.close()


def _finish_all(frames: Dict[int, cairo.ImageSurface]):
    for surface in frames.values():
        surface.finish()


class HistoryBitmapCache:
    """
    Frame sets of drawings left behind by undo/redo.

    Keyed by (drawing hash, jitter signature), least recently stored entry
    evicted first. Entries are moved in and out, never shared.
    """

    def __init__(self, max_size: int = MAX_HISTORY_CACHE_SIZE):
        self.max_size = max_size
        self._entries: 'OrderedDict[HistoryKey, Dict[int, cairo.ImageSurface]]' = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: HistoryKey) -> bool:
        return key in self._entries

    def store(self, key: HistoryKey, frames: Dict[int, cairo.ImageSurface]):
        old = self._entries.pop(key, None)
        if old is not None:
            _finish_all(old)
        if not frames:
            return

        self._entries[key] = frames
        while len(self._entries) > self.max_size:
            _, evicted = self._entries.popitem(last=False)
            _finish_all(evicted)

    def take(self, key: HistoryKey) -> Optional[Dict[int, cairo.ImageSurface]]:
        return self._entries.pop(key, None)

    def clear(self):
        for frames in self._entries.values():
            _finish_all(frames)
        self._entries.clear()


class CycleBitmapCache:
    def __init__(self, cycle_count: int = CYCLE_COUNT,
                 history_size: int = MAX_HISTORY_CACHE_SIZE):
        self.cycle_count = cycle_count
        self.key: Optional[CacheKey] = None
        self.history_key: Optional[HistoryKey] = None
        self.history = HistoryBitmapCache(history_size)
        self._frames: Dict[int, cairo.ImageSurface] = {}
        self.hits = 0
        self.misses = 0
        self.restores = 0

    def __len__(self) -> int:
        return len(self._frames)

    def _check_index(self, cycle_index: int):
        if not 0 <= cycle_index < self.cycle_count:
            raise ValueError(f"cycle_index out of range: {cycle_index}")

    def sync(self, key: CacheKey, history_key: Optional[HistoryKey] = None):
        """
        Switch to the frame set of another revision/jitter.

        The frames being left are parked in the history cache under their
        content key; frames for `history_key` come back from it if present.
        """
        if key == self.key:
            return

        if self.history_key is not None:
            self.history.store(self.history_key, self._frames)
        else:
            _finish_all(self._frames)
        self._frames = {}
        self.key = key
        self.history_key = history_key

        if history_key is not None:
            restored = self.history.take(history_key)
            if restored:
                self._frames = restored
                self.restores += 1

    def get(self, cycle_index: int) -> Optional[cairo.ImageSurface]:
        self._check_index(cycle_index)
        surface = self._frames.get(cycle_index)
        if surface is None:
            self.misses += 1
        else:
            self.hits += 1
        return surface

    def put(self, cycle_index: int, surface: cairo.ImageSurface):
        self._check_index(cycle_index)
        old = self._frames.pop(cycle_index, None)
        if old is not None:
            old.finish()
        self._frames[cycle_index] = surface

    def reset(self):
        """Drop the current frames and everything in the history cache."""
        _finish_all(self._frames)
        self._frames = {}
        self.history.clear()
        self.key = None
        self.history_key = None


class CachingRenderer(DrawingRenderer):
    """DrawingRenderer that also lends cached per-cycle bitmaps."""

    capability = RendererCapability.CACHING

    def __init__(self, config: Optional[RenderConfig] = None, cycle_count: int = CYCLE_COUNT,
                 history_size: int = MAX_HISTORY_CACHE_SIZE):
        super().__init__(config)
        self.cache = CycleBitmapCache(cycle_count, history_size)

    def get_cycle_count(self) -> int:
        return self.cache.cycle_count

    def get_cycle_bitmap(self, drawing: Drawing, drawing_revision: int, cycle_index: int,
                         jitter_config: JitterConfig,
                         elapsed_time_ms: Optional[float] = None) -> CycleBitmap:
        """
        Bitmap for one cycle frame, rendered on a miss.

        Frames are always rendered at cycle_index * CYCLE_INTERVAL_MS; the
        elapsed_time_ms argument is accepted for callers that track it but
        does not change the cached frame.
        """
        key = (drawing_revision, jitter_config.signature)
        if key != self.cache.key:
            self.cache.sync(key, (drawing_hash(drawing), jitter_config.signature))

        cached = self.cache.get(cycle_index)
        if cached is None:
            self.render(drawing, drawing_revision, cycle_index * CYCLE_INTERVAL_MS, jitter_config)
            cached = copy_surface(self._output)
            self.cache.put(cycle_index, cached)

        return CycleBitmap(copy_surface(cached), cycle_index)

    def flush_from_bitmap(self, bitmap: CycleBitmap):
        """Show a lent bitmap on the output surface."""
        source = bitmap.surface
        self._ensure_surfaces(source.get_width(), source.get_height())
        ctx = cairo.Context(self._output)
        ctx.set_operator(cairo.OPERATOR_SOURCE)
        ctx.set_source_surface(source, 0, 0)
        ctx.paint()
        self._output.flush()

    def invalidate(self):
        self.cache.reset()
