"""
Editing context for one wiggle drawing.

Owns history, renderer, live loop and jitter settings. It is built
explicitly and handed to whatever UI drives it; there is no module-level
engine instance.
"""

import math
from dataclasses import replace
from typing import Callable, Literal, Optional, Union

from config.render_config import RenderConfig
from rendering.base import RendererCapability
from rendering.cycle_cache import CachingRenderer
from rendering.gif_encoder import PillowGifEncoder
from wiggle.drawing import append_point, new_stroke_id, replace_brush, start_stroke
from wiggle.history import HistoryManager
from wiggle.jitter import JitterConfig
from wiggle.patterns import get_pattern
from wiggle.rasterization import snap_brush_width, snap_to_pixel
from wiggle.types import (
    BrushColor,
    Drawing,
    FixedColor,
    PaletteColor,
    PatternBrush,
    Point,
    SolidBrush
)
from wiggle.variants import (
    DEFAULT_ERASER_WIDTH,
    DEFAULT_PATTERN_WIDTH,
    DEFAULT_PEN_WIDTH,
    resolve_width
)
from .export import export_drawing_as_gif
from .hosts import ManualFrameScheduler, MonotonicClock
from .ports import FrameScheduler, GifEncoder, TimeProvider
from .scheduler import LiveFrame, RenderScheduler

Tool = Literal['pen', 'pattern', 'eraser']

# pointer moves shorter than this (in pixels) are dropped
MIN_POINT_DISTANCE = 1.5


class WiggleEngine:
    def __init__(self, initial_drawing: Drawing, renderer=None,
                 clock: Optional[TimeProvider] = None,
                 frames: Optional[FrameScheduler] = None,
                 jitter_config: Optional[JitterConfig] = None,
                 render_config: Optional[RenderConfig] = None,
                 autostart: bool = True):
        self.history = HistoryManager(initial_drawing)
        self.renderer = renderer if renderer is not None else CachingRenderer(render_config)
        self.clock = clock or MonotonicClock()
        self.frames = frames or ManualFrameScheduler()
        self.jitter_config = jitter_config or JitterConfig()
        self.started_at = self.clock.now()

        self.tool: Tool = 'pen'
        self.color: BrushColor = PaletteColor(0)
        self.widths = {
            'pen': DEFAULT_PEN_WIDTH['normal'],
            'pattern': DEFAULT_PATTERN_WIDTH,
            'eraser': DEFAULT_ERASER_WIDTH['eraser_circle'],
        }
        self.pen_variant = 'normal'
        self.pen_shape = 'pen_circle'
        self.eraser_variant = 'eraser_circle'
        self.pattern_id = 'dot_dense'

        self._active_stroke_id: Optional[str] = None
        self._active_drawing: Optional[Drawing] = None
        self._stroke_started_at = 0.0
        self._stroke_base_width = 0.0

        self._on_history_change: Optional[Callable[[], None]] = None

        self.scheduler = RenderScheduler(self.renderer, self.live_frame, self.clock, self.frames)
        self.history.set_change_listener(self._history_changed)
        if autostart:
            self.scheduler.start()

    # ==================== TOOL SETTINGS ====================
    def set_tool(self, tool: Tool):
        if tool not in self.widths:
            raise ValueError(f"Unknown tool: {tool}")
        self.tool = tool

    def set_brush_color(self, color: Union[BrushColor, str, int]):
        """Palette index (int), fixed hex color (str) or a BrushColor."""
        if isinstance(color, bool):
            raise TypeError("color must be a palette index, hex string or BrushColor")
        if isinstance(color, int):
            color = PaletteColor(color)
        elif isinstance(color, str):
            color = FixedColor(color)
        self.color = color

    def set_brush_width(self, width: float):
        self.widths[self.tool] = snap_brush_width(width)

    def set_pattern(self, pattern_id: str):
        get_pattern(pattern_id)
        self.pattern_id = pattern_id

    def set_pen_variant(self, variant: str):
        if variant not in DEFAULT_PEN_WIDTH:
            raise ValueError(f"Unknown pen variant: {variant}")
        self.pen_variant = variant

    def set_pen_shape(self, shape: str):
        if shape not in ('pen_circle', 'pen_square'):
            raise ValueError(f"Unknown pen shape: {shape}")
        self.pen_shape = shape

    def set_eraser_variant(self, variant: str):
        if variant not in DEFAULT_ERASER_WIDTH:
            raise ValueError(f"Unknown eraser variant: {variant}")
        self.eraser_variant = variant
        self.widths['eraser'] = DEFAULT_ERASER_WIDTH[variant]

    def set_jitter_config(self, jitter_config: JitterConfig):
        self.jitter_config = jitter_config
        if self.renderer.capability is RendererCapability.CACHING:
            self.renderer.invalidate()
        self.scheduler.request_repaint()

    def set_history_change_listener(self, listener: Optional[Callable[[], None]]):
        self._on_history_change = listener

    # ==================== DRAWING ====================
    @property
    def drawing_revision(self) -> int:
        return self.history.revision

    @property
    def is_drawing(self) -> bool:
        return self._active_stroke_id is not None

    def get_drawing(self) -> Drawing:
        """Committed drawing (no in-progress stroke)."""
        return self.history.present

    def current_drawing(self) -> Drawing:
        return self._active_drawing if self._active_drawing is not None else self.history.present

    def live_frame(self) -> LiveFrame:
        return LiveFrame(
            drawing=self.current_drawing(),
            drawing_revision=self.history.revision,
            jitter_config=self.jitter_config,
            editing=self.is_drawing
        )

    def _new_brush(self):
        width = self.widths[self.tool]
        if self.tool == 'eraser':
            return SolidBrush(color=self.color, width=width, variant=self.eraser_variant)
        if self.tool == 'pattern':
            return PatternBrush(pattern_id=self.pattern_id, color=self.color,
                                width=width, variant=self.pen_shape)
        return SolidBrush(color=self.color, width=width, variant=self.pen_shape)

    def pointer_down(self, x: float, y: float):
        """Start a stroke at logical coordinates (x, y)."""
        if self.is_drawing:
            self.pointer_up()

        sx, sy = snap_to_pixel(x, y)
        now = self.clock.now()
        kind = 'erase' if self.tool == 'eraser' else 'draw'
        brush = self._new_brush()

        self._active_stroke_id = new_stroke_id()
        self._active_drawing = start_stroke(
            self.history.present, self._active_stroke_id, kind, brush,
            Point(sx, sy, now - self.started_at)
        )
        self._stroke_started_at = now
        self._stroke_base_width = brush.width

    def pointer_move(self, x: float, y: float):
        if not self.is_drawing:
            return

        sx, sy = snap_to_pixel(x, y)
        now = self.clock.now()
        stroke = self._active_drawing.strokes[-1]
        last = stroke.points[-1]

        distance = math.hypot(sx - last.x, sy - last.y)
        if distance < MIN_POINT_DISTANCE:
            return

        variant = self.eraser_variant if stroke.is_eraser else self.pen_variant
        width = resolve_width(self._stroke_base_width, variant, distance,
                              now - self._stroke_started_at, stroke.kind)

        drawing = append_point(self._active_drawing, self._active_stroke_id,
                               Point(sx, sy, now - self.started_at))
        if width != stroke.brush.width:
            drawing = replace_brush(drawing, self._active_stroke_id,
                                    replace(stroke.brush, width=width))
        self._active_drawing = drawing

    def pointer_up(self):
        """Commit the active stroke as one undoable step."""
        if not self.is_drawing:
            return
        drawing = self._active_drawing
        self._active_stroke_id = None
        self._active_drawing = None
        self.history.commit(drawing)

    # ==================== HISTORY ====================
    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def clear(self):
        self.history.clear()

    def _history_changed(self):
        self.scheduler.request_repaint()
        if self._on_history_change is not None:
            self._on_history_change()

    # ==================== EXPORT ====================
    def export_gif(self, gif_encoder: Optional[GifEncoder] = None, progress: bool = False) -> bytes:
        """
        Encode one loop of the committed drawing as it is right now.

        An in-progress stroke is not part of the export.
        """
        drawing = self.history.present
        revision = self.history.revision
        try:
            return export_drawing_as_gif(
                drawing=drawing,
                drawing_revision=revision,
                renderer=self.renderer,
                gif_encoder=gif_encoder or PillowGifEncoder(),
                jitter_config=self.jitter_config,
                progress=progress
            )
        finally:
            self.scheduler.request_repaint()

    def destroy(self):
        self.scheduler.stop()
