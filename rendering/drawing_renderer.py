"""
Cairo renderer for wiggle drawings.

Strokes are painted on a transparent layer (so erasers can cut through with
DEST_OUT), then the layer is composited over the background onto the output
surface that read_pixels() returns.
"""

from pathlib import Path
from typing import Optional

import cairo
import imageio
import numpy as np

from config.render_config import RenderConfig
from wiggle.jitter import JitterConfig
from wiggle.stroke_jitter import apply_jitter_to_stroke
from wiggle.types import Drawing
from wiggle.errors import SurfaceUnavailableError
from .base import Renderer, RendererCapability, surface_to_numpy
from .strokes import draw_stroke


class DrawingRenderer(Renderer):
    capability = RendererCapability.BASIC

    def __init__(self, config: Optional[RenderConfig] = None):
        super().__init__(config)
        self._layer: Optional[cairo.ImageSurface] = None
        self._output: Optional[cairo.ImageSurface] = None
        self._size = (0, 0)

    def _ensure_surfaces(self, width: int, height: int):
        if self._size == (width, height) and self._output is not None:
            return
        self._layer, _ = self._create_surface(width, height)
        self._output, _ = self._create_surface(width, height)
        self._size = (width, height)

    def _compose(self):
        ctx = cairo.Context(self._output)
        self._paint_background(ctx)
        ctx.set_operator(cairo.OPERATOR_OVER)
        ctx.set_source_surface(self._layer, 0, 0)
        ctx.paint()
        self._output.flush()

    def render(self, drawing: Drawing, drawing_revision: int, elapsed_time_ms: float,
               jitter_config: JitterConfig):
        """
        Repaint the whole surface for one moment.

        Nothing carries over from earlier calls, so frames can be produced in
        any order.
        """
        width, height = drawing.width, drawing.height
        self._ensure_surfaces(width, height)

        ctx = cairo.Context(self._layer)
        if not self.config.antialiasing:
            ctx.set_antialias(cairo.ANTIALIAS_NONE)
        ctx.save()
        ctx.set_operator(cairo.OPERATOR_CLEAR)
        ctx.paint()
        ctx.restore()

        for stroke in drawing.strokes:
            points = apply_jitter_to_stroke(stroke, elapsed_time_ms, jitter_config)
            draw_stroke(ctx, stroke, points, elapsed_time_ms, jitter_config,
                        width, height, self.config)

        self._layer.flush()
        self._compose()

    def read_pixels(self) -> np.ndarray:
        """RGBA uint8 [H, W, 4] of the last rendered (or flushed) frame."""
        if self._output is None:
            raise SurfaceUnavailableError("Nothing has been rendered yet")
        return surface_to_numpy(self._output)

    def save_frame(self, output_path: str):
        """Write the current frame as PNG."""
        frame = self.read_pixels()
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        imageio.imwrite(output_path, frame)
        print(f"Saved frame: {output_path}")
