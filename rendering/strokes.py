"""
Per-stroke pixel coverage and painting.

Coverage is computed with numpy as an 8-bit alpha mask; Cairo only
composites the mask, so every stroke lands on whole pixels.
"""

from functools import lru_cache
from typing import List, Tuple

import cairo
import numpy as np

from config.render_config import RenderConfig, hex_to_rgba
from wiggle.jitter import JitterConfig, pattern_jitter_field
from wiggle.patterns import PatternTile, get_pattern, dilate_tile, sample_tile
from wiggle.rasterization import (
    Pixel,
    brush_footprint,
    coverage_mask,
    snap_brush_width,
    stroke_centerline
)
from wiggle.types import FixedColor, Stroke


@lru_cache(maxsize=None)
def _pattern_tile(pattern_id: str, thin: bool) -> PatternTile:
    tile = get_pattern(pattern_id)
    return dilate_tile(tile) if thin else tile


def resolve_color(color, config: RenderConfig) -> Tuple[float, float, float]:
    if isinstance(color, FixedColor):
        hex_color = color.color
    elif 0 <= color.index < len(config.palette):
        hex_color = config.palette[color.index]
    else:
        hex_color = config.fallback_color
    r, g, b, _ = hex_to_rgba(hex_color)
    return r, g, b


def stroke_coverage(stroke: Stroke, points: List[Pixel], elapsed_time_ms: float,
                    jitter_config: JitterConfig, width: int, height: int) -> np.ndarray:
    """
    Alpha coverage [height, width] uint8 of one stroke at one moment.

    Solid and eraser strokes cover their swept footprint fully. Pattern
    strokes sample their tile at each covered pixel, shifted by the
    coordinate-only pattern jitter of that pixel.
    """
    brush_width = snap_brush_width(stroke.brush.width)
    footprint = brush_footprint(stroke.brush.variant, brush_width)
    area = coverage_mask(stroke_centerline(points), footprint, width, height)

    if not stroke.is_pattern:
        return area.astype(np.uint8) * 255

    ys, xs = np.nonzero(area)
    coverage = np.zeros((height, width), dtype=np.uint8)
    if len(xs) == 0:
        return coverage

    dx, dy = pattern_jitter_field(xs, ys, elapsed_time_ms, jitter_config)
    sample_x = np.floor(xs + dx + 0.5).astype(np.int64)
    sample_y = np.floor(ys + dy + 0.5).astype(np.int64)

    tile = _pattern_tile(stroke.brush.pattern_id, brush_width <= 1)
    alpha = sample_tile(tile, sample_x, sample_y)
    coverage[ys, xs] = np.rint(alpha * 255).astype(np.uint8)
    return coverage


def paint_coverage(ctx: cairo.Context, coverage: np.ndarray,
                   rgb: Tuple[float, float, float], opacity: float, erase: bool):
    """Composite a coverage mask: OVER for paint, DEST_OUT for erasers."""
    height, width = coverage.shape
    stride = cairo.ImageSurface.format_stride_for_width(cairo.FORMAT_A8, width)
    buf = np.zeros((height, stride), dtype=np.uint8)
    buf[:, :width] = coverage
    mask = cairo.ImageSurface.create_for_data(buf, cairo.FORMAT_A8, width, height, stride)

    ctx.save()
    if erase:
        ctx.set_operator(cairo.OPERATOR_DEST_OUT)
        ctx.set_source_rgba(0.0, 0.0, 0.0, opacity)
    else:
        ctx.set_operator(cairo.OPERATOR_OVER)
        r, g, b = rgb
        ctx.set_source_rgba(r, g, b, opacity)
    ctx.mask_surface(mask, 0, 0)
    ctx.restore()
    mask.finish()


def draw_stroke(ctx: cairo.Context, stroke: Stroke, points: List[Pixel], elapsed_time_ms: float,
                jitter_config: JitterConfig, width: int, height: int, config: RenderConfig):
    if not points:
        return
    coverage = stroke_coverage(stroke, points, elapsed_time_ms, jitter_config, width, height)
    if not coverage.any():
        return
    opacity = min(1.0, max(0.0, float(stroke.brush.opacity)))
    paint_coverage(ctx, coverage, resolve_color(stroke.brush.color, config), opacity, stroke.is_eraser)
