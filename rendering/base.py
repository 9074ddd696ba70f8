"""
Base renderer class defining the interface for all renderers.
"""

import enum

import cairo
import numpy as np
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from config.render_config import RenderConfig
from wiggle.errors import SurfaceUnavailableError


class RendererCapability(enum.Enum):
    BASIC = 'basic'      # render + read_pixels
    CACHING = 'caching'  # also get_cycle_bitmap / get_cycle_count


def create_surface(width: int, height: int) -> cairo.ImageSurface:
    if width <= 0 or height <= 0:
        raise SurfaceUnavailableError(f"Cannot create a {width}x{height} surface")
    try:
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    except (cairo.Error, MemoryError, ValueError) as e:
        raise SurfaceUnavailableError(f"Cannot create a {width}x{height} surface: {e}") from e
    if surface.status() != cairo.STATUS_SUCCESS:
        raise SurfaceUnavailableError(f"Surface status {surface.status()}")
    return surface


def copy_surface(source: cairo.ImageSurface) -> cairo.ImageSurface:
    copy = create_surface(source.get_width(), source.get_height())
    ctx = cairo.Context(copy)
    ctx.set_operator(cairo.OPERATOR_SOURCE)
    ctx.set_source_surface(source, 0, 0)
    ctx.paint()
    copy.flush()
    return copy


def surface_to_numpy(surface: cairo.ImageSurface) -> np.ndarray:
    """Premultiplied BGRA surface -> straight-alpha RGBA uint8 array [H, W, 4]."""
    surface.flush()
    width, height = surface.get_width(), surface.get_height()
    stride = surface.get_stride()
    raw = np.ndarray(shape=(height, stride), dtype=np.uint8, buffer=surface.get_data())
    bgra = raw[:, :width * 4].reshape(height, width, 4)

    rgba = bgra[..., [2, 1, 0, 3]].astype(np.float32)
    alpha = rgba[..., 3:4]
    opaque = alpha == 255
    if not np.all(opaque):
        safe = np.where(alpha > 0, alpha, 1.0)
        rgba[..., :3] = np.where(alpha > 0, rgba[..., :3] * 255.0 / safe, 0.0)

    return np.clip(np.rint(rgba), 0, 255).astype(np.uint8)


class Renderer(ABC):
    capability = RendererCapability.BASIC

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def _create_surface(self, width: int, height: int) -> Tuple[cairo.ImageSurface, cairo.Context]:
        surface = create_surface(width, height)
        ctx = cairo.Context(surface)

        if not self.config.antialiasing:
            ctx.set_antialias(cairo.ANTIALIAS_NONE)

        return surface, ctx

    def _paint_background(self, ctx: cairo.Context):
        r, g, b, a = self.config.background_color
        ctx.save()
        ctx.set_operator(cairo.OPERATOR_SOURCE)
        ctx.set_source_rgba(r, g, b, a)
        ctx.paint()
        ctx.restore()

    @abstractmethod
    def render(self, drawing, drawing_revision: int, elapsed_time_ms: float, jitter_config):
        pass

    @abstractmethod
    def read_pixels(self) -> np.ndarray:
        pass
