"""
Rendering module for wiggle drawings.
Uses Cairo image surfaces with pixel-exact (non-antialiased) compositing.
"""

from config.render_config import RenderConfig
from .base import Renderer, RendererCapability, surface_to_numpy
from .drawing_renderer import DrawingRenderer
from .cycle_cache import CachingRenderer, CycleBitmap, CycleBitmapCache
from .gif_encoder import PillowGifEncoder
from .exporters import (
    save_drawing,
    load_drawing,
    drawing_to_dict,
    drawing_from_dict,
    write_gif
)

__all__ = [
    'RenderConfig',
    'Renderer',
    'RendererCapability',
    'surface_to_numpy',
    'DrawingRenderer',
    'CachingRenderer',
    'CycleBitmap',
    'CycleBitmapCache',
    'PillowGifEncoder',
    'save_drawing',
    'load_drawing',
    'drawing_to_dict',
    'drawing_from_dict',
    'write_gif'
]
