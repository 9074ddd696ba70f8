"""
Wiggle drawing core: data model, deterministic jitter, pixel snapping and
undo/redo history. Pure Python + numpy, no raster surfaces.
"""

from .types import (
    Point,
    Stroke,
    Drawing,
    SolidBrush,
    PatternBrush,
    PaletteColor,
    FixedColor,
    empty_drawing
)
from .jitter import (
    JitterConfig,
    JitterOffset,
    compute_jitter,
    compute_pattern_jitter,
    pattern_jitter_field
)
from .stroke_jitter import apply_jitter_to_stroke
from .rasterization import snap_to_pixel, snap_brush_width, bresenham_line
from .drawing import start_stroke, append_point, clear_drawing, new_stroke_id, drawing_hash
from .history import HistoryManager
from .patterns import PATTERNS, get_pattern
from .errors import WiggleError, ConfigurationError, SurfaceUnavailableError, EncodingError

__all__ = [
    'Point',
    'Stroke',
    'Drawing',
    'SolidBrush',
    'PatternBrush',
    'PaletteColor',
    'FixedColor',
    'empty_drawing',
    'JitterConfig',
    'JitterOffset',
    'compute_jitter',
    'compute_pattern_jitter',
    'pattern_jitter_field',
    'apply_jitter_to_stroke',
    'snap_to_pixel',
    'snap_brush_width',
    'bresenham_line',
    'start_stroke',
    'append_point',
    'clear_drawing',
    'new_stroke_id',
    'drawing_hash',
    'HistoryManager',
    'PATTERNS',
    'get_pattern',
    'WiggleError',
    'ConfigurationError',
    'SurfaceUnavailableError',
    'EncodingError'
]
