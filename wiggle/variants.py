"""
Brush width variants applied while a stroke is being drawn.
"""

import math
from typing import Literal

PenVariant = Literal['normal', 'pressure', 'noise']
EraserVariant = Literal['eraser_circle', 'eraser_square', 'eraser_line']

DEFAULT_PEN_WIDTH = {
    'normal': 4,
    'pressure': 4,
    'noise': 4,
}

DEFAULT_ERASER_WIDTH = {
    'eraser_circle': 12,
    'eraser_square': 12,
    'eraser_line': 14,
}

DEFAULT_PATTERN_WIDTH = 12


def resolve_width(base: float, variant: str, distance: float,
                  time_since_start: float, stroke_kind: str) -> float:
    """Width of the active stroke after its latest segment."""
    if stroke_kind == 'erase':
        return base

    if variant == 'pressure':
        # fast strokes get thicker, slow ones thinner
        speed = distance / time_since_start if time_since_start > 0 else 0.0
        factor = min(1.5, 0.6 + speed * 0.8)
        return max(1.0, base * factor)

    if variant == 'noise':
        wobble = (math.sin(time_since_start * 0.02) + math.cos(time_since_start * 0.031)) * 0.2
        return max(1.0, base * (1 + wobble))

    return base
