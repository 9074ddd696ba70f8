"""
Apply jitter to a stroke's points and snap them to the pixel grid.
"""

from typing import List

from .jitter import JitterConfig, compute_jitter, compute_pattern_jitter
from .rasterization import Pixel, snap_to_pixel
from .types import Stroke


def apply_jitter_to_stroke(stroke: Stroke, elapsed_time_ms: float,
                           jitter_config: JitterConfig) -> List[Pixel]:
    """
    Jittered, pixel-snapped points of one stroke at one moment.

    Erasers are never jittered: their footprint has to stay on the literal
    contact position. Pattern strokes use coordinate-only jitter, pen
    strokes per-point jitter. Pure, so it can be called for any time in any
    order (live playback, scrubbing, export).
    """
    if stroke.is_eraser:
        return [snap_to_pixel(p.x, p.y) for p in stroke.points]

    jitter = compute_pattern_jitter if stroke.is_pattern else compute_jitter

    snapped = []
    for point in stroke.points:
        offset = jitter(point, elapsed_time_ms, jitter_config)
        snapped.append(snap_to_pixel(point.x + offset.dx, point.y + offset.dy))
    return snapped
