"""
Pixel-grid helpers: snapping, Bresenham lines and brush footprints.
"""

import math
from functools import lru_cache
from typing import List, Sequence, Tuple

import numpy as np

Pixel = Tuple[int, int]


def round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def snap_to_pixel(x: float, y: float) -> Pixel:
    """Snap to the nearest integer pixel. Non-finite input maps to the origin."""
    if not (math.isfinite(x) and math.isfinite(y)):
        return (0, 0)
    return (round_half_up(x), round_half_up(y))


def snap_brush_width(width: float) -> int:
    if not math.isfinite(width):
        return 1
    return max(1, round_half_up(width))


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Pixel]:
    """Pixels on the 8-connected line from (x0, y0) to (x1, y1), both ends included."""
    x0, y0, x1, y1 = (round_half_up(v) for v in (x0, y0, x1, y1))

    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    pixels = [(x0, y0)]
    while x0 != x1 or y0 != y1:
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy
        pixels.append((x0, y0))

    return pixels


def stroke_centerline(points: Sequence[Pixel]) -> List[Pixel]:
    """Join consecutive snapped points with Bresenham segments (no duplicated joints)."""
    if not points:
        return []

    centerline = [tuple(points[0])]
    for (px, py), (x, y) in zip(points, points[1:]):
        centerline.extend(bresenham_line(px, py, x, y)[1:])
    return centerline


@lru_cache(maxsize=64)
def brush_footprint(variant: str, width: int) -> np.ndarray:
    """
    Integer (dx, dy) offsets covered by one brush stamp.

    Returns an int array of shape [N, 2]. Circles use radius width // 2,
    squares cover width x width pixels, the line eraser is a horizontal bar.
    """
    width = max(1, int(width))

    if variant == 'eraser_line':
        offsets = [(dx, 0) for dx in range(-width, width + 1)]
    elif variant in ('eraser_square', 'pen_square'):
        half = width // 2
        offsets = [(dx, dy)
                   for dy in range(-half, width - half)
                   for dx in range(-half, width - half)]
    else:
        radius = width // 2
        if radius <= 0:
            offsets = [(0, 0)]
        else:
            r_sq = radius * radius
            offsets = [(dx, dy)
                       for dy in range(-radius, radius + 1)
                       for dx in range(-radius, radius + 1)
                       if dx * dx + dy * dy <= r_sq]

    footprint = np.array(offsets, dtype=np.int64)
    footprint.setflags(write=False)
    return footprint


def coverage_mask(centerline: Sequence[Pixel], footprint: np.ndarray,
                  width: int, height: int) -> np.ndarray:
    """
    Stamp the footprint at every centerline pixel.

    Returns a bool mask [height, width]; stamps falling outside are clipped.
    """
    mask = np.zeros((height, width), dtype=bool)
    if len(centerline) == 0:
        return mask

    centers = np.asarray(centerline, dtype=np.int64)
    # [C, 1, 2] + [1, F, 2] -> every stamped pixel
    stamped = (centers[:, None, :] + footprint[None, :, :]).reshape(-1, 2)
    xs, ys = stamped[:, 0], stamped[:, 1]
    inside = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
    mask[ys[inside], xs[inside]] = True
    return mask
