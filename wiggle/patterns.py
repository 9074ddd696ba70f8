"""
Repeating 8x8 tiles for pattern brushes.

Tiles are binary alpha masks stored as numpy arrays indexed [y, x].
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True, eq=False)
class PatternTile:
    alpha: np.ndarray  # float32 [H, W], values in [0, 1]

    @property
    def width(self) -> int:
        return self.alpha.shape[1]

    @property
    def height(self) -> int:
        return self.alpha.shape[0]


def _tile(rows: str) -> PatternTile:
    grid = [[1.0 if c == '#' else 0.0 for c in line.strip()] for line in rows.strip().splitlines()]
    alpha = np.array(grid, dtype=np.float32)
    alpha.setflags(write=False)
    return PatternTile(alpha=alpha)


PATTERNS: Dict[str, PatternTile] = {
    'dot_sparse': _tile("""
        ........
        .#...#..
        ........
        ........
        ........
        .#...#..
        ........
        ........
    """),
    'dot_dense': _tile("""
        ........
        .#.#.#.#
        ........
        .#.#.#.#
        ........
        .#.#.#.#
        ........
        .#.#.#.#
    """),
    'stripe_horizontal': _tile("""
        ........
        ####....
        ####....
        ........
        ........
        ####....
        ####....
        ........
    """),
    'stripe_vertical': _tile("""
        .#...#..
        .#...#..
        ........
        ........
        .#...#..
        .#...#..
        ........
        ........
    """),
    'check': _tile("""
        ##..##..
        ##..##..
        ..##..##
        ..##..##
        ##..##..
        ##..##..
        ..##..##
        ..##..##
    """),
    'mesh': _tile("""
        .#...#..
        #.#.#.#.
        .#...#..
        ........
        .#...#..
        #.#.#.#.
        .#...#..
        ........
    """),
    'mesh_bold': _tile("""
        ##..##..
        ##..##..
        ........
        ........
        ##..##..
        ##..##..
        ........
        ........
    """),
    'crosshatch': _tile("""
        #......#
        .#....#.
        ..#..#..
        ...##...
        ...##...
        ..#..#..
        .#....#.
        #......#
    """),
}


def get_pattern(pattern_id: str) -> PatternTile:
    try:
        return PATTERNS[pattern_id]
    except KeyError:
        raise ValueError(f"Unknown pattern id: {pattern_id}") from None


def sample_tile(tile: PatternTile, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Sample tile alpha at integer world coordinates, wrapping in both axes."""
    return tile.alpha[np.mod(ys, tile.height), np.mod(xs, tile.width)]


def dilate_tile(tile: PatternTile) -> PatternTile:
    """3x3 max-dilated copy, so one-pixel-wide pattern strokes still show the texture."""
    a = tile.alpha
    out = a.copy()
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            out = np.maximum(out, np.roll(np.roll(a, dy, axis=0), dx, axis=1))
    out.setflags(write=False)
    return PatternTile(alpha=out)
