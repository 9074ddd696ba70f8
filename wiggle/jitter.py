"""
Deterministic, loop-periodic jitter.

Each displacement is a sum of two sine terms whose phases come from a hash
of the point (never from a stateful RNG) and whose angular speeds are whole
harmonics of the loop period, so the wiggle repeats exactly every
LOOP_DURATION_MS and is continuous in time.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from config.common import (
    CYCLE_COUNT,
    LOOP_DURATION_MS,
    DEFAULT_AMPLITUDE,
    DEFAULT_FREQUENCY
)

TWO_PI = 2.0 * math.pi

# Relative weights of the base harmonic and the overtone; they sum to 1 so
# |offset| never exceeds the configured amplitude.
_BASE_WEIGHT = 0.7
_OVERTONE_WEIGHT = 0.3

# Keeps per-point seeds apart from pattern seeds at the same coordinates.
_POINT_SEED = 101.0


@dataclass(frozen=True)
class JitterConfig:
    amplitude: float = DEFAULT_AMPLITUDE
    frequency: float = DEFAULT_FREQUENCY  # wiggles per ms

    @property
    def signature(self) -> Tuple[float, float]:
        return (float(self.amplitude), float(self.frequency))


@dataclass(frozen=True)
class JitterOffset:
    dx: float
    dy: float


def hash_noise(a: float, b: float, c: float) -> float:
    """Cheap deterministic hash of three numbers into [0, 1)."""
    n = math.sin(a * 12.9898 + b * 78.233 + c * 37.719) * 43758.5453
    return n - math.floor(n)


def loop_harmonics(frequency: float) -> Tuple[int, int]:
    """
    Whole number of oscillations per loop for the base term and the overtone.

    A harmonic divisible by CYCLE_COUNT would look frozen when sampled at the
    cycle frames, so it is bumped to the next integer.
    """
    if not math.isfinite(frequency):
        frequency = 0.0
    base = max(1, int(math.floor(abs(frequency) * LOOP_DURATION_MS + 0.5)))
    if base % CYCLE_COUNT == 0:
        base += 1
    overtone = 2 * base + 1
    if overtone % CYCLE_COUNT == 0:
        overtone += 1
    return base, overtone


def loop_phase(elapsed_time_ms: float) -> float:
    """Position inside the loop as an angle in [0, 2*pi)."""
    return TWO_PI * (elapsed_time_ms % LOOP_DURATION_MS) / LOOP_DURATION_MS


def _offset(x: float, y: float, seed: float, elapsed_time_ms: float,
            config: JitterConfig) -> JitterOffset:
    amplitude = config.amplitude
    if amplitude == 0:
        return JitterOffset(0.0, 0.0)

    theta = loop_phase(elapsed_time_ms)
    base, overtone = loop_harmonics(config.frequency)

    phase_x1 = TWO_PI * hash_noise(x, y, seed)
    phase_y1 = TWO_PI * hash_noise(y, x, seed + 1)
    phase_x2 = TWO_PI * hash_noise(x, y, seed + 2)
    phase_y2 = TWO_PI * hash_noise(y, x, seed + 3)

    dx = amplitude * (_BASE_WEIGHT * math.sin(base * theta + phase_x1)
                      + _OVERTONE_WEIGHT * math.sin(overtone * theta + phase_x2))
    dy = amplitude * (_BASE_WEIGHT * math.sin(base * theta + phase_y1)
                      + _OVERTONE_WEIGHT * math.sin(overtone * theta + phase_y2))
    return JitterOffset(dx, dy)


def compute_jitter(point, elapsed_time_ms: float, config: JitterConfig) -> JitterOffset:
    """Per-point jitter for pen strokes, seeded by the point's position and timestamp."""
    return _offset(point.x, point.y, _POINT_SEED + point.t, elapsed_time_ms, config)


def compute_pattern_jitter(point, elapsed_time_ms: float, config: JitterConfig) -> JitterOffset:
    """
    Coordinate-only jitter for pattern strokes.

    Two strokes touching the same (x, y) get the same offset, so overlapping
    pattern fills move as one texture.
    """
    return _offset(point.x, point.y, 0.0, elapsed_time_ms, config)


def pattern_jitter_field(xs: np.ndarray, ys: np.ndarray, elapsed_time_ms: float,
                         config: JitterConfig) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorized compute_pattern_jitter over pixel coordinate arrays."""
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    if config.amplitude == 0:
        return np.zeros_like(xs), np.zeros_like(ys)

    def noise(a, b, c):
        n = np.sin(a * 12.9898 + b * 78.233 + c * 37.719) * 43758.5453
        return n - np.floor(n)

    theta = loop_phase(elapsed_time_ms)
    base, overtone = loop_harmonics(config.frequency)

    dx = config.amplitude * (
        _BASE_WEIGHT * np.sin(base * theta + TWO_PI * noise(xs, ys, 0.0))
        + _OVERTONE_WEIGHT * np.sin(overtone * theta + TWO_PI * noise(xs, ys, 2.0))
    )
    dy = config.amplitude * (
        _BASE_WEIGHT * np.sin(base * theta + TWO_PI * noise(ys, xs, 1.0))
        + _OVERTONE_WEIGHT * np.sin(overtone * theta + TWO_PI * noise(ys, xs, 3.0))
    )
    return dx, dy
