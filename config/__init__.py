"""
Configuration module.

Shared constants and render settings. The script-level WiggleConfig lives in
config.pipeline, which depends on the wiggle core.
"""

from .common import (
    CYCLE_COUNT,
    CYCLE_INTERVAL_MS,
    LOOP_DURATION_MS,
    GIF_FPS,
    MIN_FRAME_INTERVAL_MS,
    MAX_HISTORY_CACHE_SIZE
)
from .render_config import RenderConfig, PALETTE_PRESETS, hex_to_rgba, get_palette_preset

__all__ = [
    'CYCLE_COUNT',
    'CYCLE_INTERVAL_MS',
    'LOOP_DURATION_MS',
    'GIF_FPS',
    'MIN_FRAME_INTERVAL_MS',
    'MAX_HISTORY_CACHE_SIZE',
    'RenderConfig',
    'PALETTE_PRESETS',
    'hex_to_rgba',
    'get_palette_preset'
]
