"""
Shared constants for the live loop and the GIF exporter.
"""

# Both the live scheduler and the exporter read these; they must never diverge.
CYCLE_COUNT = 3
CYCLE_INTERVAL_MS = 100
LOOP_DURATION_MS = CYCLE_COUNT * CYCLE_INTERVAL_MS
GIF_FPS = round(1000 / CYCLE_INTERVAL_MS)

DEFAULT_WIDTH = 384
DEFAULT_HEIGHT = 256

DEFAULT_AMPLITUDE = 1.2
DEFAULT_FREQUENCY = 0.008

MIN_FRAME_INTERVAL_MS = 1000 / 45  # ~45fps live throttle

# cycle frame sets kept for drawings visited through undo/redo
MAX_HISTORY_CACHE_SIZE = 5
