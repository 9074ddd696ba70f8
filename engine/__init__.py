"""
Live playback, GIF export and the editing context that ties them together.
"""

from .ports import TimeProvider, FrameScheduler, GifEncoder
from .hosts import MonotonicClock, ManualClock, ManualFrameScheduler
from .scheduler import RenderScheduler, LiveFrame, cycle_index_at, cycle_time
from .export import export_drawing_as_gif, export_fps
from .wiggle_engine import WiggleEngine

__all__ = [
    'TimeProvider',
    'FrameScheduler',
    'GifEncoder',
    'MonotonicClock',
    'ManualClock',
    'ManualFrameScheduler',
    'RenderScheduler',
    'LiveFrame',
    'cycle_index_at',
    'cycle_time',
    'export_drawing_as_gif',
    'export_fps',
    'WiggleEngine'
]
