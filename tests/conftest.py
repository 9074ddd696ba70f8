"""Shared fixtures: sample drawings, fake host collaborators, recording encoder."""

import numpy as np
import pytest

from config.render_config import RenderConfig
from wiggle import Drawing, JitterConfig, PatternBrush, Point, SolidBrush, Stroke


class RecordingEncoder:
    """GIF encoder port that keeps what it was given."""

    def __init__(self, fail_on_frame=None):
        self.begin_args = None
        self.frames = []
        self.finish_calls = 0
        self.fail_on_frame = fail_on_frame

    def begin(self, width, height, fps):
        self.begin_args = (width, height, fps)

    def add_frame(self, pixels):
        if self.fail_on_frame is not None and len(self.frames) == self.fail_on_frame:
            raise RuntimeError("disk full")
        self.frames.append(np.array(pixels, copy=True))

    def finish(self):
        self.finish_calls += 1
        return b"GIF89a-recorded"


@pytest.fixture
def recording_encoder():
    return RecordingEncoder()


@pytest.fixture
def render_config():
    return RenderConfig(
        background_color=(1.0, 1.0, 1.0, 1.0),
        palette=['#000000', '#ff0000', '#00ff00', '#0000ff']
    )


@pytest.fixture
def jitter_config():
    return JitterConfig(amplitude=1.2, frequency=0.008)


@pytest.fixture
def still_jitter():
    return JitterConfig(amplitude=0.0, frequency=0.008)


def pen_stroke(points, stroke_id='pen', width=4, **brush):
    return Stroke(
        id=stroke_id,
        kind='draw',
        brush=SolidBrush(width=width, **brush),
        points=tuple(Point(*p) for p in points)
    )


def pattern_stroke(points, stroke_id='pattern', pattern_id='mesh_bold', width=9):
    return Stroke(
        id=stroke_id,
        kind='draw',
        brush=PatternBrush(pattern_id=pattern_id, width=width),
        points=tuple(Point(*p) for p in points)
    )


def eraser_stroke(points, stroke_id='eraser', width=4, variant='eraser_circle'):
    return Stroke(
        id=stroke_id,
        kind='erase',
        brush=SolidBrush(width=width, variant=variant),
        points=tuple(Point(*p) for p in points)
    )


@pytest.fixture
def scenario_drawing():
    """384x256 with one pen stroke (10,10,0) -> (20,10,50)."""
    return Drawing(
        width=384,
        height=256,
        strokes=(pen_stroke([(10, 10, 0), (20, 10, 50)]),)
    )


@pytest.fixture
def busy_drawing():
    return Drawing(
        width=64,
        height=48,
        strokes=(
            pen_stroke([(5, 5, 0), (30, 20, 40), (55, 8, 80)], stroke_id='a'),
            pattern_stroke([(10, 30, 0), (50, 32, 30)], stroke_id='b'),
            eraser_stroke([(20, 0, 0), (20, 47, 10)], stroke_id='c', width=3),
        )
    )
