import pytest

from wiggle.drawing import append_point, clear_drawing, new_stroke_id, replace_brush, start_stroke
from wiggle.types import Drawing, PatternBrush, Point, SolidBrush, Stroke, empty_drawing


def test_start_stroke_returns_new_drawing():
    drawing = empty_drawing(10, 10)
    started = start_stroke(drawing, 's', 'draw', SolidBrush(), Point(1, 2, 0))
    assert drawing.strokes == ()
    assert len(started.strokes) == 1
    assert started.strokes[0].points == (Point(1, 2, 0),)


def test_append_point_touches_only_the_named_stroke():
    drawing = start_stroke(empty_drawing(10, 10), 'a', 'draw', SolidBrush(), Point(0, 0))
    drawing = start_stroke(drawing, 'b', 'erase', SolidBrush(variant='eraser_circle'), Point(5, 5))
    updated = append_point(drawing, 'b', Point(6, 6, 16))
    assert updated.strokes[0] == drawing.strokes[0]
    assert len(updated.strokes[1].points) == 2
    assert len(drawing.strokes[1].points) == 1


def test_replace_brush():
    drawing = start_stroke(empty_drawing(10, 10), 'a', 'draw', SolidBrush(width=4), Point(0, 0))
    updated = replace_brush(drawing, 'a', SolidBrush(width=6))
    assert updated.strokes[0].brush.width == 6
    assert drawing.strokes[0].brush.width == 4


def test_clear_keeps_size():
    drawing = start_stroke(empty_drawing(30, 20), 'a', 'draw', SolidBrush(), Point(0, 0))
    cleared = clear_drawing(drawing)
    assert cleared == Drawing(30, 20)


def test_stroke_flags():
    pen = Stroke('p', 'draw', SolidBrush())
    eraser = Stroke('e', 'erase', SolidBrush(variant='eraser_line'))
    pattern = Stroke('q', 'draw', PatternBrush(pattern_id='check'))
    assert not pen.is_eraser and not pen.is_pattern
    assert eraser.is_eraser
    assert pattern.is_pattern and pattern.brush.kind == 'pattern'


def test_stroke_ids_are_unique():
    assert len({new_stroke_id() for _ in range(50)}) == 50


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (-1, 5)])
def test_drawing_requires_positive_size(size):
    with pytest.raises(ValueError):
        Drawing(*size)
