import numpy as np
import pytest

from wiggle.rasterization import (
    bresenham_line,
    brush_footprint,
    coverage_mask,
    snap_brush_width,
    stroke_centerline
)


def test_line_includes_both_endpoints():
    pixels = bresenham_line(0, 0, 5, 2)
    assert pixels[0] == (0, 0)
    assert pixels[-1] == (5, 2)
    assert len(pixels) == 6


def test_line_is_eight_connected():
    pixels = bresenham_line(3, 9, -4, 1)
    for (x0, y0), (x1, y1) in zip(pixels, pixels[1:]):
        assert max(abs(x1 - x0), abs(y1 - y0)) == 1


def test_degenerate_line_is_one_pixel():
    assert bresenham_line(7, 7, 7, 7) == [(7, 7)]


def test_centerline_does_not_repeat_joints():
    line = stroke_centerline([(0, 0), (3, 0), (3, 2)])
    assert line == [(0, 0), (1, 0), (2, 0), (3, 0), (3, 1), (3, 2)]
    assert stroke_centerline([]) == []
    assert stroke_centerline([(4, 4)]) == [(4, 4)]


@pytest.mark.parametrize("variant,width,count", [
    ('pen_circle', 1, 1),
    ('pen_circle', 4, 13),
    ('eraser_circle', 5, 13),
    ('pen_square', 3, 9),
    ('eraser_square', 4, 16),
    ('eraser_line', 2, 5),
])
def test_footprint_sizes(variant, width, count):
    assert len(brush_footprint(variant, width)) == count


def test_line_eraser_is_horizontal():
    footprint = brush_footprint('eraser_line', 3)
    assert set(footprint[:, 1]) == {0}
    assert footprint[:, 0].min() == -3 and footprint[:, 0].max() == 3


def test_coverage_is_clipped_to_surface():
    mask = coverage_mask([(0, 0), (1, 0)], brush_footprint('pen_square', 3), 4, 3)
    assert mask.shape == (3, 4)
    expected = np.zeros((3, 4), dtype=bool)
    expected[0:2, 0:3] = True
    np.testing.assert_array_equal(mask, expected)


def test_coverage_entirely_outside_is_empty():
    mask = coverage_mask([(-20, -20)], brush_footprint('pen_circle', 4), 8, 8)
    assert not mask.any()


@pytest.mark.parametrize("raw,snapped", [(0.2, 1), (0, 1), (-3, 1), (2.5, 3), (11.4, 11), (float('nan'), 1)])
def test_brush_width_snaps_to_positive_int(raw, snapped):
    assert snap_brush_width(raw) == snapped
