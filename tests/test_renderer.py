import imageio
import numpy as np
import pytest

from rendering.base import RendererCapability, create_surface
from rendering.drawing_renderer import DrawingRenderer
from rendering.strokes import resolve_color
from wiggle.errors import SurfaceUnavailableError
from wiggle.types import Drawing, FixedColor, PaletteColor

from .conftest import eraser_stroke, pattern_stroke, pen_stroke

WHITE = [255, 255, 255, 255]
BLACK = [0, 0, 0, 255]


@pytest.fixture
def renderer(render_config):
    return DrawingRenderer(render_config)


def test_empty_drawing_is_background(renderer, still_jitter):
    renderer.render(Drawing(20, 10), 0, 0, still_jitter)
    pixels = renderer.read_pixels()
    assert pixels.shape == (10, 20, 4)
    assert pixels.dtype == np.uint8
    assert np.all(pixels == WHITE)


def test_one_pixel_pen_stroke(renderer, still_jitter):
    drawing = Drawing(32, 16, (pen_stroke([(10, 10, 0), (20, 10, 50)], width=1),))
    renderer.render(drawing, 1, 0, still_jitter)
    pixels = renderer.read_pixels()

    expected = np.full((16, 32, 4), 255, dtype=np.uint8)
    expected[10, 10:21] = BLACK
    np.testing.assert_array_equal(pixels, expected)


def test_render_is_a_full_repaint(renderer, still_jitter):
    drawing = Drawing(32, 16, (pen_stroke([(2, 2, 0), (30, 14, 10)]),))
    renderer.render(drawing, 1, 0, still_jitter)
    assert not np.all(renderer.read_pixels() == WHITE)

    renderer.render(Drawing(32, 16), 2, 0, still_jitter)
    assert np.all(renderer.read_pixels() == WHITE)


def test_frames_do_not_depend_on_render_order(render_config, busy_drawing, jitter_config):
    fresh = DrawingRenderer(render_config)
    fresh.render(busy_drawing, 3, 0, jitter_config)
    expected = fresh.read_pixels()

    scrubbed = DrawingRenderer(render_config)
    for t in (200, 100, 37.5, 0):
        scrubbed.render(busy_drawing, 3, t, jitter_config)
    np.testing.assert_array_equal(scrubbed.read_pixels(), expected)


def test_eraser_cuts_down_to_background(renderer, still_jitter):
    drawing = Drawing(40, 20, (
        pen_stroke([(0, 10, 0), (39, 10, 10)], width=9),
        eraser_stroke([(20, 0, 0), (20, 19, 10)], width=1),
    ))
    renderer.render(drawing, 1, 0, still_jitter)
    pixels = renderer.read_pixels()
    assert np.all(pixels[10, 19] == BLACK)
    assert np.all(pixels[10, 20] == WHITE)
    assert np.all(pixels[10, 21] == BLACK)


def test_eraser_is_not_jittered(renderer, jitter_config):
    drawing = Drawing(40, 20, (
        pen_stroke([(0, 10, 0), (39, 10, 10)], width=9),
        eraser_stroke([(20, 0, 0), (20, 19, 10)], width=1),
    ))
    for t in (0, 100, 200):
        renderer.render(drawing, 1, t, jitter_config)
        assert np.all(renderer.read_pixels()[:, 20] == WHITE)


def test_half_opacity_blends_with_background(renderer, still_jitter):
    drawing = Drawing(8, 8, (pen_stroke([(4, 4, 0)], width=1, opacity=0.5),))
    renderer.render(drawing, 1, 0, still_jitter)
    r, g, b, a = renderer.read_pixels()[4, 4]
    assert a == 255
    assert abs(int(r) - 128) <= 2 and r == g == b


def test_pattern_stroke_shows_its_tile(renderer, still_jitter):
    drawing = Drawing(48, 32, (pattern_stroke([(10, 16, 0), (30, 16, 10)], width=9),))
    renderer.render(drawing, 1, 0, still_jitter)
    pixels = renderer.read_pixels()
    # mesh_bold covers (0..1, 0..1) of each 4x4 quarter of the 8x8 tile
    assert np.all(pixels[16, 16] == BLACK)
    assert np.all(pixels[16, 18] == WHITE)
    assert np.all(pixels[2, 2] == WHITE)


def test_colors_resolve_from_palette_or_hex(render_config):
    assert resolve_color(PaletteColor(1), render_config) == (1.0, 0.0, 0.0)
    assert resolve_color(FixedColor('#0000ff'), render_config) == (0.0, 0.0, 1.0)
    assert resolve_color(PaletteColor(99), render_config) == (0.0, 0.0, 0.0)


def test_read_before_render_fails(renderer):
    with pytest.raises(SurfaceUnavailableError):
        renderer.read_pixels()


def test_zero_sized_surface_is_unavailable():
    with pytest.raises(SurfaceUnavailableError):
        create_surface(0, 10)


def test_save_frame_writes_png(renderer, busy_drawing, jitter_config, tmp_path):
    renderer.render(busy_drawing, 1, 100, jitter_config)
    path = tmp_path / "nested" / "frame.png"
    renderer.save_frame(str(path))
    image = imageio.imread(path)
    assert image.shape[:2] == (48, 64)


def test_basic_capability_tag(renderer):
    assert renderer.capability is RendererCapability.BASIC
