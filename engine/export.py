"""
Bake exactly one animation loop into a GIF.
"""

from tqdm import tqdm

from config.common import CYCLE_COUNT, CYCLE_INTERVAL_MS
from rendering.base import RendererCapability
from wiggle.errors import ConfigurationError, EncodingError
from wiggle.jitter import JitterConfig
from wiggle.types import Drawing
from .ports import GifEncoder


def export_fps() -> int:
    return round(1000 / CYCLE_INTERVAL_MS)


def _encoder_call(step: str, fn, *args):
    try:
        return fn(*args)
    except EncodingError:
        raise
    except Exception as e:
        raise EncodingError(f"GIF encoder failed in {step}: {e}") from e


def export_drawing_as_gif(drawing: Drawing, drawing_revision: int, renderer,
                          gif_encoder: GifEncoder, jitter_config: JitterConfig,
                          progress: bool = False) -> bytes:
    """
    Encode CYCLE_COUNT frames, frame i at i * CYCLE_INTERVAL_MS.

    A caching renderer serves frames from its cycle cache (each lent bitmap
    is released before the next is taken); a basic renderer renders and
    reads back every frame. `drawing` is treated as a snapshot for the
    whole loop. If any frame fails to encode the export is abandoned and
    finish() is never called.
    """
    capability = getattr(renderer, 'capability', None)
    if capability not in (RendererCapability.BASIC, RendererCapability.CACHING):
        raise ConfigurationError(
            f"{type(renderer).__name__} offers neither basic nor caching rendering"
        )

    _encoder_call('begin', gif_encoder.begin, drawing.width, drawing.height, export_fps())

    for cycle_index in tqdm(range(CYCLE_COUNT), desc="Encoding GIF frames", disable=not progress):
        elapsed_time_ms = cycle_index * CYCLE_INTERVAL_MS

        if capability is RendererCapability.CACHING:
            with renderer.get_cycle_bitmap(
                drawing=drawing,
                drawing_revision=drawing_revision,
                cycle_index=cycle_index,
                jitter_config=jitter_config,
                elapsed_time_ms=elapsed_time_ms
            ) as bitmap:
                pixels = bitmap.to_numpy()
        else:
            renderer.render(drawing, drawing_revision, elapsed_time_ms, jitter_config)
            pixels = renderer.read_pixels()

        _encoder_call('add_frame', gif_encoder.add_frame, pixels)

    return _encoder_call('finish', gif_encoder.finish)
