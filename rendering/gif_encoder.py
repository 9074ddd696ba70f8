"""
GIF encoder backed by Pillow.
"""

import io
from typing import List, Optional, Tuple

import numpy as np
from PIL import GifImagePlugin, Image

from wiggle.errors import EncodingError


def flatten_rgba(frame: np.ndarray, bg_color=(255, 255, 255)) -> np.ndarray:
    """Composite straight-alpha RGBA over an opaque background, returns RGB uint8."""
    rgb = frame[..., :3].astype(np.float32)
    alpha = frame[..., 3:4].astype(np.float32) / 255.0
    bg = np.array(bg_color, dtype=np.float32)
    out = rgb * alpha + bg * (1.0 - alpha)
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)


class PillowGifEncoder:
    """
    begin() -> add_frame() * N -> finish() -> bytes.

    Frames are RGBA uint8 arrays [H, W, 4]. The GIF loops forever.
    """

    def __init__(self, bg_color: Tuple[int, int, int] = (255, 255, 255), colors: int = 256):
        self.bg_color = bg_color
        self.colors = colors
        self._size: Optional[Tuple[int, int]] = None
        self._duration = 0
        self._frames: List[Image.Image] = []

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    @property
    def frame_duration_ms(self) -> int:
        return self._duration

    def begin(self, width: int, height: int, fps: int):
        if width <= 0 or height <= 0:
            raise EncodingError(f"Invalid GIF size {width}x{height}")
        if fps <= 0:
            raise EncodingError(f"Invalid fps {fps}")
        self._size = (width, height)
        self._duration = round(1000 / fps)
        self._frames = []

    def add_frame(self, pixels: np.ndarray):
        if self._size is None:
            raise EncodingError("add_frame() called before begin()")

        width, height = self._size
        pixels = np.asarray(pixels)
        if pixels.shape != (height, width, 4):
            raise EncodingError(
                f"Frame shape {pixels.shape} does not match {(height, width, 4)}"
            )
        if pixels.dtype != np.uint8:
            raise EncodingError(f"Frame dtype must be uint8, got {pixels.dtype}")

        rgb = flatten_rgba(pixels, self.bg_color)
        try:
            frame = Image.fromarray(rgb).quantize(colors=self.colors)
        except (ValueError, OSError) as e:
            raise EncodingError(f"Failed to quantize frame: {e}") from e
        self._frames.append(frame)

    def finish(self) -> bytes:
        if not self._frames:
            raise EncodingError("No frames to encode")

        buf = io.BytesIO()
        try:
            self._write(buf)
        except (ValueError, OSError) as e:
            raise EncodingError(f"Failed to write GIF: {e}") from e
        finally:
            self._size = None

        return buf.getvalue()

    def _write(self, fp):
        """
        Write every frame as its own image block.

        Image.save(save_all=True) folds identical neighbouring frames into
        one longer frame, which would change the frame count of a still loop.
        """
        header, _ = GifImagePlugin.getheader(self._frames[0], info={'loop': 0})
        for chunk in header:
            fp.write(chunk)

        for frame in self._frames:
            for chunk in GifImagePlugin.getdata(frame, duration=self._duration,
                                                include_color_table=True):
                fp.write(chunk)

        fp.write(b';')
