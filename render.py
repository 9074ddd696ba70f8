"""
Rendering Script

Renders a wiggle drawing (JSON) as a looping GIF, a single PNG frame, or a
recorded preview of live playback.

Configuration is loaded from config/wiggle.json.
All output paths are derived from the drawing file name.

Modes:
    gif     - Bake exactly one animation loop into a GIF
    frame   - Render one frame at --time milliseconds as PNG
    preview - Record live playback for preview_seconds as a video
"""

import argparse
import math
import sys
from pathlib import Path

import imageio
from tqdm import tqdm

from config import LOOP_DURATION_MS
from config.pipeline import load_config
from engine import ManualClock, ManualFrameScheduler, WiggleEngine
from rendering import (
    DrawingRenderer,
    PillowGifEncoder,
    load_drawing,
    save_drawing,
    write_gif
)
from wiggle import WiggleError, empty_drawing


def load_input_drawing(config):
    path = Path(config.drawing_path)
    if not path.exists():
        raise FileNotFoundError(
            f"Drawing not found at {path}. "
            f"Run with --demo to write a sample drawing first."
        )
    print(f"Loading drawing from {path}...")
    return load_drawing(str(path))


def write_demo_drawing(config):
    """Draw a few strokes through the engine and save them as the input drawing."""
    engine = WiggleEngine(
        empty_drawing(config.width, config.height),
        renderer=DrawingRenderer(config.render_config),
        clock=ManualClock(),
        jitter_config=config.jitter_config,
        autostart=False
    )
    cx, cy = config.width / 2, config.height / 2

    def gesture(points):
        engine.pointer_down(*points[0])
        for x, y in points[1:]:
            engine.clock.advance(16)
            engine.pointer_move(x, y)
        engine.pointer_up()

    # spiral
    engine.set_tool('pen')
    engine.set_brush_color(0)
    spiral = [(cx + math.cos(a / 6) * a, cy + math.sin(a / 6) * a * 0.7) for a in range(4, 90, 2)]
    gesture(spiral)

    # patterned blob
    engine.set_tool('pattern')
    engine.set_pattern('check')
    engine.set_brush_color(3)
    engine.set_brush_width(18)
    gesture([(40 + i * 6, 50 + 10 * math.sin(i / 2)) for i in range(16)])

    # eraser cut through the spiral
    engine.set_tool('eraser')
    engine.set_eraser_variant('eraser_line')
    engine.set_brush_width(3)
    gesture([(cx - 60 + i * 4, cy) for i in range(31)])

    save_drawing(engine.get_drawing(), config.drawing_path)
    print(f"Saved demo drawing ({len(engine.get_drawing().strokes)} strokes) to {config.drawing_path}")


def render_gif(config):
    drawing = load_input_drawing(config)
    engine = WiggleEngine(drawing, render_config=config.render_config,
                          jitter_config=config.jitter_config, autostart=False)

    print(f"Encoding {drawing.width}x{drawing.height} loop ({LOOP_DURATION_MS}ms)...")
    payload = engine.export_gif(PillowGifEncoder(), progress=config.show_progress)
    write_gif(payload, str(config.gif_path))
    return payload


def render_frame(config, time_ms: float):
    drawing = load_input_drawing(config)
    renderer = DrawingRenderer(config.render_config)
    renderer.render(drawing, 0, time_ms, config.jitter_config)
    renderer.save_frame(str(config.frame_path))


def render_preview(config):
    """Run the live loop on a manual clock and record every displayed frame."""
    drawing = load_input_drawing(config)
    clock = ManualClock()
    frames = ManualFrameScheduler()
    engine = WiggleEngine(drawing, clock=clock, frames=frames,
                          render_config=config.render_config,
                          jitter_config=config.jitter_config)

    dt = 1000.0 / config.preview_fps
    total = int(config.preview_seconds * config.preview_fps)
    recorded = []
    for _ in tqdm(range(total), desc="Recording preview", disable=not config.show_progress):
        frames.step()
        recorded.append(engine.renderer.read_pixels())
        clock.advance(dt)
    engine.destroy()

    config.preview_path.parent.mkdir(parents=True, exist_ok=True)
    imageio.mimsave(str(config.preview_path), recorded, fps=config.preview_fps)
    print(f"Saved preview: {config.preview_path}")
    print(f"  Frames: {len(recorded)} ({engine.scheduler.frames_rendered} repaints)")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render wiggle drawings as looping animations.")
    parser.add_argument(
        '--mode',
        type=str,
        choices=['gif', 'frame', 'preview'],
        default='gif',
        help='Rendering mode: gif, frame, or preview (default: gif)'
    )
    parser.add_argument('--config', type=str, default='config/wiggle.json',
                        help='Path to the JSON config (default: config/wiggle.json)')
    parser.add_argument('--time', type=float, default=0.0,
                        help='Elapsed time in ms for --mode frame (default: 0)')
    parser.add_argument('--demo', action='store_true',
                        help='Write a demo drawing to drawing_path before rendering')
    args = parser.parse_args(argv)

    config = load_config(args.config)
    config.create_output_dirs()

    print(f"Rendering: {config.drawing_path}")
    print(f"Output: {config.output_dir}")
    print(f"Mode: {args.mode}")
    print()

    try:
        if args.demo:
            write_demo_drawing(config)
        if args.mode == 'gif':
            render_gif(config)
        elif args.mode == 'frame':
            render_frame(config, args.time)
        elif args.mode == 'preview':
            render_preview(config)
    except (FileNotFoundError, WiggleError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
