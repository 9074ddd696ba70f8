"""
Unified configuration for the wiggle GIF tool.

All output paths are derived from the drawing file name.
This is the single source of truth for the command-line script.
"""

from dataclasses import dataclass, field, fields, asdict
from typing import List, Optional
from pathlib import Path
import json

from wiggle.jitter import JitterConfig

from .common import DEFAULT_AMPLITUDE, DEFAULT_FREQUENCY, DEFAULT_WIDTH, DEFAULT_HEIGHT
from .render_config import RenderConfig, hex_to_rgba, get_palette_preset


@dataclass
class WiggleConfig:
    """
    Settings for rendering and exporting one drawing.
    All output paths are derived from drawing_path.
    """

    # ==================== MAIN SETTING ====================
    drawing_path: str = 'drawings/demo.json'

    # ==================== OUTPUT SETTINGS ====================
    output_base: str = 'outputs'

    # ==================== CANVAS ====================
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    # ==================== JITTER ====================
    amplitude: float = DEFAULT_AMPLITUDE
    frequency: float = DEFAULT_FREQUENCY

    # ==================== COLORS ====================
    background: str = '#fdfbf7'
    palette_preset: Optional[str] = None  # overrides background/palette when set
    palette: List[str] = field(default_factory=lambda: RenderConfig().palette)

    # ==================== PREVIEW ====================
    preview_seconds: float = 2.0
    preview_fps: int = 30

    show_progress: bool = True

    def __post_init__(self):
        if self.palette_preset is not None:
            preset = get_palette_preset(self.palette_preset)
            self.background = preset['background']
            self.palette = list(preset['colors'])

    # ==================== DERIVED PATHS ====================
    @property
    def drawing_name(self) -> str:
        return Path(self.drawing_path).stem

    @property
    def output_dir(self) -> Path:
        return Path(self.output_base) / self.drawing_name

    @property
    def gif_path(self) -> Path:
        return self.output_dir / f'{self.drawing_name}.gif'

    @property
    def frame_path(self) -> Path:
        return self.output_dir / f'{self.drawing_name}_frame.png'

    @property
    def preview_path(self) -> Path:
        return self.output_dir / f'{self.drawing_name}_preview.mp4'

    # ==================== DERIVED SETTINGS ====================
    @property
    def jitter_config(self) -> JitterConfig:
        return JitterConfig(amplitude=self.amplitude, frequency=self.frequency)

    @property
    def render_config(self) -> RenderConfig:
        return RenderConfig(
            background_color=hex_to_rgba(self.background),
            palette=list(self.palette)
        )

    def create_output_dirs(self):
        self.output_dir.mkdir(parents=True, exist_ok=True)


def load_config(path: str = 'config/wiggle.json') -> WiggleConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    if not config_path.exists():
        return WiggleConfig()

    with open(config_path, 'r') as f:
        data = json.load(f)

    known = {f.name for f in fields(WiggleConfig)}
    unknown = set(data) - known
    if unknown:
        print(f"Warning: ignoring unknown config keys: {', '.join(sorted(unknown))}")

    return WiggleConfig(**{k: v for k, v in data.items() if k in known})


def save_config(config: WiggleConfig, path: str = 'config/wiggle.json'):
    """Save config to JSON file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(asdict(config), f, indent=2)

    print(f"Saved config to {config_path}")
