import json
import subprocess
import sys
from pathlib import Path

import pytest

from config import CYCLE_COUNT, CYCLE_INTERVAL_MS, GIF_FPS, LOOP_DURATION_MS, get_palette_preset, hex_to_rgba
from config import pipeline
from config.pipeline import WiggleConfig, load_config, save_config
from wiggle.jitter import JitterConfig


def test_loop_constants_agree():
    assert LOOP_DURATION_MS == CYCLE_COUNT * CYCLE_INTERVAL_MS
    assert GIF_FPS == 10


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(str(tmp_path / "nope.json"))
    assert config == WiggleConfig()


def test_round_trip(tmp_path):
    path = tmp_path / "cfg" / "wiggle.json"
    config = WiggleConfig(drawing_path='art/cat.json', amplitude=2.0, width=100, height=80)
    save_config(config, str(path))
    assert load_config(str(path)) == config


def test_unknown_keys_are_ignored(tmp_path, capsys):
    path = tmp_path / "wiggle.json"
    path.write_text(json.dumps({"amplitude": 0.5, "sparkle": True}))
    config = load_config(str(path))
    assert config.amplitude == 0.5
    assert "sparkle" in capsys.readouterr().out


def test_derived_paths():
    config = WiggleConfig(drawing_path='drawings/cat.json', output_base='out')
    assert config.output_dir == Path('out/cat')
    assert config.gif_path == Path('out/cat/cat.gif')
    assert config.frame_path == Path('out/cat/cat_frame.png')
    assert config.preview_path == Path('out/cat/cat_preview.mp4')


def test_derived_settings():
    config = WiggleConfig(amplitude=0.7, frequency=0.02, background='#ffffff')
    assert config.jitter_config.signature == (0.7, 0.02)
    assert config.render_config.background_color == (1.0, 1.0, 1.0, 1.0)


def test_palette_preset_overrides_colors():
    config = WiggleConfig(palette_preset='cyber')
    preset = get_palette_preset('cyber')
    assert config.background == preset['background']
    assert config.palette == preset['colors']
    with pytest.raises(ValueError):
        WiggleConfig(palette_preset='sepia')


@pytest.mark.parametrize("color,expected", [
    ('#ff0000', (1.0, 0.0, 0.0, 1.0)),
    ('#fff', (1.0, 1.0, 1.0, 1.0)),
    ('00ff00', (0.0, 1.0, 0.0, 1.0)),
    ('#zzzzzz', (0.0, 0.0, 0.0, 1.0)),
    ('oops', (0.0, 0.0, 0.0, 1.0)),
])
def test_hex_to_rgba(color, expected):
    assert hex_to_rgba(color) == expected


@pytest.mark.parametrize("statement", [
    "import wiggle.jitter",
    "import config.pipeline",
    "import config; import wiggle; import config.pipeline",
    "import render",
])
def test_packages_import_in_any_order(statement):
    root = Path(__file__).resolve().parents[1]
    result = subprocess.run([sys.executable, '-c', statement], cwd=root,
                            capture_output=True, text=True)
    assert result.returncode == 0, result.stderr


def test_pipeline_builds_jitter_config_without_late_import():
    assert pipeline.JitterConfig is JitterConfig
    assert isinstance(WiggleConfig().jitter_config, JitterConfig)
