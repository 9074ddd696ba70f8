"""
Configuration for rendering module.
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class RenderConfig:
    background_color: Tuple[float, float, float, float] = (0.992, 0.984, 0.969, 1.0)

    # Palette-indexed brush colors resolve against this list
    palette: List[str] = field(default_factory=lambda: [
        '#0b0b0b', '#ff3b30', '#34c759', '#007aff', '#fbbf24', '#9b51e0'
    ])
    fallback_color: str = '#000000'

    antialiasing: bool = False  # pixel art: hard edges only


PALETTE_PRESETS = [
    {
        'name': 'standard',
        'background': '#fdfbf7',
        'colors': ['#0b0b0b', '#ff3b30', '#34c759', '#007aff', '#fbbf24', '#9b51e0'],
    },
    {
        'name': 'nostalgic',
        'background': '#f5e5d0',
        'colors': ['#4a4a4a', '#8b4513', '#556b2f', '#4682b4', '#daa520', '#800080'],
    },
    {
        'name': 'pastel',
        'background': '#fff4f9',
        'colors': ['#555555', '#ffb7b2', '#baffc9', '#bae1ff', '#ffffba', '#e0bbe4'],
    },
    {
        'name': 'cyber',
        'background': '#0b0b0b',
        'colors': ['#000000', '#ff00ff', '#00ffff', '#ffff00', '#00ff00', '#ff0000'],
    },
    {
        'name': 'retro',
        'background': '#f2f2f2',
        'colors': ['#080808', '#e60012', '#00a0e9', '#ffffff', '#848484', '#cccccc'],
    },
]


def hex_to_rgba(color: str, alpha: float = 1.0) -> Tuple[float, float, float, float]:
    """Parse #rgb / #rrggbb into cairo floats. Unparseable input falls back to black."""
    value = color.strip().lstrip('#')
    if len(value) == 3:
        value = ''.join(c * 2 for c in value)
    if len(value) != 6:
        return (0.0, 0.0, 0.0, alpha)
    try:
        r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return (0.0, 0.0, 0.0, alpha)
    return (r / 255.0, g / 255.0, b / 255.0, alpha)


def get_palette_preset(name: str) -> dict:
    for preset in PALETTE_PRESETS:
        if preset['name'] == name:
            return preset
    raise ValueError(f"Unknown palette preset: {name}")
