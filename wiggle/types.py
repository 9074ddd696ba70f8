"""
Drawing data model.

Everything here is frozen: a committed Drawing is never edited in place,
edits build a new Drawing (see wiggle.drawing).
"""

from dataclasses import dataclass, field
from typing import Literal, Tuple, Union

StrokeKind = Literal['draw', 'erase']

BrushVariant = Literal[
    'pen_circle',
    'pen_square',
    'eraser_circle',
    'eraser_square',
    'eraser_line',
]

PatternId = Literal[
    'dot_sparse',
    'dot_dense',
    'stripe_horizontal',
    'stripe_vertical',
    'check',
    'mesh',
    'mesh_bold',
    'crosshatch',
]


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    t: float = 0.0  # ms since the stroke's engine clock started


@dataclass(frozen=True)
class PaletteColor:
    index: int


@dataclass(frozen=True)
class FixedColor:
    color: str  # '#rrggbb'


BrushColor = Union[PaletteColor, FixedColor]


@dataclass(frozen=True)
class SolidBrush:
    color: BrushColor = PaletteColor(0)
    width: float = 4.0
    opacity: float = 1.0
    variant: BrushVariant = 'pen_circle'
    kind: Literal['solid'] = field(default='solid', init=False)


@dataclass(frozen=True)
class PatternBrush:
    pattern_id: PatternId = 'dot_dense'
    color: BrushColor = PaletteColor(0)
    width: float = 12.0
    opacity: float = 1.0
    variant: BrushVariant = 'pen_circle'
    kind: Literal['pattern'] = field(default='pattern', init=False)


BrushSettings = Union[SolidBrush, PatternBrush]


@dataclass(frozen=True)
class Stroke:
    id: str
    kind: StrokeKind
    brush: BrushSettings
    points: Tuple[Point, ...] = ()

    @property
    def is_eraser(self) -> bool:
        return self.kind == 'erase'

    @property
    def is_pattern(self) -> bool:
        return self.brush.kind == 'pattern'


@dataclass(frozen=True)
class Drawing:
    width: int
    height: int
    strokes: Tuple[Stroke, ...] = ()

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Drawing size must be positive, got {self.width}x{self.height}")


def empty_drawing(width: int, height: int) -> Drawing:
    return Drawing(width=width, height=height, strokes=())
