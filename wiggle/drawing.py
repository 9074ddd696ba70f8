"""
Pure edit operations on Drawings. Every call returns a new Drawing.
"""

import uuid
from dataclasses import replace

from .types import BrushSettings, Drawing, Point, Stroke, StrokeKind


def new_stroke_id() -> str:
    return uuid.uuid4().hex


def start_stroke(drawing: Drawing, stroke_id: str, kind: StrokeKind,
                 brush: BrushSettings, start_point: Point) -> Drawing:
    stroke = Stroke(id=stroke_id, kind=kind, brush=brush, points=(start_point,))
    return replace(drawing, strokes=drawing.strokes + (stroke,))


def append_point(drawing: Drawing, stroke_id: str, point: Point) -> Drawing:
    strokes = tuple(
        replace(s, points=s.points + (point,)) if s.id == stroke_id else s
        for s in drawing.strokes
    )
    return replace(drawing, strokes=strokes)


def replace_brush(drawing: Drawing, stroke_id: str, brush: BrushSettings) -> Drawing:
    """Swap the brush of the stroke still being drawn (width variants)."""
    strokes = tuple(
        replace(s, brush=brush) if s.id == stroke_id else s
        for s in drawing.strokes
    )
    return replace(drawing, strokes=strokes)


def clear_drawing(drawing: Drawing) -> Drawing:
    return replace(drawing, strokes=())


def drawing_hash(drawing: Drawing) -> str:
    """
    Content signature of a drawing.

    Committed strokes never change and their ids are unique, so ids plus
    point counts identify the content.
    """
    strokes = ','.join(f"{s.id}:{len(s.points)}" for s in drawing.strokes)
    return f"{drawing.width}x{drawing.height}:{len(drawing.strokes)}:{strokes}"
