"""
Drawing persistence and output writers.
Keeps the core model free of file formats.
"""

import json
from pathlib import Path
from typing import Any, Dict

from wiggle.types import (
    Drawing,
    FixedColor,
    PaletteColor,
    PatternBrush,
    Point,
    SolidBrush,
    Stroke
)

FORMAT_VERSION = 1


def _color_to_dict(color) -> Dict[str, Any]:
    if isinstance(color, FixedColor):
        return {"kind": "fixed", "color": color.color}
    return {"kind": "palette", "index": color.index}


def _color_from_dict(data: Dict[str, Any]):
    if data["kind"] == "fixed":
        return FixedColor(data["color"])
    return PaletteColor(int(data["index"]))


def _brush_to_dict(brush) -> Dict[str, Any]:
    data = {
        "kind": brush.kind,
        "color": _color_to_dict(brush.color),
        "width": brush.width,
        "opacity": brush.opacity,
        "variant": brush.variant,
    }
    if brush.kind == "pattern":
        data["pattern_id"] = brush.pattern_id
    return data


def _brush_from_dict(data: Dict[str, Any]):
    common = dict(
        color=_color_from_dict(data["color"]),
        width=float(data["width"]),
        opacity=float(data.get("opacity", 1.0)),
        variant=data.get("variant", "pen_circle"),
    )
    if data["kind"] == "pattern":
        return PatternBrush(pattern_id=data["pattern_id"], **common)
    if data["kind"] == "solid":
        return SolidBrush(**common)
    raise ValueError(f"Unknown brush kind: {data['kind']}")


def drawing_to_dict(drawing: Drawing) -> Dict[str, Any]:
    """
    Format:
    {
        "version": 1,
        "width": int,
        "height": int,
        "strokes": [
            {
                "id": str,
                "kind": "draw" | "erase",
                "brush": {"kind": "solid" | "pattern", "color": {...}, "width": float, ...},
                "points": [[x, y, t], ...]
            }
        ]
    }
    """
    return {
        "version": FORMAT_VERSION,
        "width": drawing.width,
        "height": drawing.height,
        "strokes": [
            {
                "id": stroke.id,
                "kind": stroke.kind,
                "brush": _brush_to_dict(stroke.brush),
                "points": [[p.x, p.y, p.t] for p in stroke.points],
            }
            for stroke in drawing.strokes
        ],
    }


def drawing_from_dict(data: Dict[str, Any]) -> Drawing:
    strokes = []
    for s in data.get("strokes", []):
        if s["kind"] not in ("draw", "erase"):
            raise ValueError(f"Unknown stroke kind: {s['kind']}")
        strokes.append(Stroke(
            id=str(s["id"]),
            kind=s["kind"],
            brush=_brush_from_dict(s["brush"]),
            points=tuple(Point(*p) for p in s["points"]),
        ))
    return Drawing(width=int(data["width"]), height=int(data["height"]), strokes=tuple(strokes))


def save_drawing(drawing: Drawing, output_path: str) -> Dict[str, Any]:
    data = drawing_to_dict(drawing)
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(data, f, indent=2)
    return data


def load_drawing(path: str) -> Drawing:
    with open(path, 'r') as f:
        return drawing_from_dict(json.load(f))


def write_gif(payload: bytes, output_path: str):
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'wb') as f:
        f.write(payload)
    print(f"Saved GIF: {output_path} ({len(payload)} bytes)")
