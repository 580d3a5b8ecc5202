"""Vector renderer — parsed columns + resolved colors + layout -> SVG.

Every segment is expanded into one unit rect per covered row. Later
segments are emitted after earlier ones, so overlaps are decided per cell
by declaration order and adjacent runs never bleed into each other.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from typing import Any

from rtnpx.engine.config import DEFAULT_LAYOUT, LayoutConfig
from rtnpx.engine.context import ParsedData, RenderParams
from rtnpx.engine.layout import Layout, compute_layout
from rtnpx.engine.resolver import PaletteResolver
from rtnpx.svg.serializer import fmt_num, serialize_svg

# (column, row, fill) with 1-based column and row
Cell = tuple[int, int, str]


def clamp_alpha(alpha: float, default: float = 1.0) -> float:
    try:
        alpha = float(alpha)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(alpha):
        return default
    return max(0.0, min(1.0, alpha))


def resolve_cells(data: ParsedData, params: RenderParams) -> Iterator[Cell]:
    """Yield one resolved cell per covered row, in declaration order."""
    resolver = PaletteResolver(params.palette, params.palette_default, params.base_color)
    for x, col in enumerate(data.columns, start=1):
        for seg in col.segments:
            fill = resolver.resolve(seg, col)
            for y in seg.rows:
                yield x, y, fill


def render_svg(
    data: ParsedData,
    params: RenderParams,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> str:
    layout = compute_layout(data.max_x, data.max_y, params, config)
    return build_document(layout, resolve_cells(data, params), params)


def build_document(layout: Layout, cells: Iterable[Cell], params: RenderParams) -> str:
    """Assemble the SVG document for already-resolved cells."""
    rects = [
        {
            "tag": "rect",
            "x": layout.pixel_x(x),
            "y": layout.pixel_y(y),
            "width": layout.cell_width,
            "height": layout.cell_height,
            "fill": fill,
            "stroke": "none",
        }
        for x, y, fill in cells
    ]

    content: list[dict[str, Any]] = [
        {"tag": "g", "class": "cells", "fill-opacity": clamp_alpha(params.alpha), "children": rects},
    ]
    content.extend(_label_elements(layout, params))

    root: dict[str, Any] = {
        "tag": "g",
        "class": "content",
        "transform": layout.group_transform,
        "children": content,
    }

    elements: list[dict[str, Any]] = []
    if params.has_labels:
        elements.append({"tag": "rect", "width": "100%", "height": "100%", "fill": "#ffffff"})
        p = fmt_num(layout.padding)
        root = {"tag": "g", "transform": f"translate({p},{p})", "children": [root]}
    elements.append(root)

    return serialize_svg(elements, layout.canvas_width, layout.canvas_height)


def _label_elements(layout: Layout, params: RenderParams) -> list[dict[str, Any]]:
    config = layout.config
    elements: list[dict[str, Any]] = []

    def text(x: float, y: float, anchor: str, value: str) -> dict[str, Any]:
        rotate = f"rotate(-90 {fmt_num(x)} {fmt_num(y)})" if layout.rotated else None
        return {
            "tag": "text",
            "x": x,
            "y": y,
            "text-anchor": anchor,
            "font-size": config.label_font_size,
            "fill": config.label_color,
            "transform": rotate,
            "text": value,
        }

    for i in range(1, layout.max_x + 1):
        label = params.column_labels.get(i)
        if label:
            x, y = layout.column_label_anchor(i)
            elements.append(text(x, y, "middle", label))

    for j in range(1, layout.max_y + 1):
        label = params.row_labels.get(j)
        if label:
            x, y = layout.row_label_anchor(j)
            elements.append(text(x, y, "start", label))

    return elements


def error_svg(message: str, config: LayoutConfig = DEFAULT_LAYOUT) -> str:
    """Fixed-size error document."""
    elements = [
        {"tag": "rect", "width": "100%", "height": "100%", "fill": config.error_background},
        {
            "tag": "text",
            "x": 10,
            "y": 50,
            "fill": config.error_color,
            "font-family": "monospace",
            "font-size": config.error_font_size,
            "text": f"Error: {message}",
        },
    ]
    return serialize_svg(elements, config.error_width, config.error_height)
