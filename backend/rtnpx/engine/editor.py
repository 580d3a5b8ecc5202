"""Editor state reducer.

The editor owns a dense grid of palette indices (0 = empty, N = palette
slot N) plus view settings. Every operation takes a state and returns the
next one; nothing is mutated in place.

    state = EditorState.empty(rows=16, cols=16)
    state = add_color(state, "#ff0000")
    state = paint(state, row=15, col=0)
    encoded = export(state)          # EncodedGrid(data="1", query=[...])
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, replace

import numpy as np
from numpy.typing import ArrayLike, NDArray

from rtnpx.codec.encoder import DEFAULT_INDEX, EncodedGrid, as_grid, encode_grid, palette_color
from rtnpx.codec.parser import parse_data
from rtnpx.config import settings
from rtnpx.engine.color import is_sentinel, normalize_color, require_color, sanitize_color
from rtnpx.engine.context import Direction, RenderParams
from rtnpx.engine.layout import compute_layout
from rtnpx.engine.params import Query, QueryView, parse_palette
from rtnpx.engine.renderer import Cell, build_document
from rtnpx.engine.resolver import PaletteResolver

logger = logging.getLogger(__name__)

_PALETTE_INDEX_RE = re.compile(r"^c(\d+)$")


@dataclass(frozen=True, eq=False)
class EditorState:
    grid: NDArray[np.int64]
    palette: tuple[str, ...] = ()
    selected: int = 0  # 0 = eraser
    cell_width: float = 20
    cell_height: float = 20
    alpha: float = 1.0
    direction: Direction = Direction.RIGHT

    @classmethod
    def empty(cls, rows: int = 16, cols: int = 16, **kwargs) -> EditorState:
        return cls(grid=np.zeros((rows, cols), dtype=np.int64), **kwargs)

    @property
    def rows(self) -> int:
        return int(self.grid.shape[0])

    @property
    def cols(self) -> int:
        return int(self.grid.shape[1])

    def render_params(self, **overrides) -> RenderParams:
        values = dict(
            direction=self.direction,
            cell_width=self.cell_width,
            cell_height=self.cell_height,
            alpha=self.alpha,
        )
        values.update(overrides)
        return RenderParams(**values)


# --- painting --------------------------------------------------------------


def _clamp(value: int, upper: int) -> int:
    return max(0, min(upper - 1, value))


def paint(state: EditorState, row: int, col: int, idx: int | None = None) -> EditorState:
    """Set one cell (storage coordinates, row 0 on top). Out-of-range clamps to the edge."""
    idx = state.selected if idx is None else idx
    grid = state.grid.copy()
    grid[_clamp(row, state.rows), _clamp(col, state.cols)] = idx
    return replace(state, grid=grid)


def line_cells(r0: int, c0: int, r1: int, c1: int) -> Iterator[tuple[int, int]]:
    """Bresenham line between two cells, both ends included."""
    dx, sx = abs(c1 - c0), (1 if c0 < c1 else -1)
    dy, sy = -abs(r1 - r0), (1 if r0 < r1 else -1)
    err = dx + dy
    r, c = r0, c0
    while True:
        yield r, c
        if r == r1 and c == c1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            c += sx
        if e2 <= dx:
            err += dx
            r += sy


def paint_line(
    state: EditorState,
    start: tuple[int, int],
    end: tuple[int, int],
    idx: int | None = None,
) -> EditorState:
    """Paint every cell a drag from ``start`` to ``end`` passes through."""
    idx = state.selected if idx is None else idx
    grid = state.grid.copy()
    for r, c in line_cells(*start, *end):
        grid[_clamp(r, state.rows), _clamp(c, state.cols)] = idx
    return replace(state, grid=grid)


def select(state: EditorState, idx: int) -> EditorState:
    if not 0 <= idx <= len(state.palette):
        raise IndexError(f"palette index out of range: {idx}")
    return replace(state, selected=idx)


def add_color(state: EditorState, color: str) -> EditorState:
    """Append a color to the palette and select it."""
    palette = (*state.palette, require_color(color))
    return replace(state, palette=palette, selected=len(palette))


def resize(state: EditorState, rows: int, cols: int) -> EditorState:
    """Keep the bottom rows and the left columns; pad with empty cells."""
    if rows < 1 or cols < 1:
        raise ValueError(f"grid size must be positive (got {rows}x{cols})")
    grid = np.zeros((rows, cols), dtype=np.int64)
    keep_rows = min(rows, state.rows)
    keep_cols = min(cols, state.cols)
    if keep_rows and keep_cols:
        grid[rows - keep_rows:, :keep_cols] = state.grid[state.rows - keep_rows:, :keep_cols]
    return replace(state, grid=grid)


# --- import / export -------------------------------------------------------


class _PaletteBuilder:
    """Grows the editor palette while imported labels are mapped to indices."""

    def __init__(self, palette: Sequence[str]) -> None:
        self.colors = list(palette)

    def set_slot(self, idx: int, color: str) -> None:
        while len(self.colors) < idx:
            self.colors.append(settings.default_color)
        self.colors[idx - 1] = color

    def index_of(self, color: str) -> int:
        target = color.strip().lower()
        for i, c in enumerate(self.colors, start=1):
            if c.strip().lower() == target:
                return i
        self.colors.append(color)
        return len(self.colors)


def import_text(state: EditorState, data: str, query: Query = ()) -> EditorState:
    """Replace the grid with the decoded ``data``; palette entries are merged.

    Colors are resolved exactly as the renderer would; ``cN`` labels backed
    by a ``pal_cN`` entry keep their index.
    """
    parsed = parse_data(data)
    parsed = parsed.resolve_open_ends(parsed.max_y)

    q = QueryView(query)
    palette, default_key = parse_palette(q)
    resolver = PaletteResolver(palette, default_key, q.get("color"))

    builder = _PaletteBuilder(state.palette)
    indexed: dict[str, int] = {}
    for label, raw in palette.items():
        color = normalize_color(raw)
        if color is None:
            continue
        m = _PALETTE_INDEX_RE.match(label)
        if m and int(m.group(1)) > 0:
            builder.set_slot(int(m.group(1)), color)
            indexed[label] = int(m.group(1))

    limit = settings.max_grid_size
    rows = min(limit, max(1, parsed.max_y))
    cols = min(limit, max(1, parsed.max_x))
    grid = np.zeros((rows, cols), dtype=np.int64)

    for x, col in enumerate(parsed.columns[:cols]):
        for seg in col.segments:
            label = seg.color_label or col.color_default
            if label in indexed:
                idx = indexed[label]
            else:
                idx = builder.index_of(resolver.resolve(seg, col))
            for y in seg.rows:
                if y <= rows:
                    grid[rows - y, x] = idx

    logger.debug("Imported %dx%d grid, palette of %d", rows, cols, len(builder.colors))
    return replace(state, grid=grid, palette=tuple(builder.colors))


def export(state: EditorState) -> EncodedGrid:
    return encode_grid(state.grid, state.palette)


# --- direct rendering -------------------------------------------------------


def grid_cells(
    grid: ArrayLike,
    palette: Sequence[str],
    fallback: str | None = None,
) -> Iterator[Cell]:
    """Painted cells as ``(column, row, fill)``, column by column, bottom-up.

    A default-colored index 1 never reaches the encoded palette, so it takes
    ``fallback`` (the caller's base color) when one is given.
    """
    arr = as_grid(grid)
    total_rows = arr.shape[0]
    for x in range(arr.shape[1]):
        for y in range(1, total_rows + 1):
            idx = int(arr[total_rows - y, x])
            if not idx:
                continue
            fill = palette_color(palette, idx)
            if fallback and idx == DEFAULT_INDEX and is_sentinel(fill):
                fill = fallback
            yield x + 1, y, fill


def painted_height(grid: ArrayLike) -> int:
    """Highest painted row in encoded coordinates (1 when nothing is painted)."""
    arr = as_grid(grid)
    if arr.shape[1] == 0:
        return 0
    painted = np.nonzero(arr.any(axis=1))[0]
    return int(arr.shape[0] - painted[0]) if len(painted) else 1


def render_grid(grid: ArrayLike, palette: Sequence[str], params: RenderParams) -> str:
    """Render a dense grid directly, sized the way its encoded form would be."""
    arr = as_grid(grid)
    layout = compute_layout(arr.shape[1], painted_height(arr), params)
    fallback = sanitize_color(params.base_color, settings.default_color)
    return build_document(layout, grid_cells(arr, palette, fallback), params)
