"""Grid encoder — dense editor grid -> v2 text + palette query.

The grid is stored top row first; encoded row 1 is the bottom row, so
``encoded_y = total_rows - storage_row``. Each maximal run of one non-zero
color index in a column becomes one segment:

    single row   "4"      /  "4.c3"
    several rows "2-5"    /  "2-5.c3"

Index 1 is the implicit default color and carries no label. A column with
nothing painted encodes as "_" so its position survives.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from urllib.parse import urlencode

import numpy as np
from numpy.typing import ArrayLike, NDArray

from rtnpx.config import settings
from rtnpx.engine.color import is_sentinel, normalize_color

logger = logging.getLogger(__name__)

EMPTY_COLUMN = "_"
DEFAULT_INDEX = 1


@dataclass(frozen=True)
class EncodedGrid:
    data: str
    query: list[tuple[str, str]] = field(default_factory=list)

    @property
    def query_string(self) -> str:
        return urlencode(self.query)

    def to_path(self, direction: str, width: float, height: float) -> str:
        """Path-form URL, e.g. ``/r/20/20/1-3_5.c2/_?pal_c2=ff0000``."""
        d = direction[:1]
        path = f"/{d}/{_dim(width)}/{_dim(height)}/{self.data}"
        return f"{path}?{self.query_string}" if self.query else path


def _dim(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def as_grid(grid: ArrayLike) -> NDArray[np.int64]:
    arr = np.asarray(grid, dtype=np.int64)
    if arr.size == 0:
        return np.zeros((0, 0), dtype=np.int64)
    if arr.ndim != 2:
        raise ValueError(f"grid must be 2-dimensional, got shape {arr.shape}")
    if (arr < 0).any():
        raise ValueError("grid color indices must be >= 0")
    return arr


def column_runs(column: NDArray[np.int64]) -> list[tuple[int, int, int]]:
    """Runs of ``(y0, y1, index)`` scanning bottom -> top, zeros skipped."""
    runs: list[tuple[int, int, int]] = []
    bottom_up = column[::-1]
    start = 0
    for y in range(1, len(bottom_up) + 1):
        if y == len(bottom_up) or bottom_up[y] != bottom_up[start]:
            idx = int(bottom_up[start])
            if idx != 0:
                runs.append((start + 1, y, idx))
            start = y
    return runs


def encode_run(y0: int, y1: int, idx: int) -> str:
    base = str(y0) if y0 == y1 else f"{y0}-{y1}"
    return base if idx == DEFAULT_INDEX else f"{base}.c{idx}"


def encode_data(grid: ArrayLike) -> str:
    arr = as_grid(grid)
    cols: list[str] = []
    for x in range(arr.shape[1]):
        segs = [encode_run(*run) for run in column_runs(arr[:, x])]
        cols.append("_".join(segs) if segs else EMPTY_COLUMN)
    return "/".join(cols)


def palette_color(palette: Sequence[str], idx: int) -> str:
    """Color shown for ``idx``; missing or invalid slots show the default color."""
    raw = palette[idx - 1] if 0 < idx <= len(palette) else None
    color = normalize_color(raw)
    if color is None or is_sentinel(color):
        return settings.default_color
    return color


def encode_palette(grid: ArrayLike, palette: Sequence[str]) -> list[tuple[str, str]]:
    """``pal_c{idx}`` pairs for every referenced index, ascending.

    A default-colored index 1 is left out: unlabeled runs already fall back
    to the default color. Should any other entry then be emitted,
    ``palette_default=c1`` pins the default key so that entry cannot take
    over the unlabeled runs.
    """
    arr = as_grid(grid)
    used = sorted(int(i) for i in np.unique(arr) if i > 0)

    pairs: list[tuple[str, str]] = []
    omitted_default = False
    for idx in used:
        color = palette_color(palette, idx)
        if idx == DEFAULT_INDEX and is_sentinel(color):
            omitted_default = True
            continue
        pairs.append((f"pal_c{idx}", color.lstrip("#")))

    if omitted_default and pairs:
        pairs.append(("palette_default", f"c{DEFAULT_INDEX}"))
    return pairs


def encode_grid(grid: ArrayLike, palette: Sequence[str]) -> EncodedGrid:
    encoded = EncodedGrid(data=encode_data(grid), query=encode_palette(grid, palette))
    logger.debug("Encoded grid: %d chars, %d palette entries", len(encoded.data), len(encoded.query))
    return encoded
