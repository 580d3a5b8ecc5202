"""Shared test fixtures."""

from __future__ import annotations

import re

import pytest

from rtnpx.engine.context import Direction, RenderParams


# Sample encoded data

V2_BARS = "1-3/2"
V2_LABELED = "~c2_1-2_5.c9/_/3.red"
V2_OVERLAP = "1-4_2-3.c2"
V1_BARS = "3,1:2|4:"

# Storage order (top row first). Encodes to "1.c2_2-3/_/1-2.c2_4.c3"
EDITOR_GRID = [
    [0, 0, 3],
    [1, 0, 0],
    [1, 0, 2],
    [2, 0, 2],
]
EDITOR_PALETTE = ["#ff0000", "#00ff00", "#0000ff"]

RECT_RE = re.compile(r'<rect x="([^"]+)" y="([^"]+)" width="[^"]+" height="[^"]+" fill="([^"]+)"')


def make_params(**overrides) -> RenderParams:
    values = dict(direction=Direction.RIGHT, cell_width=20, cell_height=20)
    values.update(overrides)
    return RenderParams(**values)


def rects(svg: str) -> list[tuple[str, str, str]]:
    """(x, y, fill) of every cell rect, in document order."""
    return RECT_RE.findall(svg)


@pytest.fixture
def params() -> RenderParams:
    return make_params()


@pytest.fixture
def editor_grid() -> list[list[int]]:
    return [row[:] for row in EDITOR_GRID]


@pytest.fixture
def editor_palette() -> list[str]:
    return list(EDITOR_PALETTE)
