"""Query parameters -> RenderParams.

``query`` is an ordered sequence of ``(key, value)`` pairs, so repeated keys
(``label=x:...&label=y:...``) and declaration order (palette default key)
survive.

Axis labels fill with this precedence, each later form only filling
indices still unset:

    1. row<N>=... / column<N>=...        explicit 1-based index
    2. rows|row|ylabel|y=a,b,c           CSV shorthand, from index 1
       columns|column|xlabel|x=a,b,c
    3. label=y:a,b,c / label=x:a,b,c     repeated generic form
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable

from rtnpx.config import settings
from rtnpx.engine.context import Direction, RenderParams
from rtnpx.engine.errors import InvalidDimension, InvalidDirection, MissingDirection
from rtnpx.engine.renderer import clamp_alpha

Query = Iterable[tuple[str, str]]

_DIRECTIONS = {
    "right": Direction.RIGHT,
    "r": Direction.RIGHT,
    "bottom": Direction.BOTTOM,
    "b": Direction.BOTTOM,
}

_ROW_KEY_RE = re.compile(r"^row(\d+)$", re.IGNORECASE)
_COLUMN_KEY_RE = re.compile(r"^column(\d+)$", re.IGNORECASE)
_PALETTE_KEY_RE = re.compile(r"^pal_([A-Za-z][\w-]*)$")
# Colon may be ASCII, full-width, or the possessive particle
_GENERIC_LABEL_RE = re.compile(r"^(x|y)[：:の](.*)$", re.DOTALL)

_ROW_SHORTHAND = ("rows", "row", "ylabel", "y")
_COLUMN_SHORTHAND = ("columns", "column", "xlabel", "x")


class QueryView:
    """Read helpers over an ordered multi-valued query."""

    def __init__(self, query: Query) -> None:
        self.items = list(query)

    def get(self, key: str) -> str | None:
        for k, v in self.items:
            if k == key:
                return v
        return None

    def get_all(self, key: str) -> list[str]:
        return [v for k, v in self.items if k == key]

    def first_of(self, *keys: str) -> str | None:
        """First key with a non-empty value."""
        for key in keys:
            value = self.get(key)
            if value:
                return value
        return None


def parse_direction(value: str | None) -> Direction:
    if not value:
        raise MissingDirection()
    try:
        return _DIRECTIONS[value.strip().lower()]
    except KeyError:
        raise InvalidDirection(value) from None


def parse_dimension(name: str, value: str | float | None) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidDimension(name, value) from None
    if not math.isfinite(number) or number <= 0:
        raise InvalidDimension(name, value)
    return number


def _gap(value: str | None) -> float | None:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except ValueError:
        return 0.0
    return max(0.0, number) if math.isfinite(number) else 0.0


def parse_gaps(q: QueryView) -> tuple[float, float]:
    """Return ``(col_gap, row_gap)``; ``gap=x,y`` first, explicit keys override."""
    col_gap: float | None = None
    row_gap: float | None = None

    pair = q.get("gap")
    if pair:
        gx, _, gy = pair.partition(",")
        col_gap = _gap(gx) if gx else None
        row_gap = _gap(gy) if gy else None

    y = q.get("yGap")
    if y is None:
        y = q.get("rowGap")
    x = q.get("xGap")
    if x is None:
        x = q.get("colGap")
    if y is not None:
        row_gap = _gap(y) or 0.0
    if x is not None:
        col_gap = _gap(x) or 0.0

    return col_gap or 0.0, row_gap or 0.0


def _csv(value: str) -> list[str]:
    return [s.strip() for s in value.split(",") if s.strip()]


def _fill_sequential(items: list[str], target: dict[int, str]) -> None:
    for i, label in enumerate(items, start=1):
        target.setdefault(i, label)


def parse_axis_labels(q: QueryView) -> tuple[dict[int, str], dict[int, str]]:
    """Return ``(row_labels, column_labels)``."""
    rows: dict[int, str] = {}
    columns: dict[int, str] = {}

    for key, value in q.items:
        m = _ROW_KEY_RE.match(key)
        if m and int(m.group(1)) > 0:
            rows[int(m.group(1))] = value
            continue
        m = _COLUMN_KEY_RE.match(key)
        if m and int(m.group(1)) > 0:
            columns[int(m.group(1))] = value

    shorthand = q.first_of(*_ROW_SHORTHAND)
    if shorthand:
        _fill_sequential(_csv(shorthand), rows)
    shorthand = q.first_of(*_COLUMN_SHORTHAND)
    if shorthand:
        _fill_sequential(_csv(shorthand), columns)

    for raw in q.get_all("label"):
        m = _GENERIC_LABEL_RE.match(raw)
        if not m:
            continue
        target = rows if m.group(1) == "y" else columns
        _fill_sequential(_csv(m.group(2)), target)

    return rows, columns


def parse_palette(q: QueryView) -> tuple[dict[str, str], str | None]:
    """Return ``(palette, explicit_default_key)`` in declaration order."""
    palette: dict[str, str] = {}
    for key, value in q.items:
        m = _PALETTE_KEY_RE.match(key)
        if m:
            palette[m.group(1)] = value.strip()
    return palette, q.get("palette_default") or None


def parse_render_params(
    query: Query,
    *,
    direction: str | None,
    width: str | float | None,
    height: str | float | None,
) -> RenderParams:
    q = QueryView(query)
    col_gap, row_gap = parse_gaps(q)
    row_labels, column_labels = parse_axis_labels(q)
    palette, palette_default = parse_palette(q)

    alpha = q.get("alpha")
    return RenderParams(
        direction=parse_direction(direction),
        cell_width=parse_dimension("width", width),
        cell_height=parse_dimension("height", height),
        col_gap=col_gap,
        row_gap=row_gap,
        alpha=settings.default_alpha if alpha is None else clamp_alpha(alpha, settings.default_alpha),
        row_labels=row_labels,
        column_labels=column_labels,
        base_color=q.get("color") or None,
        palette=palette,
        palette_default=palette_default,
    )
