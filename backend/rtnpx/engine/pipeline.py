"""Render pipeline — parse -> resolve -> layout -> render, with error capture."""

from __future__ import annotations

import logging
import time

from rtnpx.codec.parser import parse_data
from rtnpx.engine.context import ParsedData, RenderParams, RenderResult
from rtnpx.engine.errors import RtnpxError
from rtnpx.engine.params import Query, parse_direction, parse_render_params
from rtnpx.engine.renderer import error_svg, render_svg

logger = logging.getLogger(__name__)


def parse(data: str | None, resolve_open_ends: bool = False) -> ParsedData:
    parsed = parse_data(data)
    if resolve_open_ends:
        parsed = parsed.resolve_open_ends(parsed.max_y)
    return parsed


def render(
    data: str | None,
    params: RenderParams,
    resolve_open_ends: bool = False,
) -> str:
    """Parse and render ``data``. Raises RtnpxError on bad input."""
    return render_svg(parse(data, resolve_open_ends), params)


def render_text(
    data: str | None,
    query: Query,
    *,
    direction: str | None,
    width: str | float | None,
    height: str | float | None,
    resolve_open_ends: bool = False,
) -> RenderResult:
    """Full request path: raw parameters in, document (or error document) out."""
    start = time.perf_counter()
    try:
        # direction, then data, then dimensions
        resolved = parse_direction(direction)
        parsed = parse(data, resolve_open_ends)
        params = parse_render_params(query, direction=resolved, width=width, height=height)
        svg = render_svg(parsed, params)
    except RtnpxError as e:
        logger.warning("Render failed: %s", e)
        return RenderResult(document=error_svg(str(e)), status=e.status, error=e)

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Rendered %d columns x %d rows (%d cells) in %.1fms",
        parsed.max_x,
        parsed.max_y,
        parsed.cell_count,
        elapsed,
    )
    return RenderResult(document=svg)
