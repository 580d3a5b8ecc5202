"""Data parser — encoded text -> ParsedData.

Two dialects, auto-detected on the raw text:

    v1 (legacy)   "3,1:4|6:,"          comma columns, '|' segments, a:b ranges
    v2 (current)  "~c2_1-3_5.c9/_/7-"  slash columns, '_' segments, a-b ranges

Any text containing ':' or '|' is v1; everything else is v2. Tokens are
normalized immediately into Segment / Column so nothing downstream cares
which dialect was used.
"""

from __future__ import annotations

import logging
import math
import re

from rtnpx.engine.context import Column, Dialect, ParsedData, Segment
from rtnpx.engine.errors import MalformedToken, MissingData

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_STRIPPED_SUFFIXES = (".svg", ".png")


def parse_data(text: str | None) -> ParsedData:
    """Parse encoded text into columns of segments. Fails on the first bad token."""
    if text is None:
        raise MissingData()
    text = strip_suffix(text.strip())
    if not text:
        raise MissingData()

    dialect = detect_dialect(text)
    if dialect is Dialect.V1:
        columns = tuple(_parse_v1_column(tok.strip()) for tok in text.split(","))
    else:
        columns = tuple(_parse_v2_column(tok.strip()) for tok in text.split("/"))

    data = ParsedData(columns=columns, dialect=dialect)
    logger.debug(
        "Parsed %s data: %d columns, %d rows", dialect.value, data.max_x, data.max_y,
    )
    return data


def strip_suffix(text: str) -> str:
    """Drop a trailing .svg / .png extension from the whole string."""
    for suffix in _STRIPPED_SUFFIXES:
        if text.endswith(suffix):
            return text[: -len(suffix)]
    return text


def detect_dialect(text: str) -> Dialect:
    return Dialect.V1 if (":" in text or "|" in text) else Dialect.V2


def _number(raw: str, token: str) -> int:
    """Coerce one y value. Must be finite and >= 1; fractions are floored."""
    raw = raw.strip()
    if not _NUMBER_RE.match(raw):
        raise MalformedToken(token, f"{raw!r} is not a number")
    value = float(raw)
    if not math.isfinite(value):
        raise MalformedToken(token, "value is not finite")
    if value < 1:
        raise MalformedToken(token, "y must be >= 1")
    return math.floor(value)


def _range(a: int, b: int) -> tuple[int, int]:
    return min(a, b), max(a, b)


# --- v1 -------------------------------------------------------------------


def _parse_v1_column(token: str) -> Column:
    parts = [p.strip() for p in token.split("|")]
    return Column(segments=tuple(_parse_v1_segment(p) for p in parts if p))


def _parse_v1_segment(part: str) -> Segment:
    if ":" not in part:
        # Bare number: a bar from the bottom row
        return Segment(y0=1, y1=_number(part, part))

    start, _, end = part.partition(":")
    if not end.strip():
        if not start.strip():
            raise MalformedToken(part, "empty range")
        y0 = _number(start, part)
        return Segment(y0=y0, y1=y0, open_end=True)

    ya = _number(start, part) if start.strip() else 1
    y0, y1 = _range(ya, _number(end, part))
    return Segment(y0=y0, y1=y1)


# --- v2 -------------------------------------------------------------------


def _parse_v2_column(token: str) -> Column:
    parts = [p.strip() for p in token.split("_")]
    parts = [p for p in parts if p]

    color_default = None
    if parts and parts[0].startswith("~"):
        color_default = parts[0][1:]
        if not color_default:
            raise MalformedToken(parts[0], "empty column default label")
        parts = parts[1:]

    return Column(
        segments=tuple(_parse_v2_segment(p) for p in parts),
        color_default=color_default,
    )


def _parse_v2_segment(part: str) -> Segment:
    base, dot, label = part.partition(".")
    if dot and not label:
        raise MalformedToken(part, "empty label")
    color_label = label or None

    if "-" not in base:
        y = _number(base, part)
        return Segment(y0=y, y1=y, color_label=color_label)

    start, _, end = base.partition("-")
    has_start, has_end = bool(start.strip()), bool(end.strip())
    if has_start and has_end:
        y0, y1 = _range(_number(start, part), _number(end, part))
        return Segment(y0=y0, y1=y1, color_label=color_label)
    if has_start:
        y0 = _number(start, part)
        return Segment(y0=y0, y1=y0, open_end=True, color_label=color_label)
    if has_end:
        y0, y1 = _range(1, _number(end, part))
        return Segment(y0=y0, y1=y1, color_label=color_label)
    raise MalformedToken(part, "empty range")
