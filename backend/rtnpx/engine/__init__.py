"""rtnpx rendering engine: palette resolution, layout and SVG output."""

from rtnpx.engine.context import Column, Direction, ParsedData, RenderParams, RenderResult, Segment
from rtnpx.engine.errors import RtnpxError
from rtnpx.engine.resolver import PaletteResolver

__all__ = [
    "Column",
    "Direction",
    "ParsedData",
    "RenderParams",
    "RenderResult",
    "RtnpxError",
    "Segment",
    "PaletteResolver",
]
