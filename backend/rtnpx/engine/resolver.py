"""Palette resolver — one concrete fill color per segment.

Resolution is an ordered chain of lookups tried in sequence; the first one
that yields a valid color wins:

    1. segment label       -> palette entry
    2. segment label       -> raw color token
    3. column default      -> palette entry
    4. palette default key -> palette entry
    5. base color (caller-supplied, else the builtin default)

An invalid color at any step counts as "not found".

Usage:
    resolver = PaletteResolver({"c2": "#111111"})
    resolver.resolve(segment, column)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from rtnpx.config import settings
from rtnpx.engine.color import is_sentinel, normalize_color, sanitize_color
from rtnpx.engine.context import Column, Segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaletteState:
    palette: dict[str, str]
    default_key: str | None
    base_color: str


Lookup = Callable[[Segment, Column, PaletteState], "str | None"]


def _palette_entry(state: PaletteState, label: str | None) -> str | None:
    if label is None or label not in state.palette:
        return None
    return normalize_color(state.palette[label])


def _segment_palette_label(seg: Segment, col: Column, state: PaletteState) -> str | None:
    return _palette_entry(state, seg.color_label)


def _segment_raw_color(seg: Segment, col: Column, state: PaletteState) -> str | None:
    return normalize_color(seg.color_label)


def _column_default_label(seg: Segment, col: Column, state: PaletteState) -> str | None:
    return _palette_entry(state, col.color_default)


def _palette_default_key(seg: Segment, col: Column, state: PaletteState) -> str | None:
    return _palette_entry(state, state.default_key)


def _base_color(seg: Segment, col: Column, state: PaletteState) -> str | None:
    return state.base_color


RESOLUTION_CHAIN: tuple[tuple[str, Lookup], ...] = (
    ("segment_label", _segment_palette_label),
    ("segment_raw_color", _segment_raw_color),
    ("column_default", _column_default_label),
    ("palette_default", _palette_default_key),
    ("base_color", _base_color),
)


def infer_default_key(palette: dict[str, str], sentinel: str | None = None) -> str | None:
    """First declared palette label whose value is not the reserved default color."""
    for label, value in palette.items():
        if not is_sentinel(value, sentinel):
            return label
    return None


class PaletteResolver:
    """Resolves segment colors against a palette map."""

    def __init__(
        self,
        palette: dict[str, str] | None = None,
        default_key: str | None = None,
        base_color: str | None = None,
        chain: tuple[tuple[str, Lookup], ...] = RESOLUTION_CHAIN,
    ) -> None:
        palette = dict(palette or {})
        if default_key is None:
            default_key = infer_default_key(palette)
        self.state = PaletteState(
            palette=palette,
            default_key=default_key,
            base_color=sanitize_color(base_color, settings.default_color),
        )
        self.chain = chain

    def resolve_step(self, seg: Segment, col: Column) -> tuple[str, str]:
        """Return ``(step_name, color)`` for the first lookup that hits."""
        for name, lookup in self.chain:
            color = lookup(seg, col, self.state)
            if color is not None:
                return name, color
        return "builtin", settings.default_color

    def resolve(self, seg: Segment, col: Column) -> str:
        return self.resolve_step(seg, col)[1]
