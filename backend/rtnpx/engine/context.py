"""Value structures flowing through parse -> resolve -> layout -> render.

Everything here is immutable and lives for a single request.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace

from rtnpx.engine.errors import RtnpxError


class Dialect(str, enum.Enum):
    V1 = "v1"  # comma columns, '|' segments, 'a:b' ranges
    V2 = "v2"  # slash columns, '_' segments, 'a-b' ranges, '.label', '~label'


class Direction(str, enum.Enum):
    RIGHT = "right"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Segment:
    """Inclusive run of rows [y0, y1] in one column (row 1 is the bottom)."""

    y0: int
    y1: int
    open_end: bool = False
    color_label: str | None = None

    @property
    def rows(self) -> range:
        return range(self.y0, self.y1 + 1)


@dataclass(frozen=True)
class Column:
    segments: tuple[Segment, ...] = ()
    # Applied to segments without their own label
    color_default: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.segments


@dataclass(frozen=True)
class ParsedData:
    """Dialect-agnostic result of parsing the encoded text."""

    columns: tuple[Column, ...] = ()
    dialect: Dialect = Dialect.V2

    @property
    def max_x(self) -> int:
        return len(self.columns)

    @property
    def max_y(self) -> int:
        if not self.columns:
            return 0
        return max((s.y1 for c in self.columns for s in c.segments), default=1)

    @property
    def cell_count(self) -> int:
        return sum(len(s.rows) for c in self.columns for s in c.segments)

    def resolve_open_ends(self, total_rows: int) -> ParsedData:
        """Extend every open-ended segment up to ``total_rows``."""
        columns = tuple(
            replace(
                col,
                segments=tuple(
                    replace(s, y1=max(s.y1, total_rows)) if s.open_end else s
                    for s in col.segments
                ),
            )
            for col in self.columns
        )
        return replace(self, columns=columns)


@dataclass(frozen=True)
class RenderParams:
    direction: Direction
    cell_width: float
    cell_height: float
    col_gap: float = 0.0
    row_gap: float = 0.0
    alpha: float = 1.0
    # 1-based index -> label text
    row_labels: dict[int, str] = field(default_factory=dict)
    column_labels: dict[int, str] = field(default_factory=dict)
    # Caller-supplied global fallback (None -> builtin default color)
    base_color: str | None = None
    # label -> raw color token, in declaration order
    palette: dict[str, str] = field(default_factory=dict)
    palette_default: str | None = None

    @property
    def has_labels(self) -> bool:
        return bool(self.row_labels or self.column_labels)


@dataclass(frozen=True)
class RenderResult:
    """Plain result value: either a rendered document or an error document."""

    document: str
    status: int = 200
    error: RtnpxError | None = None

    media_type = "image/svg+xml; charset=utf-8"

    @property
    def ok(self) -> bool:
        return self.error is None
