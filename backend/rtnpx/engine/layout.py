"""Layout engine — column/row counts + cell geometry -> pixel coordinates.

Row 1 sits at the bottom of the content box; larger row indices go up.
Orientation ``bottom`` rotates the whole content group by 90 degrees, which
swaps the emitted canvas width and height.
"""

from __future__ import annotations

from dataclasses import dataclass

from rtnpx.engine.config import DEFAULT_LAYOUT, LayoutConfig
from rtnpx.engine.context import Direction, RenderParams
from rtnpx.svg.serializer import fmt_num


@dataclass(frozen=True)
class Layout:
    max_x: int
    max_y: int
    cell_width: float
    cell_height: float
    col_gap: float
    row_gap: float
    direction: Direction
    margin_left: float
    margin_bottom: float
    padding: float
    config: LayoutConfig = DEFAULT_LAYOUT

    @property
    def content_width(self) -> float:
        if self.max_x <= 0:
            return 0
        return self.max_x * self.cell_width + (self.max_x - 1) * self.col_gap

    @property
    def content_height(self) -> float:
        if self.max_y <= 0:
            return 0
        return self.max_y * self.cell_height + (self.max_y - 1) * self.row_gap

    @property
    def inner_width(self) -> float:
        """Unrotated width: left margin + content."""
        return self.margin_left + self.content_width

    @property
    def inner_height(self) -> float:
        """Unrotated height: content + bottom margin."""
        return self.content_height + self.margin_bottom

    @property
    def rotated(self) -> bool:
        return self.direction is Direction.BOTTOM

    @property
    def canvas_width(self) -> float:
        w = self.inner_height if self.rotated else self.inner_width
        return w + 2 * self.padding

    @property
    def canvas_height(self) -> float:
        h = self.inner_width if self.rotated else self.inner_height
        return h + 2 * self.padding

    @property
    def group_transform(self) -> str | None:
        # translate first, then rotate around the origin
        if self.rotated:
            return f"translate({fmt_num(self.inner_height)},0) rotate(90)"
        return None

    def pixel_x(self, col: int) -> float:
        return self.margin_left + (col - 1) * (self.cell_width + self.col_gap)

    def pixel_y(self, row: int) -> float:
        return self.content_height - (row * self.cell_height + (row - 1) * self.row_gap)

    def column_label_anchor(self, col: int) -> tuple[float, float]:
        return (
            self.pixel_x(col) + self.cell_width / 2,
            self.content_height + self.config.x_label_offset,
        )

    def row_label_anchor(self, row: int) -> tuple[float, float]:
        x = max(self.config.y_label_min_x, self.margin_left - self.config.y_label_inset)
        return x, self.pixel_y(row) + self.cell_height - self.config.y_label_baseline


def compute_layout(
    max_x: int,
    max_y: int,
    params: RenderParams,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> Layout:
    """Size the canvas for ``max_x`` columns and ``max_y`` rows."""
    return Layout(
        max_x=max_x,
        max_y=max_y,
        cell_width=params.cell_width,
        cell_height=params.cell_height,
        col_gap=max(0.0, params.col_gap),
        row_gap=max(0.0, params.row_gap),
        direction=params.direction,
        margin_left=config.label_margin if params.row_labels else 0,
        margin_bottom=config.label_margin if params.column_labels else 0,
        padding=config.outer_padding if params.has_labels else 0,
        config=config,
    )

