"""Layout configuration — fixed geometry and label styling."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutConfig:
    """Constants shared by the layout engine and the renderer."""

    # Reserved only when an axis has at least one label
    label_margin: float = 56
    # Outer padding on all sides once any label exists
    outer_padding: float = 8

    # Axis label text
    label_font_size: int = 12
    label_color: str = "#334155"
    x_label_offset: float = 20  # below the content box
    y_label_inset: float = 6  # from the left margin edge
    y_label_min_x: float = 2
    y_label_baseline: float = 4  # above the bottom of the row

    # Error document
    error_width: int = 600
    error_height: int = 80
    error_background: str = "#fff5f5"
    error_color: str = "#d32f2f"
    error_font_size: int = 16


DEFAULT_LAYOUT = LayoutConfig()
