"""Tests for the layout engine."""

from __future__ import annotations

from rtnpx.engine.context import Direction
from rtnpx.engine.layout import compute_layout
from tests.conftest import make_params


def test_content_size_without_labels():
    layout = compute_layout(2, 3, make_params())
    assert (layout.content_width, layout.content_height) == (40, 60)
    assert (layout.margin_left, layout.margin_bottom, layout.padding) == (0, 0, 0)
    assert (layout.canvas_width, layout.canvas_height) == (40, 60)
    assert layout.group_transform is None


def test_row_label_adds_left_margin_and_padding():
    layout = compute_layout(2, 3, make_params(row_labels={1: "a"}))
    assert layout.margin_left == 56
    assert layout.margin_bottom == 0
    assert layout.padding == 8
    assert (layout.canvas_width, layout.canvas_height) == (56 + 40 + 16, 60 + 16)


def test_column_label_adds_bottom_margin():
    layout = compute_layout(2, 3, make_params(column_labels={2: "b"}))
    assert (layout.margin_left, layout.margin_bottom) == (0, 56)
    assert layout.canvas_height == 60 + 56 + 16


def test_gaps():
    layout = compute_layout(3, 2, make_params(col_gap=5, row_gap=2))
    assert layout.content_width == 3 * 20 + 2 * 5
    assert layout.content_height == 2 * 20 + 2


def test_negative_gaps_clamp_to_zero():
    layout = compute_layout(3, 2, make_params(col_gap=-5, row_gap=-1))
    assert (layout.col_gap, layout.row_gap) == (0, 0)


def test_empty():
    layout = compute_layout(0, 0, make_params())
    assert (layout.content_width, layout.content_height) == (0, 0)


def test_row_one_is_at_the_bottom():
    layout = compute_layout(2, 3, make_params(row_gap=2))
    # content height = 3*20 + 2*2 = 64
    assert layout.pixel_y(1) == 64 - 20
    assert layout.pixel_y(3) == 0
    assert layout.pixel_y(1) > layout.pixel_y(2) > layout.pixel_y(3)


def test_pixel_x_honors_margin_and_gap():
    layout = compute_layout(3, 1, make_params(col_gap=4, row_labels={1: "r"}))
    assert layout.pixel_x(1) == 56
    assert layout.pixel_x(3) == 56 + 2 * 24


def test_bottom_swaps_canvas_and_rotates():
    layout = compute_layout(2, 3, make_params(direction=Direction.BOTTOM))
    assert (layout.canvas_width, layout.canvas_height) == (60, 40)
    assert layout.group_transform == "translate(60,0) rotate(90)"


def test_bottom_with_labels():
    params = make_params(direction=Direction.BOTTOM, column_labels={1: "x"})
    layout = compute_layout(2, 3, params)
    # unrotated: 40 wide, 60 + 56 tall
    assert layout.group_transform == "translate(116,0) rotate(90)"
    assert (layout.canvas_width, layout.canvas_height) == (116 + 16, 40 + 16)


def test_label_anchors():
    layout = compute_layout(2, 3, make_params(row_labels={1: "r"}, column_labels={1: "c"}))
    assert layout.column_label_anchor(1) == (56 + 10, 60 + 20)
    assert layout.row_label_anchor(1) == (50, 40 + 20 - 4)
