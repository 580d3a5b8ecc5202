"""Tests for the SVG renderer."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from rtnpx.codec.parser import parse_data
from rtnpx.engine.context import Direction
from rtnpx.engine.renderer import clamp_alpha, error_svg, render_svg
from rtnpx.svg.serializer import escape_xml, fmt_num
from tests.conftest import V2_BARS, V2_OVERLAP, make_params, rects

SVG_NS = "{http://www.w3.org/2000/svg}"


def _root(svg: str) -> ET.Element:
    return ET.fromstring(svg.encode("utf-8"))


def test_one_rect_per_cell():
    svg = render_svg(parse_data(V2_BARS), make_params())
    assert rects(svg) == [
        ("0", "40", "#2c7be5"),
        ("0", "20", "#2c7be5"),
        ("0", "0", "#2c7be5"),
        ("20", "20", "#2c7be5"),
    ]


def test_document_size():
    root = _root(render_svg(parse_data(V2_BARS), make_params()))
    assert root.get("width") == "40"
    assert root.get("height") == "60"
    assert root.get("viewBox") == "0 0 40 60"


def test_later_segments_override_per_cell():
    svg = render_svg(parse_data(V2_OVERLAP), make_params(palette={"c1": "#0000ff", "c2": "#ff0000"}))
    cells = rects(svg)
    # 4 cells for 1-4, then 2 for 2-3 drawn on top
    assert len(cells) == 6
    assert {fill for _, _, fill in cells[:4]} == {"#0000ff"}
    assert [y for _, y, _ in cells[4:]] == ["40", "20"]
    assert [fill for _, _, fill in cells[4:]] == ["#ff0000", "#ff0000"]


def test_single_global_opacity():
    svg = render_svg(parse_data(V2_BARS), make_params(alpha=0.5))
    root = _root(svg)
    groups = [g for g in root.iter(f"{SVG_NS}g") if g.get("class") == "cells"]
    assert len(groups) == 1
    assert groups[0].get("fill-opacity") == "0.5"
    assert svg.count("fill-opacity") == 1


def test_alpha_is_clamped():
    assert clamp_alpha(3) == 1.0
    assert clamp_alpha(-1) == 0.0
    assert clamp_alpha("abc") == 1.0
    assert clamp_alpha(float("nan"), 0.35) == 0.35


def test_palette_and_labels_resolve_per_segment():
    params = make_params(palette={"c2": "#111111"}, base_color="#000000")
    svg = render_svg(parse_data("~c2_1_2.c9/3.red"), params)
    fills = [fill for _, _, fill in rects(svg)]
    assert fills == ["#111111", "#111111", "red"]


def test_no_labels_no_background():
    svg = render_svg(parse_data(V2_BARS), make_params())
    assert "<text" not in svg
    assert 'fill="#ffffff"' not in svg


def test_labels_background_and_escaping():
    params = make_params(row_labels={1: "<a&b>"}, column_labels={2: "it's"})
    svg = render_svg(parse_data(V2_BARS), params)
    root = _root(svg)
    assert root.get("width") == str(56 + 40 + 16)
    first = list(root)[0]
    assert first.tag == f"{SVG_NS}rect" and first.get("fill") == "#ffffff"
    assert "&lt;a&amp;b&gt;" in svg
    assert "it&apos;s" in svg
    texts = {t.text: t for t in root.iter(f"{SVG_NS}text")}
    assert texts["<a&b>"].get("font-size") == "12"
    assert texts["it's"].get("text-anchor") == "middle"


def test_label_anchors():
    params = make_params(row_labels={2: "top"}, column_labels={1: "left"})
    root = _root(render_svg(parse_data(V2_BARS), params))
    texts = {t.text: t for t in root.iter(f"{SVG_NS}text")}
    row = texts["top"]
    assert row.get("text-anchor") == "start"
    assert (row.get("x"), row.get("y")) == ("50", "36")
    column = texts["left"]
    assert column.get("text-anchor") == "middle"
    assert (column.get("x"), column.get("y")) == ("66", "80")


def test_bottom_rotates_content_and_labels():
    params = make_params(direction=Direction.BOTTOM, column_labels={1: "x"})
    root = _root(render_svg(parse_data(V2_BARS), params))
    assert (root.get("width"), root.get("height")) == (str(116 + 16), str(40 + 16))
    content = [g for g in root.iter(f"{SVG_NS}g") if g.get("class") == "content"][0]
    assert content.get("transform") == "translate(116,0) rotate(90)"
    label = next(root.iter(f"{SVG_NS}text"))
    assert label.get("transform").startswith("rotate(-90 ")


def test_open_end_renders_single_cell_by_default():
    svg = render_svg(parse_data("3-"), make_params())
    assert len(rects(svg)) == 1


def test_error_svg():
    svg = error_svg("bad <token>")
    root = _root(svg)
    assert (root.get("width"), root.get("height")) == ("600", "80")
    text = next(root.iter(f"{SVG_NS}text"))
    assert text.text == "Error: bad <token>"
    assert text.get("font-family") == "monospace"
    assert text.get("fill") == "#d32f2f"


def test_escape_xml_all_five():
    assert escape_xml("&<>\"'") == "&amp;&lt;&gt;&quot;&apos;"


def test_fmt_num():
    assert fmt_num(20.0) == "20"
    assert fmt_num(2.5) == "2.5"
