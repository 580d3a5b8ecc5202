"""Write SVG output from element definitions."""

from __future__ import annotations

from typing import Any

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(s: str) -> str:
    for raw, entity in _XML_ESCAPES:
        s = s.replace(raw, entity)
    return s


def fmt_num(value: float) -> str:
    """Format a coordinate without a trailing '.0'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.6g}"


def _attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return fmt_num(value)
    return escape_xml(str(value))


def serialize_element(elem: dict[str, Any], indent: int = 1) -> list[str]:
    """Serialize one element dict (``tag``, attributes, ``children`` / ``text``)."""
    pad = "  " * indent
    tag = elem.get("tag", "rect")
    attrs = {k: v for k, v in elem.items() if k not in ("tag", "children", "text") and v is not None}
    attr_str = "".join(f' {k}="{_attr_value(v)}"' for k, v in attrs.items())

    children = elem.get("children")
    text = elem.get("text")
    if children:
        lines = [f"{pad}<{tag}{attr_str}>"]
        for child in children:
            lines.extend(serialize_element(child, indent + 1))
        lines.append(f"{pad}</{tag}>")
        return lines
    if text is not None:
        return [f"{pad}<{tag}{attr_str}>{escape_xml(str(text))}</{tag}>"]
    return [f"{pad}<{tag}{attr_str} />"]


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float,
    canvas_h: float,
) -> str:
    """Generate a self-contained SVG document with explicit size and viewBox."""
    w, h = fmt_num(canvas_w), fmt_num(canvas_h)
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}"'
        f' viewBox="0 0 {w} {h}">',
    ]

    for elem in elements:
        lines.extend(serialize_element(elem))

    lines.append("</svg>")
    return "\n".join(lines)
