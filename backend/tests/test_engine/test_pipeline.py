"""Tests for the render pipeline."""

from __future__ import annotations

import pytest

from rtnpx.engine.errors import InvalidDimension, InvalidDirection, MalformedToken, MissingData, MissingDirection
from rtnpx.engine.pipeline import render_text
from tests.conftest import rects


def _render(data, query=(), direction="r", width="20", height="20", **kwargs):
    return render_text(data, list(query), direction=direction, width=width, height=height, **kwargs)


def test_ok():
    result = _render("1-3/2", [("pal_c1", "ff0000")])
    assert result.ok
    assert result.status == 200
    assert result.document.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert {fill for _, _, fill in rects(result.document)} == {"#ff0000"}


def test_geometry_example():
    result = _render("1-3/2", [("row1", "a")])
    assert 'width="112" height="76"' in result.document


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"direction": None}, MissingDirection),
        ({"direction": "x"}, InvalidDirection),
        ({"data": ""}, MissingData),
        ({"data": "1/abc"}, MalformedToken),
        ({"width": "0"}, InvalidDimension),
        ({"width": "abc"}, InvalidDimension),
    ],
)
def test_errors_produce_error_document(kwargs, error):
    data = kwargs.pop("data", "1-3")
    result = _render(data, **kwargs)
    assert not result.ok
    assert result.status == 400
    assert isinstance(result.error, error)
    assert 'width="600" height="80"' in result.document
    assert rects(result.document) == []


def test_failures_are_deterministic():
    first = _render("1/0")
    second = _render("1/0")
    assert first.document == second.document


def test_resolve_open_ends():
    assert len(rects(_render("2-/1-4").document)) == 1 + 4
    assert len(rects(_render("2-/1-4", resolve_open_ends=True).document)) == 3 + 4


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"direction": None, "width": "0"}, MissingDirection),
        ({"direction": "x", "width": "0"}, InvalidDirection),
        ({"width": "0", "height": "abc"}, MissingData),
    ],
)
def test_validation_order(kwargs, error):
    result = _render("", **kwargs)
    assert isinstance(result.error, error)


def test_missing_data_reported_before_bad_dimensions():
    result = _render(None, width="0")
    assert "data is required" in result.document
