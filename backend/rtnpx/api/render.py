"""GET SVG endpoints — path form and query form.

    /{d}/{width}/{height}/{data}?pal_c2=ff0000&rows=a,b    d = r | b
    /index.svg?direction=right&data=1-3/2&width=20&height=20
"""

from __future__ import annotations

from fastapi import APIRouter, Request, Response

from rtnpx.engine.context import RenderResult
from rtnpx.engine.pipeline import render_text

router = APIRouter()


def _to_response(result: RenderResult) -> Response:
    return Response(
        content=result.document,
        status_code=result.status,
        media_type=RenderResult.media_type,
    )


@router.get("/index.svg")
async def render_query(request: Request) -> Response:
    q = request.query_params
    result = render_text(
        q.get("data"),
        q.multi_items(),
        direction=q.get("direction"),
        width=q.get("width"),
        height=q.get("height"),
    )
    return _to_response(result)


@router.get("/{d}/{width}/{height}/{data:path}")
async def render_path(request: Request, d: str, width: str, height: str, data: str) -> Response:
    result = render_text(
        data,
        request.query_params.multi_items(),
        direction=d,
        width=width,
        height=height,
    )
    return _to_response(result)
