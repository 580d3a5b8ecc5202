"""Master router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from rtnpx.api import health, render

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)

# Rendering lives at the root so encoded URLs stay short
render_router = render.router
