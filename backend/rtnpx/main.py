"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rtnpx.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.rtnpx_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="rtnpx",
        description="Pixel-art SVG rendering from a compact URL-safe grid encoding",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    from rtnpx.api.router import api_router, render_router

    app.include_router(api_router)
    app.include_router(render_router)

    return app


app = create_app()
