"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    rtnpx_env: str = "development"
    rtnpx_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Rendering defaults
    default_color: str = "#2c7be5"
    default_alpha: float = 1.0

    # Editor import clamp (rows and columns)
    max_grid_size: int = 128

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
