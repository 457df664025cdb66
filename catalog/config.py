# catalog/config.py
"""
Application settings, read from environment variables (or a ``.env`` file)
via pydantic-settings.

    API_KEY=... PORT=8080 uvicorn catalog.main:app
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Product Catalog API")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, description="Port the server listens on")

    # Shared secret expected in the x-api-key header
    api_key: str = Field(default="mysecretkey123")

    log_level: str = Field(default="INFO")
    cors_origins: List[str] = Field(default=["*"])


@lru_cache
def get_settings() -> Settings:
    return Settings()
