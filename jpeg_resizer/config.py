"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "jpeg-resizer"
    host: str = "localhost"
    port: int = 8080
    debug: bool = False
    log_level: str = "INFO"

    # Base of the URLs handed back to clients (handles are appended to it)
    public_base_url: str = "http://localhost:8080"

    # Fetching
    fetch_timeout_seconds: float = 1.0
    fetch_max_bytes: int = 15 * 1024 * 1024  # 15 MiB
    fetch_content_type: str = "image/jpeg"

    # Resizing
    resize_filter: Literal["lanczos"] = "lanczos"
    jpeg_quality: int = 75
    max_dimension: int = 8192

    # Cache
    cache_capacity: int = 1024

    # Requests
    request_timeout_seconds: float = 10.0
    max_request_bytes: int = 8 * 1024
    max_urls_per_request: int = 64

    # Background work
    shutdown_drain_timeout_seconds: float = 30.0

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
