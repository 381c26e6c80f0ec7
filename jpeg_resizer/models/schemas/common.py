"""Common Pydantic schemas for API responses."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human readable message")
    details: dict[str, Any] | None = Field(None, description="Additional details")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str = Field(..., description="Health status: ok, degraded, error")


class CacheHealth(BaseModel):
    """Cache occupancy and hit statistics."""

    entries: int
    capacity: int
    total_bytes: int
    hits: int
    misses: int
    evictions: int


class DetailedHealthResponse(BaseModel):
    """Detailed health check response with cache and worker statistics."""

    status: str
    cache: CacheHealth
    pipeline: dict[str, dict[str, int]]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
