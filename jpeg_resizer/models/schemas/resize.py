"""Pydantic schemas for the resize API."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from jpeg_resizer.config import get_settings
from jpeg_resizer.models.domain.resize import ResizeRequest, ResizeResult


class ResizeRequestBody(BaseModel):
    """Batch resize request."""

    urls: list[str] = Field(..., min_length=1, description="Source JPEG URLs")
    width: int = Field(0, ge=0, description="Target width in px (0 = keep aspect ratio)")
    height: int = Field(0, ge=0, description="Target height in px (0 = keep aspect ratio)")

    @field_validator("urls")
    @classmethod
    def validate_urls(cls, v):
        settings = get_settings()
        max_urls = settings.max_urls_per_request
        if len(v) > max_urls:
            raise ValueError(f"Maximum {max_urls} URLs allowed per request")
        if any(not url.strip() for url in v):
            raise ValueError("URLs must not be blank")
        return v

    @field_validator("width", "height")
    @classmethod
    def validate_dimension(cls, v):
        settings = get_settings()
        if v > settings.max_dimension:
            raise ValueError(f"Dimension must not exceed {settings.max_dimension}px")
        return v

    def to_domain(self) -> ResizeRequest:
        return ResizeRequest(urls=list(self.urls), width=self.width, height=self.height)


class ResizeResultResponse(BaseModel):
    """Outcome for one source URL."""

    url: str | None = Field(None, description="URL of the resized image (success only)")
    result: Literal["success", "failure"]
    cached: bool = Field(False, description="Whether the image was already cached")

    @classmethod
    def from_domain(cls, result: ResizeResult) -> "ResizeResultResponse":
        return cls(**result.to_api_response())
