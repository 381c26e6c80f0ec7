"""Dependency injection factories."""

from fastapi import Request

from jpeg_resizer.services.image.cache import BoundedCache
from jpeg_resizer.services.resize.pipeline import ResizePipeline


async def get_pipeline(request: Request) -> ResizePipeline:
    """Get the resize pipeline from app state."""
    return request.app.state.pipeline


async def get_cache(request: Request) -> BoundedCache:
    """Get the image cache from app state."""
    return request.app.state.pipeline.cache
