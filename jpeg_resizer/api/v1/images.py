"""Cached image retrieval endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from jpeg_resizer.dependencies import get_cache
from jpeg_resizer.middleware.error_handler import AppError
from jpeg_resizer.services.image.cache import BoundedCache
from jpeg_resizer.services.resize.handles import ImageHandles

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/image")


@router.get(
    "/{name}",
    response_class=Response,
    responses={200: {"content": {"image/jpeg": {}}}},
)
async def get_image(
    name: str,
    cache: Annotated[BoundedCache, Depends(get_cache)],
):
    """
    Serve a resized image by handle.

    Returns 404 until the image is in the cache, which for asynchronous
    resizes may be a short while after the handle was issued.
    """
    fingerprint = ImageHandles.parse(name)
    data = cache.get(fingerprint) if fingerprint else None

    if data is None:
        logger.debug(f"Image not cached: {name}")
        raise AppError("NOT_FOUND", "not found", status_code=status.HTTP_404_NOT_FOUND)

    return Response(content=data, media_type="image/jpeg")
