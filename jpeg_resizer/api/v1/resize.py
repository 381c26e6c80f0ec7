"""Batch resize endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from jpeg_resizer.dependencies import get_pipeline
from jpeg_resizer.models.schemas.resize import ResizeRequestBody, ResizeResultResponse
from jpeg_resizer.services.resize.pipeline import ResizePipeline

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/resize",
    response_model=list[ResizeResultResponse],
    status_code=status.HTTP_201_CREATED,
)
async def resize_images(
    body: ResizeRequestBody,
    pipeline: Annotated[ResizePipeline, Depends(get_pipeline)],
    run_async: Annotated[
        bool,
        Query(alias="async", description="Return immediately and resize in the background"),
    ] = False,
):
    """
    Resize a batch of JPEG images.

    Returns one result per source URL, in request order. Synchronous requests
    block until every image is cached; with ``?async=true`` cache misses are
    reported as successes right away and their URLs start resolving once the
    background resize finishes.
    """
    request = body.to_domain()
    logger.info(
        f"Resizing {len(request.urls)} image(s) to {request.width}x{request.height} "
        f"({'async' if run_async else 'sync'})"
    )

    if run_async:
        results = await pipeline.process_resizes_async(request)
    else:
        results = await pipeline.process_resizes(request)

    return [ResizeResultResponse.from_domain(result) for result in results]
