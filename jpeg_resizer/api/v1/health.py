"""Health check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from jpeg_resizer.dependencies import get_pipeline
from jpeg_resizer.models.schemas.common import (
    CacheHealth,
    DetailedHealthResponse,
    HealthResponse,
)
from jpeg_resizer.services.resize.pipeline import ResizePipeline

router = APIRouter(prefix="/health")


@router.get("", response_model=HealthResponse)
async def health_check():
    """
    Basic health check for load balancers.

    Returns 200 if service is running.
    """
    return HealthResponse(status="ok")


@router.get("/ready", response_model=DetailedHealthResponse)
async def readiness_check(
    pipeline: Annotated[ResizePipeline, Depends(get_pipeline)],
):
    """
    Readiness check with cache and background worker statistics.

    Reports ``degraded`` when background resizes have crashed unexpectedly.
    """
    stats = pipeline.get_stats()
    overall_status = "degraded" if stats["background"]["failed"] else "ok"

    return DetailedHealthResponse(
        status=overall_status,
        cache=CacheHealth(**pipeline.cache.get_stats()),
        pipeline=stats,
    )
