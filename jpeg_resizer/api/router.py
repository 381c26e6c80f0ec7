"""Main API router aggregating all version routers."""

from fastapi import APIRouter

from jpeg_resizer.api.v1.health import router as health_router
from jpeg_resizer.api.v1.images import router as images_router
from jpeg_resizer.api.v1.resize import router as resize_router

api_router = APIRouter()

# v1 endpoints
api_router.include_router(health_router, prefix="/v1", tags=["Health"])
api_router.include_router(resize_router, prefix="/v1", tags=["Resize"])
api_router.include_router(images_router, prefix="/v1", tags=["Images"])
