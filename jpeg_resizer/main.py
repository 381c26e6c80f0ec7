"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jpeg_resizer.api.router import api_router
from jpeg_resizer.config import get_settings
from jpeg_resizer.middleware.error_handler import setup_exception_handlers
from jpeg_resizer.middleware.limits import BodySizeLimitMiddleware, RequestTimeoutMiddleware
from jpeg_resizer.middleware.observability import get_logger, setup_observability
from jpeg_resizer.services.fetcher import Fetcher
from jpeg_resizer.services.image.cache import BoundedCache
from jpeg_resizer.services.image.transformer import Transformer
from jpeg_resizer.services.resize.pipeline import ResizePipeline

settings = get_settings()

logger = get_logger(__name__)


def build_pipeline() -> ResizePipeline:
    """Construct the cache and pipeline from settings."""
    return ResizePipeline(
        cache=BoundedCache(settings.cache_capacity),
        fetcher=Fetcher(),
        transformer=Transformer(),
        public_base_url=settings.public_base_url,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    # Startup
    logger.info(f"Starting {settings.app_name}...")

    pipeline: ResizePipeline | None = getattr(app.state, "pipeline", None)
    if pipeline is None:
        pipeline = build_pipeline()
        app.state.pipeline = pipeline
    logger.info(f"Image cache initialized (capacity {pipeline.cache.capacity})")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await pipeline.aclose(settings.shutdown_drain_timeout_seconds)
    logger.info("Shutdown complete")


def create_app(pipeline: ResizePipeline | None = None) -> FastAPI:
    """
    Application factory.

    Args:
        pipeline: Prebuilt pipeline to serve (built from settings at startup
            if omitted)
    """
    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        description="On-demand JPEG resizing with an in-memory LRU cache",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    if pipeline is not None:
        app.state.pipeline = pipeline

    # Added innermost first; CORS ends up outermost
    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_request_bytes)

    # Logging and request tracing
    setup_observability(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Exception handlers
    setup_exception_handlers(app)

    # Routes
    app.include_router(api_router)

    return app


app = create_app()
