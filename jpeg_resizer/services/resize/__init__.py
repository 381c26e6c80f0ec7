"""Resize pipeline service module."""

from jpeg_resizer.services.errors import (
    BatchValidationError,
    ContentTypeError,
    DecodeError,
    EncodeError,
    FetchError,
    FetchTimeoutError,
    NetworkError,
    ResizeError,
    SizeLimitError,
    StatusError,
    TransformError,
)
from jpeg_resizer.services.resize.fingerprint import compute_fingerprint
from jpeg_resizer.services.resize.handles import ImageHandles
from jpeg_resizer.services.resize.pipeline import ResizePipeline

__all__ = [
    "BatchValidationError",
    "ContentTypeError",
    "DecodeError",
    "EncodeError",
    "FetchError",
    "FetchTimeoutError",
    "ImageHandles",
    "NetworkError",
    "ResizeError",
    "ResizePipeline",
    "SizeLimitError",
    "StatusError",
    "TransformError",
    "compute_fingerprint",
]
