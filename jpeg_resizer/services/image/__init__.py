"""Image processing service module."""

from jpeg_resizer.services.image.cache import BoundedCache
from jpeg_resizer.services.image.transformer import Transformer

__all__ = [
    "BoundedCache",
    "Transformer",
]
