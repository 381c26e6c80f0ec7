"""JPEG decoding, resampling and re-encoding.

Features:
- Strict JPEG decoding (other formats are rejected; multi-picture
  JPEGs decode to their first frame)
- Lanczos resampling to an exact size, or one side auto-computed from the
  source aspect ratio
- Re-encoding at a fixed JPEG quality
"""

import logging
from io import BytesIO

from PIL import Image

from jpeg_resizer.config import get_settings
from jpeg_resizer.services.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

RESAMPLING_FILTERS = {
    "lanczos": Image.Resampling.LANCZOS,
}

# Pillow reports JPEGs carrying a multi-picture (MPF) segment as MPO
JPEG_FORMATS = ("JPEG", "MPO")

# Modes the JPEG encoder accepts as-is
JPEG_MODES = ("RGB", "L", "CMYK")


class Transformer:
    """
    Resizes JPEG images.

    CPU-bound and synchronous; callers on the event loop should run
    ``transform`` in a worker thread.
    """

    def __init__(
        self,
        quality: int | None = None,
        resize_filter: str | None = None,
    ):
        settings = get_settings()
        self._quality = settings.jpeg_quality if quality is None else quality
        filter_name = resize_filter or settings.resize_filter
        if filter_name not in RESAMPLING_FILTERS:
            raise ValueError(f"Unknown resize filter: {filter_name}")
        self._filter = RESAMPLING_FILTERS[filter_name]

    @staticmethod
    def target_size(
        source_width: int,
        source_height: int,
        width: int,
        height: int,
    ) -> tuple[int, int]:
        """
        Compute the output size for a resize.

        Args:
            source_width: Decoded image width
            source_height: Decoded image height
            width: Requested width (0 = auto)
            height: Requested height (0 = auto)

        Returns:
            Tuple of (width, height)
        """
        if width == 0 and height == 0:
            return source_width, source_height
        if width == 0:
            width = max(1, round(height * source_width / source_height))
        elif height == 0:
            height = max(1, round(width * source_height / source_width))
        return width, height

    def transform(self, data: bytes, width: int, height: int) -> bytes:
        """
        Decode JPEG bytes, resize and re-encode.

        Args:
            data: Source JPEG bytes
            width: Target width (0 = preserve aspect ratio from height)
            height: Target height (0 = preserve aspect ratio from width)

        Returns:
            Encoded JPEG bytes

        Raises:
            DecodeError: If the input is not a valid JPEG
            EncodeError: If the resized image cannot be encoded
        """
        try:
            with Image.open(BytesIO(data)) as img:
                if img.format not in JPEG_FORMATS:
                    raise DecodeError(f"Unsupported image format: {img.format}")
                img.load()
                source = img.copy()
        except DecodeError:
            raise
        except Exception as e:
            raise DecodeError(f"Failed to decode JPEG: {e}") from e

        size = self.target_size(source.width, source.height, width, height)
        if size != source.size:
            resized = source.resize(size, self._filter)
        else:
            resized = source

        if resized.mode not in JPEG_MODES:
            resized = resized.convert("RGB")

        output = BytesIO()
        try:
            resized.save(output, format="JPEG", quality=self._quality)
        except Exception as e:
            raise EncodeError(f"Failed to encode resized image: {e}") from e

        encoded = output.getvalue()
        logger.debug(
            f"Resized {source.width}x{source.height} -> {size[0]}x{size[1]} "
            f"({len(data) / 1024:.1f}KB -> {len(encoded) / 1024:.1f}KB)"
        )
        return encoded
