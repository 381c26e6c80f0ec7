"""Error taxonomy for the resize pipeline.

Fetch and transform errors are terminal for a single source location and are
turned into failure results by the pipeline. ``BatchValidationError`` is the
only error that rejects a whole batch.
"""


class ResizeError(Exception):
    """Base class for resize pipeline errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BatchValidationError(ResizeError):
    """Raised when a batch request is malformed (e.g. no source locations)."""

    def __init__(self, message: str, field: str = "urls"):
        self.field = field
        super().__init__(message)


class FetchError(ResizeError):
    """Raised when a source image cannot be retrieved."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)


class NetworkError(FetchError):
    """Connection or transport failure."""


class StatusError(FetchError):
    """Source answered with a non-success status code."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message, url)


class ContentTypeError(FetchError):
    """Source declared a content type other than JPEG."""

    def __init__(self, message: str, url: str | None = None, content_type: str | None = None):
        self.content_type = content_type
        super().__init__(message, url)


class SizeLimitError(FetchError):
    """Source payload exceeds the fetch size ceiling."""


class FetchTimeoutError(FetchError):
    """Source did not deliver its payload within the fetch timeout."""


class TransformError(ResizeError):
    """Raised when decoding, resampling or encoding fails."""


class DecodeError(TransformError):
    """Input bytes are not a decodable JPEG."""


class EncodeError(TransformError):
    """The resized image could not be encoded as JPEG."""
