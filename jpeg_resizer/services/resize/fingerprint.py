"""Cache key derivation for resize requests."""

import base64
import hashlib


def compute_fingerprint(width: int, height: int, location: str) -> str:
    """
    Derive the cache key for resizing ``location`` to ``width`` x ``height``.

    SHA-256 over ``"{width}:{height}:{location}"``, encoded as URL-safe
    base64 without padding (43 characters) so it can sit in a URL path.

    Args:
        width: Target width (0 = auto)
        height: Target height (0 = auto)
        location: Source image URL

    Returns:
        Fingerprint string
    """
    # Both dimensions are digits only, so the first two separators are unambiguous
    payload = f"{int(width)}:{int(height)}:{location}".encode("utf-8")
    digest = hashlib.sha256(payload).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
