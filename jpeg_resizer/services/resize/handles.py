"""Handle patterns and builders for cached images."""


class ImageHandles:
    """Centralized mapping between fingerprints and dereferenceable handles."""

    PREFIX = "/v1/image/"
    SUFFIX = ".jpeg"

    @classmethod
    def handle(cls, fingerprint: str) -> str:
        """Path-like handle for a fingerprint."""
        return f"{cls.PREFIX}{fingerprint}{cls.SUFFIX}"

    @classmethod
    def url(cls, base_url: str, fingerprint: str) -> str:
        """Absolute URL clients use to fetch the cached image."""
        return f"{base_url.rstrip('/')}{cls.handle(fingerprint)}"

    @classmethod
    def parse(cls, handle: str) -> str | None:
        """
        Recover the fingerprint from a handle.

        Accepts the full handle or just its last segment
        (``<fingerprint>.jpeg``). Returns None if it does not match.
        """
        if handle.startswith(cls.PREFIX):
            handle = handle[len(cls.PREFIX):]
        if not handle.endswith(cls.SUFFIX):
            return None
        fingerprint = handle[: -len(cls.SUFFIX)]
        if not fingerprint or "/" in fingerprint:
            return None
        return fingerprint
