"""Domain models for resize batches."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ResizeStatus(str, Enum):
    """Outcome of one source location."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class ResizeRequest:
    """A batch of source locations resized to one target size."""

    urls: list[str] = field(default_factory=list)
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class ResizeResult:
    """Per-location result; ``url`` is set only on success."""

    status: ResizeStatus
    url: str | None = None
    cached: bool = False

    @property
    def ok(self) -> bool:
        return self.status is ResizeStatus.SUCCESS

    @classmethod
    def success(cls, url: str, cached: bool) -> "ResizeResult":
        return cls(status=ResizeStatus.SUCCESS, url=url, cached=cached)

    @classmethod
    def failure(cls) -> "ResizeResult":
        return cls(status=ResizeStatus.FAILURE)

    def to_api_response(self) -> dict[str, Any]:
        """Convert to API response format."""
        return {
            "url": self.url,
            "result": self.status.value,
            "cached": self.cached,
        }
