"""Shared fixtures: generated JPEGs and a fake image server."""

import asyncio
from collections import Counter
from dataclasses import dataclass
from io import BytesIO

import httpx
import pytest
from PIL import Image

from jpeg_resizer.services.fetcher import Fetcher
from jpeg_resizer.services.image.cache import BoundedCache
from jpeg_resizer.services.image.transformer import Transformer
from jpeg_resizer.services.resize.pipeline import ResizePipeline

BASE_URL = "http://testserver"


def make_jpeg(width: int = 400, height: int = 200, color=(200, 30, 30)) -> bytes:
    """Encode a solid-color JPEG."""
    output = BytesIO()
    Image.new("RGB", (width, height), color).save(output, format="JPEG")
    return output.getvalue()


def image_size(data: bytes) -> tuple[int, int]:
    with Image.open(BytesIO(data)) as img:
        assert img.format == "JPEG"
        return img.size


@dataclass
class Route:
    body: bytes
    status: int = 200
    content_type: str = "image/jpeg"
    delay: float = 0.0
    gate: asyncio.Event | None = None


class FakeImageServer:
    """httpx MockTransport handler serving registered URLs.

    Unknown URLs fail like an unreachable host.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Route] = {}
        self.calls: Counter[str] = Counter()

    def add(self, url: str, body: bytes | None = None, **kwargs) -> str:
        self.routes[url] = Route(body=make_jpeg() if body is None else body, **kwargs)
        return url

    async def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls[url] += 1

        route = self.routes.get(url)
        if route is None:
            raise httpx.ConnectError("Connection refused", request=request)
        if route.gate is not None:
            await route.gate.wait()
        if route.delay:
            await asyncio.sleep(route.delay)

        return httpx.Response(
            route.status,
            headers={"content-type": route.content_type},
            content=route.body,
        )

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def server() -> FakeImageServer:
    return FakeImageServer()


@pytest.fixture
def make_pipeline(server):
    """Factory for pipelines wired to the fake server."""

    def _make(capacity: int = 16, timeout_seconds: float = 1.0, max_bytes: int | None = None):
        fetcher = Fetcher(
            timeout_seconds=timeout_seconds,
            max_bytes=max_bytes,
            client=server.client(),
        )
        return ResizePipeline(
            cache=BoundedCache(capacity),
            fetcher=fetcher,
            transformer=Transformer(),
            public_base_url=BASE_URL,
        )

    return _make
