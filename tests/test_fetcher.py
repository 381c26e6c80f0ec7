"""Tests for source image retrieval."""

import asyncio

import httpx
import pytest

from jpeg_resizer.services.errors import (
    ContentTypeError,
    FetchError,
    FetchTimeoutError,
    NetworkError,
    SizeLimitError,
    StatusError,
)
from jpeg_resizer.services.fetcher import Fetcher

from .conftest import make_jpeg

URL = "http://example/a.jpeg"


def fetch(fetcher: Fetcher, url: str = URL) -> bytes:
    return asyncio.run(fetcher.fetch(url))


def test_fetch_returns_body(server):
    body = make_jpeg()
    server.add(URL, body)

    assert fetch(Fetcher(client=server.client())) == body


def test_content_type_parameters_and_case_are_ignored(server):
    server.add(URL, content_type="IMAGE/JPEG; charset=binary")

    assert fetch(Fetcher(client=server.client()))


def test_unreachable_host_is_network_error(server):
    with pytest.raises(NetworkError) as exc_info:
        fetch(Fetcher(client=server.client()), "http://nowhere/a.jpeg")

    assert exc_info.value.url == "http://nowhere/a.jpeg"


def test_non_200_is_status_error(server):
    server.add(URL, b"missing", status=404)

    with pytest.raises(StatusError) as exc_info:
        fetch(Fetcher(client=server.client()))

    assert exc_info.value.status_code == 404


def test_wrong_content_type(server):
    server.add(URL, b"<html></html>", content_type="text/html")

    with pytest.raises(ContentTypeError) as exc_info:
        fetch(Fetcher(client=server.client()))

    assert exc_info.value.content_type == "text/html"


def test_declared_size_over_limit(server):
    server.add(URL, make_jpeg())

    with pytest.raises(SizeLimitError):
        fetch(Fetcher(max_bytes=100, client=server.client()))


def test_explicit_zero_limit_is_honored(server):
    server.add(URL, b"\xff\xd8")

    with pytest.raises(SizeLimitError):
        fetch(Fetcher(max_bytes=0, client=server.client()))


def test_streamed_size_over_limit():
    async def chunks():
        for _ in range(10):
            yield b"x" * 64

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"content-type": "image/jpeg"}, content=chunks())

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    with pytest.raises(SizeLimitError):
        fetch(Fetcher(max_bytes=200, client=client))


def test_slow_source_times_out(server):
    server.add(URL, delay=5.0)

    with pytest.raises(FetchTimeoutError):
        fetch(Fetcher(timeout_seconds=0.05, client=server.client()))


def test_all_fetch_errors_share_a_base():
    for error in (NetworkError, StatusError, ContentTypeError, SizeLimitError, FetchTimeoutError):
        assert issubclass(error, FetchError)


def test_injected_client_is_not_closed(server):
    client = server.client()
    asyncio.run(Fetcher(client=client).aclose())

    assert not client.is_closed
