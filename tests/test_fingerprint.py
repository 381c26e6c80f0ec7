"""Tests for fingerprints and handles."""

import itertools

from jpeg_resizer.services.resize.fingerprint import compute_fingerprint
from jpeg_resizer.services.resize.handles import ImageHandles


def test_fingerprint_is_deterministic():
    first = compute_fingerprint(100, 50, "http://example/a.jpeg")
    second = compute_fingerprint(100, 50, "http://example/a.jpeg")

    assert first == second
    assert len(first) == 43


def test_fingerprint_is_url_safe():
    for i in range(200):
        fingerprint = compute_fingerprint(i, i * 3, f"http://example/{i}.jpeg")
        assert "/" not in fingerprint
        assert "+" not in fingerprint
        assert "=" not in fingerprint


def test_fingerprint_uses_height():
    assert compute_fingerprint(100, 0, "http://example/a.jpeg") != compute_fingerprint(
        100, 50, "http://example/a.jpeg"
    )


def test_fingerprint_distinguishes_digit_splits():
    # "1" + "23" and "12" + "3" must not collide
    assert compute_fingerprint(1, 23, "http://example/a.jpeg") != compute_fingerprint(
        12, 3, "http://example/a.jpeg"
    )


def test_no_collisions_across_corpus():
    widths = [0, 1, 12, 100, 640]
    heights = [0, 3, 23, 100, 480]
    urls = [f"http://example/{name}.jpeg" for name in ("a", "b", "c", "a?x=1")]

    fingerprints = {
        compute_fingerprint(w, h, url) for w, h, url in itertools.product(widths, heights, urls)
    }

    assert len(fingerprints) == len(widths) * len(heights) * len(urls)


def test_handle_round_trip():
    fingerprint = compute_fingerprint(100, 0, "http://example/a.jpeg")
    handle = ImageHandles.handle(fingerprint)

    assert handle == f"/v1/image/{fingerprint}.jpeg"
    assert ImageHandles.parse(handle) == fingerprint
    assert ImageHandles.parse(f"{fingerprint}.jpeg") == fingerprint


def test_handle_url_joins_base():
    assert ImageHandles.url("http://localhost:8080/", "abc") == "http://localhost:8080/v1/image/abc.jpeg"


def test_parse_rejects_foreign_names():
    assert ImageHandles.parse("abc.png") is None
    assert ImageHandles.parse(".jpeg") is None
    assert ImageHandles.parse("/v1/image/a/b.jpeg") is None
