"""
Shared fixtures for thumbnail generation tests.
"""

import asyncio
import io
from typing import List, Optional, Set

import pytest
from PIL import Image

from reference_images import ReferenceImage, encode_image
from thumbnail_generation import GenerationRequest, RemoteError


def make_image_bytes(fmt: str = "PNG", color=(200, 40, 40), size=(8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


class FakeGenerationClient:
    """Stands in for the Gemini adapter.

    Call ``i`` (in dispatch order) sleeps ``delays[i]`` seconds, then returns
    ``"img<i>"`` or raises ``RemoteError`` if ``i`` is in ``fail``.
    """

    def __init__(self, delays: Optional[List[float]] = None, fail: Optional[Set[int]] = None) -> None:
        self.delays = delays or []
        self.fail = fail or set()
        self.requests: List[GenerationRequest] = []
        self.completed: List[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def generate(self, request: GenerationRequest) -> str:
        idx = len(self.requests)
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays[idx] if idx < len(self.delays) else 0)
            self.completed.append(idx)
            if idx in self.fail:
                raise RemoteError(f"variation {idx} failed")
            return f"img{idx}"
        finally:
            self.in_flight -= 1


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG", color=(10, 120, 200))


@pytest.fixture
def reference(png_bytes) -> ReferenceImage:
    return encode_image(png_bytes)


@pytest.fixture
def image_files(tmp_path):
    """Three valid headshot files on disk: png, jpeg, webp."""

    paths = []
    for name, fmt in (("a.png", "PNG"), ("b.jpg", "JPEG"), ("c.webp", "WEBP")):
        path = tmp_path / name
        path.write_bytes(make_image_bytes(fmt))
        paths.append(path)
    return paths


@pytest.fixture
def broken_file(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"this is not an image")
    return path
