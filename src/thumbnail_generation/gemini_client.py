"""Helpers for calling Gemini's image model to render one thumbnail per request."""

from __future__ import annotations

import base64
import io
import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image

try:
    from google import genai
    from google.genai import types
except ImportError as exc:  # pragma: no cover - handled at runtime
    raise ImportError(
        "google-genai is required for thumbnail generation. Install with `pip install google-genai`."
    ) from exc

from .errors import RemoteError
from .models import GenerationRequest

log = logging.getLogger(__name__)

DEFAULT_MODEL = os.environ.get("THUMBSTUDIO_MODEL", "gemini-2.5-flash-image")
OUTPUT_MEDIA_TYPE = "image/png"


def load_env_key() -> None:
    """Best-effort load GEMINI_API_KEY/GOOGLE_API_KEY from .env files.

    Checks the project root, cwd and HOME for a ``.env``. Values already in the
    environment are never overwritten.
    """

    candidates = [
        Path(__file__).resolve().parents[2] / ".env",
        Path.cwd() / ".env",
        Path.home() / ".env",
    ]

    for path in candidates:
        if not path.exists():
            continue
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            if key in os.environ:
                continue
            os.environ[key] = value.strip().strip('"').strip("'")


def _inline_parts(response) -> List[Tuple[bytes, Optional[str]]]:
    """Collect (data, mime_type) for inline image parts of a response."""

    found: List[Tuple[bytes, Optional[str]]] = []
    for cand in getattr(response, "candidates", None) or []:
        content = getattr(cand, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and getattr(inline, "data", None):
                found.append((inline.data, getattr(inline, "mime_type", None)))

    if not found:
        for part in getattr(response, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and getattr(inline, "data", None):
                found.append((inline.data, getattr(inline, "mime_type", None)))
    return found


def _to_png(data: bytes, mime_type: Optional[str]) -> bytes:
    if mime_type == OUTPUT_MEDIA_TYPE:
        return data
    # Non-PNG inline data is re-encoded so callers can always treat output as PNG
    try:
        with Image.open(io.BytesIO(data)) as img:
            buf = io.BytesIO()
            img.save(buf, format="PNG")
            return buf.getvalue()
    except OSError as exc:
        raise RemoteError(f"Thumbnail model returned unreadable image data ({mime_type}).") from exc


class GeminiThumbnailClient:
    """Send a prompt plus reference photos to Gemini and return one base64 PNG."""

    def __init__(
        self,
        *,
        model: str | None = None,
        api_key: str | None = None,
        client: "genai.Client | None" = None,
    ) -> None:
        self.model = model or DEFAULT_MODEL
        if client is None:
            load_env_key()
            api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
            if not api_key:
                raise RuntimeError("Set GEMINI_API_KEY (or GOOGLE_API_KEY) before generating thumbnails.")
            client = genai.Client(api_key=api_key)
        self._client = client

    def _config(self, aspect_ratio: str | None) -> types.GenerateContentConfig:
        if aspect_ratio:
            return types.GenerateContentConfig(
                response_modalities=["IMAGE"],
                image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
            )
        return types.GenerateContentConfig(response_modalities=["IMAGE"])

    async def generate(self, request: GenerationRequest) -> str:
        """Render one thumbnail.

        Returns:
            The generated image as base64-encoded PNG.

        Raises:
            RemoteError: the call failed, was blocked, or returned no image.
        """

        contents: list = [request.prompt]
        contents.extend(
            types.Part.from_bytes(data=ref.data, mime_type=ref.media_type) for ref in request.references
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=self._config(request.aspect_ratio),
            )
        except Exception as exc:  # noqa: BLE001 - SDK errors are opaque to callers
            raise RemoteError(f"Thumbnail request failed: {exc}") from exc

        feedback = getattr(response, "prompt_feedback", None)
        reason = getattr(feedback, "block_reason", None) if feedback else None
        if reason:
            raise RemoteError(f"Thumbnail request was blocked by the model: {reason}")

        images = _inline_parts(response)
        if not images:
            cand_count = len(getattr(response, "candidates", None) or [])
            raise RemoteError(
                f"Thumbnail model returned no image content. "
                f"resp_id={getattr(response, 'response_id', None)} candidates={cand_count}"
            )

        data, mime_type = images[0]
        log.debug("Received %d bytes (%s) from %s", len(data), mime_type, self.model)
        return base64.b64encode(_to_png(data, mime_type)).decode("ascii")


__all__ = ["DEFAULT_MODEL", "GeminiThumbnailClient", "load_env_key"]
