"""Turn uploaded image files into base64 payloads the image model accepts."""

from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, List, Union

from PIL import Image, UnidentifiedImageError

log = logging.getLogger(__name__)

ACCEPTED_MEDIA_TYPES = ("image/png", "image/jpeg", "image/webp")

ImageSource = Union[BinaryIO, Path, str, bytes]

# Multi-picture JPEGs from phone cameras are still plain JPEG on the wire
FORMAT_ALIASES = {"MPO": "JPEG"}


class DecodeError(ValueError):
    """Raised when an uploaded file cannot be read or its image type is unknown."""

    user_message = "There was an error processing the uploaded images."


@dataclass(frozen=True)
class ReferenceImage:
    """One encoded reference photo. ``encoded_payload`` is base64 text."""

    encoded_payload: str
    media_type: str

    @property
    def data(self) -> bytes:
        return base64.b64decode(self.encoded_payload)

    @property
    def data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.encoded_payload}"


def _source_name(source: ImageSource) -> str:
    if isinstance(source, (str, Path)):
        return Path(source).name
    if isinstance(source, bytes):
        return "<bytes>"
    return Path(getattr(source, "name", "<stream>")).name


def _read_bytes(source: ImageSource) -> bytes:
    try:
        if isinstance(source, bytes):
            return source
        if isinstance(source, (str, Path)):
            return Path(source).read_bytes()
        data = source.read()
    except (OSError, ValueError) as exc:
        raise DecodeError(f"Could not read file: {_source_name(source)}") from exc
    if not isinstance(data, (bytes, bytearray)):
        raise DecodeError(f"File was not opened in binary mode: {_source_name(source)}")
    return bytes(data)


def _detect_media_type(data: bytes, name: str) -> str:
    """Sniff the image header with Pillow and map the format to a MIME type."""

    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as exc:
        raise DecodeError(f"Could not parse mime type for file: {name}") from exc

    media_type = Image.MIME.get(FORMAT_ALIASES.get(fmt, fmt) or "")
    if not media_type or "/" not in media_type:
        raise DecodeError(f"Could not parse mime type for file: {name}")
    return media_type


def encode_image(source: ImageSource) -> ReferenceImage:
    """Read one uploaded file and return it as a ``ReferenceImage``.

    Args:
        source: An open binary file handle, a filesystem path, or raw bytes.

    Raises:
        DecodeError: the content is unreadable, empty, or not a recognised image.
    """

    name = _source_name(source)
    data = _read_bytes(source)
    if not data:
        raise DecodeError(f"File is empty: {name}")

    media_type = _detect_media_type(data, name)
    if media_type not in ACCEPTED_MEDIA_TYPES:
        log.warning("Reference %s has uncommon media type %s", name, media_type)

    return ReferenceImage(
        encoded_payload=base64.b64encode(data).decode("ascii"),
        media_type=media_type,
    )


def encode_batch(sources: Iterable[ImageSource]) -> List[ReferenceImage]:
    """Encode every file, failing the whole batch if any single file fails."""

    encoded: List[ReferenceImage] = []
    for source in sources:
        encoded.append(encode_image(source))
    return encoded


__all__ = ["ACCEPTED_MEDIA_TYPES", "DecodeError", "ReferenceImage", "encode_batch", "encode_image"]
