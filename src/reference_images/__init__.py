"""Package for reference image encoding."""

from .encoder import ACCEPTED_MEDIA_TYPES, DecodeError, ReferenceImage, encode_batch, encode_image

__all__ = ["ACCEPTED_MEDIA_TYPES", "DecodeError", "ReferenceImage", "encode_batch", "encode_image"]
