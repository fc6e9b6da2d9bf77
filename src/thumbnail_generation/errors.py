"""Error types raised while generating thumbnails."""

from __future__ import annotations

VALIDATION_MESSAGES = {
    "missing title": "Please enter a video title.",
    "missing references": "Please upload at least one headshot image.",
    "invalid variation count": "Please choose 1, 2, or 3 thumbnails.",
    "invalid aspect ratio": "Please choose a supported aspect ratio.",
    "invalid style": "Please choose a supported thumbnail style.",
}

AGGREGATE_FAILURE_MESSAGE = "Failed to generate thumbnail(s). Please check the logs for details."


class ValidationError(ValueError):
    """User input rejected before any request is sent.

    ``reason`` is the short machine-readable cause; ``str(err)`` is the message
    shown to the user.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(VALIDATION_MESSAGES.get(reason, reason))


class RemoteError(RuntimeError):
    """The image model failed to return a thumbnail."""
