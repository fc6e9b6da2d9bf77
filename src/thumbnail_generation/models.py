"""Request and outcome types shared by the orchestrator, client and session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from reference_images import ReferenceImage


@dataclass(frozen=True)
class GenerationRequest:
    """Everything one variation sends to the image model.

    The first reference is the primary subject.
    """

    prompt: str
    references: Tuple[ReferenceImage, ...]
    aspect_ratio: Optional[str] = None


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Success:
    # base64 PNG payloads, ordered by variation index
    images: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Failure:
    message: str


GenerationOutcome = Union[Loading, Success, Failure]
