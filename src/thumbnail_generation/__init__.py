"""Package for thumbnail generation components."""

from .errors import RemoteError, ValidationError
from .gemini_client import DEFAULT_MODEL, GeminiThumbnailClient
from .models import Failure, GenerationOutcome, GenerationRequest, Loading, Success
from .options import ASPECT_RATIOS, STYLES, VARIATION_COUNTS, GenerationParameters
from .orchestrator import GenerationOrchestrator
from .prompt import build_prompt
from .session import SessionState

__all__ = [
    "ASPECT_RATIOS",
    "DEFAULT_MODEL",
    "STYLES",
    "VARIATION_COUNTS",
    "Failure",
    "GeminiThumbnailClient",
    "GenerationOrchestrator",
    "GenerationOutcome",
    "GenerationParameters",
    "GenerationRequest",
    "Loading",
    "RemoteError",
    "SessionState",
    "Success",
    "ValidationError",
    "build_prompt",
]
