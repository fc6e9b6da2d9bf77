"""Fan out one generation request per variation and join the results."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol, Sequence

from reference_images import ReferenceImage

from .errors import AGGREGATE_FAILURE_MESSAGE
from .models import Failure, GenerationOutcome, GenerationRequest, Loading, Success
from .options import GenerationParameters
from .prompt import build_prompt
from .session import SessionState

log = logging.getLogger(__name__)


class GenerationClient(Protocol):
    async def generate(self, request: GenerationRequest) -> str: ...


class GenerationOrchestrator:
    def __init__(self, client: GenerationClient, session: Optional[SessionState] = None) -> None:
        self.client = client
        self.session = session if session is not None else SessionState()

    def build_requests(
        self,
        params: GenerationParameters,
        references: Sequence[ReferenceImage],
    ) -> list[GenerationRequest]:
        refs = tuple(references)
        count = params.variation_count
        return [
            GenerationRequest(
                prompt=build_prompt(params, i, count),
                references=refs,
                aspect_ratio=params.aspect_ratio,
            )
            for i in range(count)
        ]

    async def generate(
        self,
        params: GenerationParameters,
        references: Optional[Sequence[ReferenceImage]] = None,
    ) -> GenerationOutcome:
        """Generate ``params.variation_count`` thumbnails concurrently.

        Args:
            params: Title, aspect ratio, style and variation count.
            references: Reference photos to send with every variation. Defaults
                to a snapshot of the session's current list.

        Returns:
            ``Success`` with images in variation order, or ``Failure`` if any
            variation failed. The same value is published to the session.

        Raises:
            ValidationError: bad input; nothing is dispatched and the session
                outcome is left as it was.
        """

        refs = tuple(self.session.references if references is None else references)
        params.validate(reference_count=len(refs))

        # Stale images are dropped before the first request goes out
        self.session.set_outcome(Loading())

        requests = self.build_requests(params, refs)
        log.info(
            "Generating %d thumbnail(s) for %r (%s, %s) with %d reference(s)",
            len(requests),
            params.title,
            params.aspect_ratio,
            params.style,
            len(refs),
        )

        async def _dispatch(request: GenerationRequest) -> str:
            return await self.client.generate(request)

        results = await asyncio.gather(
            *(_dispatch(request) for request in requests),
            return_exceptions=True,
        )

        failures = [(i, r) for i, r in enumerate(results) if isinstance(r, BaseException)]
        if failures:
            for i, exc in failures:
                log.error("Variation %d of %d failed: %s", i + 1, len(requests), exc)
            outcome: GenerationOutcome = Failure(AGGREGATE_FAILURE_MESSAGE)
        else:
            outcome = Success(tuple(results))
            log.info("Generated %d thumbnail(s)", len(results))

        self.session.set_outcome(outcome)
        return outcome
