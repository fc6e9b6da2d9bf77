"""In-memory state for one thumbnail session: reference photos and last outcome."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from reference_images import ReferenceImage, encode_batch
from reference_images.encoder import ImageSource

from .models import Failure, GenerationOutcome, Loading, Success

log = logging.getLogger(__name__)

Listener = Callable[["SessionState"], None]


class SessionState:
    """Owns the ordered reference list and the current generation outcome.

    Every mutation is synchronous and immediately visible to subscribers.
    """

    def __init__(self) -> None:
        self._references: List[ReferenceImage] = []
        self._outcome: Optional[GenerationOutcome] = None
        self._listeners: List[Listener] = []

    # -- references -------------------------------------------------------

    @property
    def references(self) -> Tuple[ReferenceImage, ...]:
        return tuple(self._references)

    def add_references(self, batch: Iterable[ImageSource]) -> List[ReferenceImage]:
        """Encode and append a batch of uploads.

        Nothing is appended if any file fails to decode; the ``DecodeError``
        propagates and the existing list is untouched.
        """

        encoded = encode_batch(batch)
        self._references.extend(encoded)
        log.info("Added %d reference image(s); %d held", len(encoded), len(self._references))
        self._notify()
        return encoded

    def remove_reference(self, index: int) -> ReferenceImage:
        if not 0 <= index < len(self._references):
            raise IndexError(f"reference index {index} out of range (0..{len(self._references) - 1})")
        removed = self._references.pop(index)
        self._notify()
        return removed

    def clear_references(self) -> None:
        self._references.clear()
        self._notify()

    # -- outcome ----------------------------------------------------------

    @property
    def outcome(self) -> Optional[GenerationOutcome]:
        return self._outcome

    def set_outcome(self, outcome: GenerationOutcome) -> None:
        self._outcome = outcome
        self._notify()

    @property
    def is_loading(self) -> bool:
        return isinstance(self._outcome, Loading)

    @property
    def images(self) -> Tuple[str, ...]:
        if isinstance(self._outcome, Success):
            return self._outcome.images
        return ()

    @property
    def error(self) -> Optional[str]:
        if isinstance(self._outcome, Failure):
            return self._outcome.message
        return None

    # -- observers --------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
