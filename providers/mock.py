"""Mock provider with deterministic output for tests and local runs."""

import logging
from typing import List, Optional, Tuple
from providers.base import ImageProvider
from schemas import DecodedImage, ResponsePart

logger = logging.getLogger(__name__)


class MockProvider(ImageProvider):
    """
    Mock image provider that never touches the network.

    By default it echoes the source image back, preceded by a short text part,
    the way Gemini interleaves commentary with image output. Pass ``parts`` to
    return a fixed response instead, or ``error`` to fail every call.
    Every call is recorded in ``calls`` as a ``(prompt, image)`` tuple.
    """

    def __init__(self, parts: Optional[List[ResponsePart]] = None, error: Optional[Exception] = None):
        self._parts = parts
        self._error = error
        self.calls: List[Tuple[str, DecodedImage]] = []

    async def generate(self, prompt: str, image: DecodedImage) -> List[ResponsePart]:
        self.calls.append((prompt, image))
        if self._error is not None:
            raise self._error
        if self._parts is not None:
            return list(self._parts)
        logger.debug("MockProvider echoing source image")
        return [
            ResponsePart(text="Here is your Family Guy style image."),
            ResponsePart(data=image.data, mime_type=image.mime_type),
        ]
