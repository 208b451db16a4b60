"""Abstract base class for image generation providers."""

from abc import ABC, abstractmethod
from typing import List
from schemas import DecodedImage, ResponsePart


class ImageProvider(ABC):
    """
    Abstract interface for generative image backends.

    The converter only needs one capability from a backend: turn a prompt plus
    a source image into an ordered list of response parts. Keeping that behind
    this interface lets the tool run against Gemini in production and against
    canned responses in tests.
    """

    @abstractmethod
    async def generate(self, prompt: str, image: DecodedImage) -> List[ResponsePart]:
        """
        Generate content from a prompt and a source image.

        Args:
            prompt: Natural-language instructions sent with the image
            image: Decoded source image and its MIME type

        Returns:
            Content parts in the order the backend produced them

        Raises:
            Exception: Any transport or API failure, unwrapped
        """
        pass
