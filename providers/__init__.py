"""Provider implementations for image generation backends."""

from providers.base import ImageProvider
from providers.gemini import GeminiProvider
from providers.mock import MockProvider


def create_provider(settings) -> ImageProvider:
    """Build the provider selected by IMAGE_PROVIDER."""
    if settings.image_provider == "mock":
        return MockProvider()
    return GeminiProvider(api_key=settings.gemini_api_key, model=settings.gemini_model)


__all__ = ["ImageProvider", "GeminiProvider", "MockProvider", "create_provider"]
