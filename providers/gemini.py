"""Google Gemini provider using the google-genai SDK."""

import base64
import logging
from typing import List, Optional

from google import genai
from google.genai import types

from providers.base import ImageProvider
from schemas import DecodedImage, ResponsePart

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash-preview-image-generation"


class GeminiProvider(ImageProvider):
    """Calls Gemini once per request, asking for both text and image output."""

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, client: Optional[genai.Client] = None):
        self._client = client or genai.Client(api_key=api_key)
        self.model = model

    async def generate(self, prompt: str, image: DecodedImage) -> List[ResponsePart]:
        logger.debug(f"Calling {self.model} with {image.mime_type} image of {len(image.data)} bytes")
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=[
                types.Part.from_text(text=prompt),
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
            ],
            config=types.GenerateContentConfig(
                response_modalities=[types.Modality.TEXT, types.Modality.IMAGE],
            ),
        )
        return self._response_parts(response)

    @staticmethod
    def _response_parts(response) -> List[ResponsePart]:
        """Flatten the first candidate's content into ResponseParts."""
        if not response or not response.candidates:
            return []
        content = response.candidates[0].content
        if content is None or not content.parts:
            return []

        parts: List[ResponsePart] = []
        for part in content.parts:
            inline = part.inline_data
            if inline is not None:
                data = inline.data
                if isinstance(data, str):
                    data = base64.b64decode(data)
                parts.append(ResponsePart(data=data, mime_type=inline.mime_type))
            elif part.text is not None:
                parts.append(ResponsePart(text=part.text))
        return parts
