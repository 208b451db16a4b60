"""Data models for the Family Guy image converter MCP server."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, StrictInt


class ConvertRequest(BaseModel):
    """Arguments of the convertToFamilyGuy tool."""

    model_config = ConfigDict(populate_by_name=True)

    image_data: str = Field(..., description="Base64-encoded image data, optionally as a data URI")
    character_name: Optional[str] = Field(
        None, alias="characterName", description="Family Guy character to draw the subject as"
    )
    number_of_images: StrictInt = Field(
        1, alias="numberOfImages", ge=1, le=4, description="Number of images to generate (1-4)"
    )


class DecodedImage(BaseModel):
    """Raw image bytes recovered from the request."""

    data: bytes = Field(..., description="Decoded image bytes")
    mime_type: str = Field(default="image/png", description="MIME type of the image")


class ResponsePart(BaseModel):
    """One content part returned by the image generation API."""

    text: Optional[str] = Field(None, description="Text payload, for text parts")
    data: Optional[bytes] = Field(None, description="Inline bytes, for data parts")
    mime_type: Optional[str] = Field(None, description="Declared MIME type of the inline data")

    @property
    def is_image(self) -> bool:
        return bool(self.data) and (self.mime_type or "").startswith("image/")


class GeneratedImage(BaseModel):
    """Image produced by the generation API."""

    data: bytes = Field(..., description="Generated image bytes")
    mime_type: str = Field(default="image/png", description="MIME type of the generated image")
