"""Family Guy Image Converter MCP Server.

This MCP server exposes a single tool, convertToFamilyGuy, that redraws a
base64-encoded image in the Family Guy cartoon style using a generative image
model. Every HTTP request must carry the shared bearer token.
"""

import base64
import logging
import sys
from typing import Any, Dict, List, Mapping, Optional

import uvicorn
from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import ImageContent, ToolAnnotations
from pydantic import PrivateAttr, ValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from auth import create_auth_middleware
from configuration import Configuration, load_settings
from errors import (
    ConverterError,
    InvalidInputError,
    NoImageGeneratedError,
    UpstreamFailure,
    to_tool_error,
)
from image_codec import decode_image
from providers import ImageProvider, create_provider
from schemas import ConvertRequest, GeneratedImage, ResponsePart

# Setup logging; the configured LOG_LEVEL is applied once settings are loaded
logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO,
    stream=sys.stdout,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

SERVER_NAME = "Family Guy Image Converter"
SERVER_VERSION = "0.0.1"
TOOL_NAME = "convertToFamilyGuy"

PROMPT_TEMPLATE = """Convert this image to Family Guy animated character style{character}.

Family Guy style requirements:
- Simple, bold line art with thick black outlines
- Flat, solid colors with minimal shading
- Exaggerated facial features and proportions
- Large, round eyes with small pupils
- Simple geometric shapes for body parts
- The distinctive Family Guy cartoon aesthetic
- Should look like it belongs in the Family Guy TV show
- High quality, detailed, professional cartoon illustration
- Maintain the same pose and composition as the original image

Style: Family Guy animated character, cartoon illustration, thick outlines, flat colors, exaggerated features"""


def build_prompt(character_name: Optional[str] = None) -> str:
    """Fill the fixed style prompt, drawing the subject as ``character_name`` when given."""
    character = f" as {character_name}" if character_name else ""
    return PROMPT_TEMPLATE.format(character=character)


def extract_first_image(parts: List[ResponsePart]) -> GeneratedImage:
    """Return the first part carrying image data; text parts are skipped."""
    for part in parts:
        if part.is_image:
            return GeneratedImage(data=part.data, mime_type=part.mime_type)
    raise NoImageGeneratedError("No image was generated")


def validate_request(arguments: Mapping[str, Any]) -> ConvertRequest:
    try:
        return ConvertRequest.model_validate(dict(arguments))
    except ValidationError as e:
        raise InvalidInputError(
            (".".join(str(loc) for loc in err["loc"]), err["msg"]) for err in e.errors()
        ) from e


async def convert_to_family_guy(arguments: Mapping[str, Any], provider: ImageProvider) -> List[GeneratedImage]:
    """
    Convert an image to Family Guy style.

    One generation call is made per requested image, one after another, and
    each call contributes the first image part of its response.

    Args:
        arguments: Raw tool arguments (image_data, characterName, numberOfImages)
        provider: Backend that performs the generation call

    Returns:
        Generated images, one per requested image

    Raises:
        InvalidInputError: Arguments failed validation; no call is made
        DecodeError: image_data is not valid base64; no call is made
        UpstreamFailure: The generation call raised
        NoImageGeneratedError: A response contained no image part
    """
    request = validate_request(arguments)
    image = decode_image(request.image_data)
    prompt = build_prompt(request.character_name)

    logger.info(
        f"Converting {image.mime_type} image ({len(image.data)} bytes), "
        f"character={request.character_name}, images={request.number_of_images}"
    )

    results: List[GeneratedImage] = []
    for _ in range(request.number_of_images):
        try:
            parts = await provider.generate(prompt, image)
        except ConverterError:
            raise
        except Exception as e:
            raise UpstreamFailure(str(e) or type(e).__name__) from e
        results.append(extract_first_image(parts))

    logger.debug(f"Generated {len(results)} image(s)")
    return results


class ConvertToFamilyGuyTool(Tool):
    """
    The convertToFamilyGuy tool bound to an image provider.

    Raw call arguments go straight to ConvertRequest, so every argument
    problem is reported the same way, listing each failing field.
    """

    _provider: ImageProvider = PrivateAttr()

    @classmethod
    def bind(cls, provider: ImageProvider) -> "ConvertToFamilyGuyTool":
        tool = cls(
            name=TOOL_NAME,
            description=(
                "Convert an image to Family Guy character style using AI image generation. "
                "Takes a base64-encoded image and returns a Family Guy style version."
            ),
            parameters=ConvertRequest.model_json_schema(by_alias=True),
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=False),
        )
        tool._provider = provider
        return tool

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        logger.info(
            f"{TOOL_NAME} called: characterName={arguments.get('characterName')}, "
            f"numberOfImages={arguments.get('numberOfImages')}"
        )
        try:
            images = await convert_to_family_guy(arguments, self._provider)
        except Exception as e:
            logger.exception(f"Error converting to Family Guy style: {e}")
            raise to_tool_error(e) from e
        return ToolResult(
            content=[
                ImageContent(type="image", data=base64.b64encode(img.data).decode("ascii"), mimeType=img.mime_type)
                for img in images
            ]
        )


def create_server(provider: ImageProvider) -> FastMCP:
    """Build the FastMCP server with the convertToFamilyGuy tool bound to ``provider``."""
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)
    mcp.add_tool(ConvertToFamilyGuyTool.bind(provider))
    return mcp


def create_app(settings: Configuration, provider: Optional[ImageProvider] = None):
    """Build the HTTP app serving the MCP endpoint behind the bearer token gate."""
    mcp = create_server(provider or create_provider(settings))
    transport = "sse" if settings.mcp_transport == "sse" else "http"
    app = mcp.http_app(path=settings.mcp_path, transport=transport)
    app.add_middleware(BaseHTTPMiddleware, dispatch=create_auth_middleware(settings.mcp_secret_token))
    return app


def run_server():
    """Run the MCP server with configured transport."""
    try:
        settings = load_settings()
    except ConverterError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    app = create_app(settings)

    logger.info(
        f"Starting {SERVER_NAME} on {settings.host}:{settings.port}{settings.mcp_path} "
        f"with transport={settings.mcp_transport}, provider={settings.image_provider}"
    )
    logger.info(f"Registered tools: {TOOL_NAME}")

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run_server()
