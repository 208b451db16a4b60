"""Helpers converting between base64 / data-URI strings and raw image bytes."""

import base64
import binascii
import re

from errors import DecodeError
from schemas import DecodedImage

DEFAULT_MIME_TYPE = "image/png"

_DATA_URI = re.compile(r"^data:([^;,]+);base64,(.*)$", re.DOTALL)


def decode_image(image_data: str) -> DecodedImage:
    """Decode a raw base64 blob or a ``data:<mime>;base64,<payload>`` URI.

    Raw blobs are assumed to be PNG.
    """
    image_data = image_data.strip()
    match = _DATA_URI.match(image_data)
    if match:
        mime_type, payload = match.group(1), match.group(2)
    else:
        mime_type, payload = DEFAULT_MIME_TYPE, image_data

    try:
        data = base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"image_data is not valid base64: {e}") from e
    if not data:
        raise DecodeError("image_data is empty")
    return DecodedImage(data=data, mime_type=mime_type)
