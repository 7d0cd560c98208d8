import base64
import binascii
import logging
from io import BytesIO
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from labelscan.domain.entities.image import RawImage
from labelscan.domain.errors import ImageDecodeError


logger = logging.getLogger(__name__)


def _to_bytes(data: Union[bytes, str]) -> bytes:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)

    payload = data.strip()
    # data:image/png;base64,....
    if "base64," in payload:
        payload = payload.split("base64,", 1)[1]

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image data: {e}") from e


def decode_image(data: Union[bytes, str]) -> RawImage:
    """Decode an encoded bitmap (raw bytes, base64 or data URL) into RGBA pixels.

    Decoding completes before any pixel processing starts; the returned
    RawImage owns its buffer and is read-only.
    """
    raw = _to_bytes(data)
    if not raw:
        raise ImageDecodeError("Empty image payload")

    try:
        with Image.open(BytesIO(raw)) as image:
            image.load()
            rgba = image.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e

    pixels = np.array(rgba, dtype=np.uint8)
    if pixels.ndim != 3 or pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise ImageDecodeError("Decoded image has no pixels")

    logger.debug("Decoded %dx%d image", pixels.shape[1], pixels.shape[0])
    return RawImage.from_array(pixels)


def encode_png(image: RawImage) -> bytes:
    buffer = BytesIO()
    Image.fromarray(image.copy_pixels()).save(buffer, format="PNG")
    return buffer.getvalue()
