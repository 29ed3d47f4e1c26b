from __future__ import annotations

import base64
import io
import logging
from typing import Iterable, Optional

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

JPEG_QUALITY = 70
JPEG_MIME_TYPE = "image/jpeg"


def encode_jpeg(image_bytes: bytes, quality: int = JPEG_QUALITY) -> Optional[bytes]:
    """Re-encode an image as JPEG. Returns None when the bytes can't be decoded."""
    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            buffer = io.BytesIO()
            image.convert("RGB").save(buffer, format="JPEG", quality=quality)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as error:
        logger.warning("Skipping image that could not be encoded as JPEG: %s", error)
        return None
    return buffer.getvalue()


def encode_jpeg_base64(image_bytes: bytes, quality: int = JPEG_QUALITY) -> Optional[str]:
    data = encode_jpeg(image_bytes, quality=quality)
    if data is None:
        return None
    return base64.b64encode(data).decode("ascii")


def encode_images(
    images: Iterable[bytes],
    limit: int,
    quality: int = JPEG_QUALITY,
) -> list[str]:
    """
    Encode at most `limit` images, in order.

    Images past the limit are ignored even if earlier ones fail to encode.
    """
    encoded: list[str] = []
    for index, image_bytes in enumerate(images):
        if index >= limit:
            break
        data = encode_jpeg_base64(image_bytes, quality=quality)
        if data is not None:
            encoded.append(data)
    return encoded
