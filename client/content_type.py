from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger("LineBotHttp.ContentType")

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def detect_content_type(data: bytes) -> str:
    """
    Mime type of an image payload, read from its header bytes.
    Non-image payloads get application/octet-stream.
    """
    if not data:
        return DEFAULT_CONTENT_TYPE
    try:
        with Image.open(BytesIO(data)) as img:
            mime = img.get_format_mimetype()
    except (UnidentifiedImageError, OSError) as exc:
        logger.debug("Content type not detected: %s", exc)
        return DEFAULT_CONTENT_TYPE
    return mime or DEFAULT_CONTENT_TYPE
