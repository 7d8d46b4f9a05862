import logging
from io import BytesIO
from typing import Tuple

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

def inspect_image(image_data: bytes) -> Tuple[str, int, int]:
    """Check that raw bytes hold a readable image.

    Args:
        image_data: Raw image bytes as uploaded

    Returns:
        Tuple of (format, width, height), e.g. ("JPEG", 1200, 1600)

    Raises:
        ValueError: If the bytes are empty or not a recognisable image
    """
    if not image_data:
        raise ValueError("Image is empty")
    try:
        with Image.open(BytesIO(image_data)) as img:
            img.verify()
            return img.format or "UNKNOWN", img.width, img.height
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logger.debug("Rejected upload: %s", e)
        raise ValueError("File is not a valid image") from e
