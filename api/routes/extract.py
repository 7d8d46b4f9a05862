# api/routes/extract.py

import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile

from api.dependencies import get_text_extractor
from api.schemas import ErrorResponse, ExtractTextResponse
from core.config import settings
from core.errors import ValidationError
from core.providers.extraction import TextExtractor, normalize_text
from core.utils.image import inspect_image

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["extraction"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _upload_error(message: str) -> ValidationError:
    return ValidationError(message, errors=[{"field": "image", "message": message, "type": "file"}])


@router.post("/extract-text", response_model=ExtractTextResponse)
def extract_text(
    image: Optional[UploadFile] = File(None, description="Photo of a page"),
    extractor: TextExtractor = Depends(get_text_extractor),
):
    """
    Extract the text from a photographed page.

    Returns both the provider's raw text and a single-line normalized copy.
    """
    if image is None:
        raise _upload_error("No image file uploaded")

    data = image.file.read(settings.max_upload_size + 1)
    if len(data) > settings.max_upload_size:
        raise _upload_error(f"Image exceeds the {settings.max_upload_size // (1024 * 1024)}MB limit")

    try:
        fmt, width, height = inspect_image(data)
    except ValueError as e:
        raise _upload_error(str(e))
    logger.info("Extracting text from %s image %dx%d (%d bytes)", fmt, width, height, len(data))

    original = extractor.extract_text(data)
    return ExtractTextResponse(original_text=original, processed_text=normalize_text(original))
