# core/providers/extraction.py
import base64
import logging
import re
from typing import Optional

import requests

from core.config import settings
from core.errors import ExtractionError
from core.utils.http import ApiClient

logger = logging.getLogger(__name__)

_NEWLINES = re.compile(r"\n+")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(raw: str) -> str:
    """Collapse newlines and whitespace runs into single spaces and trim the ends.

    normalize_text(normalize_text(x)) == normalize_text(x)
    """
    text = _NEWLINES.sub(" ", raw or "")
    return _WHITESPACE.sub(" ", text).strip()


class TextExtractor:
    """OCR over the Google Cloud Vision `images:annotate` endpoint.

    Unlike search there is nothing sensible to fall back on, so every
    provider failure is raised as ExtractionError.
    """

    def __init__(self, client: Optional[ApiClient] = None, api_url: Optional[str] = None,
                 api_key: Optional[str] = None):
        self.client = client or ApiClient(timeout=settings.extraction_timeout)
        self.api_url = api_url or settings.vision_api_url
        self.api_key = api_key if api_key is not None else settings.vision_api_key

    def extract_text(self, image_bytes: bytes) -> str:
        """Return the provider's best text annotation for an image, or '' if none was found"""
        payload = {
            "requests": [{
                "image": {"content": base64.b64encode(image_bytes).decode("ascii")},
                "features": [{"type": "TEXT_DETECTION"}],
            }]
        }
        params = {"key": self.api_key} if self.api_key else None

        try:
            data = self.client.post_json(self.api_url, payload, params=params)
        except requests.Timeout as e:
            logger.exception("Text extraction timed out")
            raise ExtractionError(f"Text extraction timed out after {self.client.timeout}s") from e
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            logger.exception("Text extraction failed with HTTP %s", status)
            raise ExtractionError(f"Text extraction failed: HTTP {status}") from e
        except requests.RequestException as e:
            logger.exception("Text extraction request failed")
            raise ExtractionError(f"Text extraction failed: {e}") from e
        except ValueError as e:
            raise ExtractionError("Text extraction failed: invalid JSON response") from e

        responses = (data or {}).get("responses") or [{}]
        first = responses[0] or {}
        if first.get("error"):
            message = first["error"].get("message", "unknown error")
            logger.error("Vision API rejected image: %s", message)
            raise ExtractionError(f"Text extraction failed: {message}")

        annotations = first.get("textAnnotations") or []
        if annotations and annotations[0].get("description"):
            return annotations[0]["description"]

        logger.info("No text detected in image")
        return ""
