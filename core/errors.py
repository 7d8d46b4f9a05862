# core/errors.py
from typing import Any, Dict, List, Optional


class ReadingLogError(Exception):
    """Base class for all application errors"""
    pass


class ValidationError(ReadingLogError):
    """Malformed or missing input."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class NotFoundError(ReadingLogError):
    """A referenced id does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(ReadingLogError):
    """The operation conflicts with the current state of the store."""
    pass


class ProviderError(ReadingLogError):
    """An external API is unreachable or returned an error."""
    pass


class SearchProviderError(ProviderError):
    pass


class ExtractionError(ProviderError):
    pass
