# api/dependencies.py
from typing import Iterator

from fastapi import Depends, Request

from core.config import settings
from core.providers.extraction import TextExtractor
from core.providers.search import BookSearchProvider
from core.services.library_service import LibraryService
from core.storage import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_service(storage: Storage = Depends(get_storage)) -> Iterator[LibraryService]:
    """Get a LibraryService for the current request.

    With the SQL backend the underlying session is closed once the request
    is complete.
    """
    with storage.service() as service:
        yield service


def get_current_user_id(service: LibraryService = Depends(get_service)) -> int:
    """There is no authentication: every request acts as the default user."""
    user = service.ensure_user(settings.default_username, settings.default_password)
    return user.id


def get_search_provider(request: Request) -> BookSearchProvider:
    return request.app.state.search_provider


def get_text_extractor(request: Request) -> TextExtractor:
    return request.app.state.text_extractor
