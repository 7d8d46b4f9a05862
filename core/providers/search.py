# core/providers/search.py
import logging
from typing import Any, Dict, List, Optional

import requests

from core.config import settings
from core.errors import SearchProviderError
from core.models.book import SearchResponse, SearchResult
from core.utils.http import ApiClient

logger = logging.getLogger(__name__)

BOOK_COVERS = [
    "https://images.unsplash.com/photo-1629992101753-56d196c8aabb",
    "https://images.unsplash.com/photo-1544947950-fa07a98d237f",
    "https://images.unsplash.com/photo-1589998059171-988d887df646",
    "https://images.unsplash.com/photo-1541963463532-d68292c34b19",
    "https://images.unsplash.com/photo-1512820790803-83ca734da794",
    "https://images.unsplash.com/photo-1476275466078-4007374efbbe",
    "https://images.unsplash.com/photo-1603284569248-821525309698",
    "https://images.unsplash.com/photo-1531928351158-2f736078e0a1",
]

DEFAULT_COVER = BOOK_COVERS[0]

# Served when the provider is unreachable
FALLBACK_BOOKS: List[Dict[str, str]] = [
    {"title": "82년생 김지영", "author": "조남주", "cover_url": BOOK_COVERS[0]},
    {"title": "위저드 베이커리", "author": "구병모", "cover_url": BOOK_COVERS[1]},
    {"title": "어떻게 살 것인가", "author": "유시민", "cover_url": BOOK_COVERS[2]},
    {"title": "파친코", "author": "이민진", "cover_url": BOOK_COVERS[3]},
    {"title": "부의 추월차선", "author": "엠제이 드마코", "cover_url": BOOK_COVERS[4]},
    {"title": "사피엔스", "author": "유발 하라리", "cover_url": BOOK_COVERS[5]},
    {"title": "데미안", "author": "헤르만 헤세", "cover_url": BOOK_COVERS[1]},
    {"title": "아침 명상의 힘", "author": "할 엘로드", "cover_url": BOOK_COVERS[2]},
    {"title": "코스모스", "author": "칼 세이건", "cover_url": BOOK_COVERS[5]},
    {"title": "멋진 신세계", "author": "올더스 헉슬리", "cover_url": BOOK_COVERS[6]},
    {"title": "이기적 유전자", "author": "리처드 도킨스", "cover_url": BOOK_COVERS[7]},
    {"title": "나미야 잡화점의 기적", "author": "히가시노 게이고", "cover_url": BOOK_COVERS[0]},
]


def search_fallback(query: str) -> List[SearchResult]:
    """Case-insensitive substring match on title or author over the local list"""
    needle = query.strip().lower()
    return [
        SearchResult(id=f"local-{index}", **book)
        for index, book in enumerate(FALLBACK_BOOKS)
        if needle in book["title"].lower() or needle in book["author"].lower()
    ]


def volume_to_result(volume: Dict[str, Any]) -> Optional[SearchResult]:
    """Map one Google Books volume onto a search result; None if it has no title."""
    info = volume.get("volumeInfo") or {}
    title = info.get("title")
    if not title:
        return None
    subtitle = info.get("subtitle")
    if subtitle:
        title = f"{title}: {subtitle}"

    authors = info.get("authors") or []
    if isinstance(authors, str):
        authors = [authors]

    images = info.get("imageLinks") or {}
    cover_url = images.get("thumbnail") or images.get("smallThumbnail") or DEFAULT_COVER
    if cover_url.startswith("http://"):
        cover_url = "https://" + cover_url[len("http://"):]

    return SearchResult(
        id=volume.get("id"),
        title=title,
        author=", ".join(authors) or "Unknown author",
        cover_url=cover_url,
        publisher=info.get("publisher"),
        published_date=info.get("publishedDate"),
    )


class BookSearchProvider:
    """Book metadata search backed by the Google Books volumes API.

    Search never fails hard: when the provider cannot be reached or answers
    with an error, the local fallback list is searched instead and the
    response carries an `error` note describing the degraded mode.
    """

    def __init__(self, client: Optional[ApiClient] = None, base_url: Optional[str] = None,
                 api_key: Optional[str] = None, max_results: Optional[int] = None):
        self.client = client or ApiClient(timeout=settings.search_timeout)
        self.base_url = base_url or settings.google_books_url
        self.api_key = api_key if api_key is not None else settings.google_books_api_key
        self.max_results = max_results or settings.search_max_results

    def search(self, query: Optional[str]) -> SearchResponse:
        if not query or not query.strip():
            return SearchResponse(results=[], total=0)

        try:
            return self._search_provider(query.strip())
        except SearchProviderError as e:
            logger.warning("Book search provider failed for %r, using local list: %s", query, e)
            results = search_fallback(query)
            return SearchResponse(
                results=results,
                total=len(results),
                error=f"Search provider unavailable, showing local results ({e})",
            )

    def _search_provider(self, query: str) -> SearchResponse:
        params: Dict[str, Any] = {
            "q": query,
            "maxResults": min(self.max_results, 40),  # API ceiling
            "printType": "books",
        }
        if self.api_key:
            params["key"] = self.api_key

        try:
            data = self.client.get_json(self.base_url, params=params)
        except requests.Timeout as e:
            raise SearchProviderError(f"timed out after {self.client.timeout}s") from e
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            raise SearchProviderError(f"HTTP {status}") from e
        except requests.RequestException as e:
            raise SearchProviderError(str(e) or e.__class__.__name__) from e
        except ValueError as e:
            raise SearchProviderError("invalid JSON response") from e

        if not isinstance(data, dict):
            raise SearchProviderError("unexpected response shape")

        items = data.get("items") or []
        if not isinstance(items, list) or not all(
            isinstance(volume, dict) and isinstance(volume.get("volumeInfo") or {}, dict) for volume in items
        ):
            raise SearchProviderError("unexpected response shape")

        results = []
        try:
            for volume in items:
                result = volume_to_result(volume)
                if result is not None:
                    results.append(result)
        except (AttributeError, TypeError, ValueError) as e:
            # Malformed field inside an otherwise well-formed volume
            raise SearchProviderError("unexpected response shape") from e

        total = data.get("totalItems")
        if not isinstance(total, int):
            total = len(results)
        return SearchResponse(results=results, total=total)
