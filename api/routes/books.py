# api/routes/books.py

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_current_user_id, get_search_provider, get_service
from api.schemas import BookSchema, ErrorResponse, ReadingNoteSchema, SearchRequest
from core.errors import NotFoundError
from core.models.book import BookCreate, BookStatusUpdate, NoteCreate, SearchResponse
from core.providers.search import BookSearchProvider
from core.services.library_service import LibraryService

router = APIRouter(
    prefix="/api/books",
    tags=["books"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("/search", response_model=SearchResponse, response_model_exclude_none=True)
def search_books(
    q: Optional[str] = Query(None, description="Free-text title/author query"),
    provider: BookSearchProvider = Depends(get_search_provider),
):
    """
    Search the book metadata provider.

    An empty query returns no results. A provider outage falls back to the
    local list and adds an `error` field to the response.
    """
    return provider.search(q or "")


@router.post("/search", response_model=SearchResponse, response_model_exclude_none=True)
def search_books_post(body: SearchRequest, provider: BookSearchProvider = Depends(get_search_provider)):
    """Same as GET /search, for clients that send the query as a JSON body."""
    return provider.search(body.query)


@router.get("", response_model=List[BookSchema])
def get_books(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status (want, reading, completed)"),
    service: LibraryService = Depends(get_service),
    user_id: int = Depends(get_current_user_id),
):
    """Get the user's library, newest first."""
    return service.list_entries(user_id, status_filter)


@router.get("/{book_id}", response_model=BookSchema)
def get_book(book_id: int, service: LibraryService = Depends(get_service)):
    return service.get_entry(book_id)


@router.post("", response_model=BookSchema, status_code=status.HTTP_201_CREATED)
def add_book(
    payload: BookCreate,
    service: LibraryService = Depends(get_service),
    user_id: int = Depends(get_current_user_id),
):
    """Add a book to the user's library. Any userId in the body is replaced by the current user."""
    return service.create_entry(payload.model_copy(update={"user_id": user_id}))


@router.patch("/{book_id}", response_model=BookSchema)
def update_book_status(book_id: int, update: BookStatusUpdate, service: LibraryService = Depends(get_service)):
    """
    Change a book's reading status.

    rating, completedDate, progress and notes are only touched when present
    in the body.
    """
    return service.update_status(book_id, update)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, service: LibraryService = Depends(get_service)):
    if not service.delete_entry(book_id):
        raise NotFoundError("Book", book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{book_id}/notes", response_model=List[ReadingNoteSchema])
def get_book_notes(book_id: int, service: LibraryService = Depends(get_service)):
    """Get the notes on a book, newest first."""
    return service.list_notes(book_id)


@router.post("/{book_id}/notes", response_model=ReadingNoteSchema, status_code=status.HTTP_201_CREATED)
def add_book_note(book_id: int, note: NoteCreate, service: LibraryService = Depends(get_service)):
    return service.add_note(book_id, note)
