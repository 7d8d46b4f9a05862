# core/services/library_service.py

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.errors import ConflictError, NotFoundError, ValidationError
from core.models.book import (
    BookCreate, BookStatusUpdate, NoteCreate, NoteDeletePolicy, ReadingStatus, utcnow
)
from core.repositories import BookRepositoryBase, NoteRepositoryBase, UserRepositoryBase
from core.sa.models import Book, ReadingNote, User

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def validate_payload(model: Type[M], data: Union[M, Mapping[str, Any]]) -> M:
    """Coerce a mapping into `model`, translating pydantic failures into ValidationError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model.__name__} data", errors=field_errors(e)) from e


def field_errors(error: PydanticValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into JSON-safe field-level detail."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]


def apply_status_transition(book: Book, update: BookStatusUpdate, now: datetime) -> Dict[str, Any]:
    """Work out the attribute changes for moving `book` to `update.status`.

    Every status may move to every other status. Fields named in the update
    overwrite the stored ones; unnamed fields are left as they are. Entering
    `completed` without any completion date on record stamps today's date.
    """
    changes = update.changes()
    changes["status"] = update.status.value

    entering_completed = (
        update.status == ReadingStatus.COMPLETED
        and book.status != ReadingStatus.COMPLETED.value
    )
    if entering_completed and "completed_date" not in changes and book.completed_date is None:
        changes["completed_date"] = datetime(now.year, now.month, now.day)

    return changes


def compose_note_content(quote_text: Optional[str], thought_text: Optional[str]) -> str:
    """Join a quote and a thought the way notes are displayed: quoted text, blank line, thought."""
    parts = []
    if quote_text:
        parts.append(f'"{quote_text}"')
    if thought_text:
        parts.append(thought_text)
    return "\n\n".join(parts)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class LibraryService:
    def __init__(
        self,
        users: UserRepositoryBase,
        books: BookRepositoryBase,
        notes: NoteRepositoryBase,
        note_delete_policy: Union[NoteDeletePolicy, str] = NoteDeletePolicy.ORPHAN,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.users = users
        self.books = books
        self.notes = notes
        self.note_delete_policy = NoteDeletePolicy(note_delete_policy)
        self.clock = clock

    # Users

    def ensure_user(self, username: str, password: str) -> User:
        """Return the user with `username`, creating it on first use"""
        user = self.users.get_by_username(username)
        if user is None:
            user = self.users.create_user(username, password)
            logger.info("Created user %s (id=%s)", username, user.id)
        return user

    # Library entries

    def create_entry(self, data: Union[BookCreate, Mapping[str, Any]], user_id: Optional[int] = None) -> Book:
        """Add a book to a user's library.

        `user_id` fills in the owner when the payload does not name one.
        Status defaults to `want` and progress to 0; rating, completion date
        and notes stay empty unless given.
        """
        payload = validate_payload(BookCreate, data)
        owner = payload.user_id if payload.user_id is not None else user_id
        if owner is None:
            raise ValidationError(
                "Invalid BookCreate data",
                errors=[{"field": "userId", "message": "Field required", "type": "missing"}],
            )

        fields = payload.model_dump(exclude={"user_id"})
        fields["user_id"] = owner
        fields["status"] = payload.status.value
        if fields["progress"] is None:
            fields["progress"] = 0

        book = self.books.create(fields)
        logger.info("Added book %s '%s' for user %s", book.id, book.title, owner)
        return book

    def get_entry(self, book_id: int) -> Book:
        book = self.books.get_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    def list_entries(self, user_id: int, status: Optional[Union[ReadingStatus, str]] = None) -> List[Book]:
        """A user's library, newest first, optionally narrowed to one status"""
        if status is not None and status != "":
            try:
                status = ReadingStatus(status).value
            except ValueError:
                raise ValidationError(
                    f"Invalid status '{status}'",
                    errors=[{
                        "field": "status",
                        "message": f"Must be one of: {', '.join(s.value for s in ReadingStatus)}",
                        "type": "enum",
                    }],
                ) from None
        else:
            status = None
        return self.books.list_by_user(user_id, status)

    def update_status(self, book_id: int, data: Union[BookStatusUpdate, Mapping[str, Any]]) -> Book:
        """Move an entry to a new status and apply any fields sent alongside it"""
        update = validate_payload(BookStatusUpdate, data)
        book = self.get_entry(book_id)

        changes = apply_status_transition(book, update, self.clock())
        if book.status != changes["status"]:
            logger.info("Book %s: %s -> %s", book_id, book.status, changes["status"])

        updated = self.books.update(book_id, changes)
        if updated is None:
            # Removed between the read and the write
            raise NotFoundError("Book", book_id)
        return updated

    def delete_entry(self, book_id: int) -> bool:
        """Remove an entry. Returns False when there was nothing to remove.

        The entry's notes are handled according to the note delete policy.
        """
        if self.books.get_by_id(book_id) is None:
            return False

        if self.note_delete_policy == NoteDeletePolicy.FORBID:
            note_count = self.notes.count_by_book(book_id)
            if note_count:
                raise ConflictError(f"Book {book_id} still has {note_count} note(s)")

        removed = self.books.delete(book_id)
        if removed and self.note_delete_policy == NoteDeletePolicy.CASCADE:
            dropped = self.notes.delete_by_book(book_id)
            logger.info("Removed %d note(s) with book %s", dropped, book_id)
        if removed:
            logger.info("Removed book %s", book_id)
        return removed

    # Reading notes

    def add_note(self, book_id: int, data: Union[NoteCreate, Mapping[str, Any]]) -> ReadingNote:
        """Attach a note to an entry.

        Content is taken as given when present; otherwise it is built from the
        quote and thought parts. A note with no text at all is rejected.
        """
        payload = validate_payload(NoteCreate, data)
        self.get_entry(book_id)

        quote_text = _clean(payload.quote_text)
        thought_text = _clean(payload.thought_text)
        content = payload.content
        if content is None or not content.strip():
            content = compose_note_content(quote_text, thought_text)
        if not content.strip():
            raise ValidationError(
                "Invalid note data",
                errors=[{"field": "content", "message": "Note content must not be empty", "type": "empty"}],
            )

        return self.notes.create({
            "book_id": book_id,
            "content": content,
            "quote_text": quote_text,
            "thought_text": thought_text,
            "page": payload.page,
        })

    def list_notes(self, book_id: int) -> List[ReadingNote]:
        self.get_entry(book_id)
        return self.notes.list_by_book(book_id)

    def delete_note(self, note_id: int) -> bool:
        return self.notes.delete(note_id)
