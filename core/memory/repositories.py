# core/memory/repositories.py
from itertools import count
from threading import Lock
from typing import Any, Dict, List, Optional

from core.models.book import utcnow
from core.repositories import BookRepositoryBase, NoteRepositoryBase, UserRepositoryBase
from core.sa.models import Book, ReadingNote, User


class MemoryStore:
    """Process-local tables plus one id counter per entity type.

    Counters only move forward, so an id is never handed out twice by the
    same store even after the row is deleted.
    """

    def __init__(self):
        self.users: Dict[int, User] = {}
        self.books: Dict[int, Book] = {}
        self.notes: Dict[int, ReadingNote] = {}
        self._counters = {"user": count(1), "book": count(1), "note": count(1)}
        self._lock = Lock()

    def next_id(self, entity: str) -> int:
        with self._lock:
            return next(self._counters[entity])

    def clear(self) -> None:
        """Drop all rows. Counters keep their position."""
        self.users.clear()
        self.books.clear()
        self.notes.clear()


def _newest_first(rows):
    return sorted(rows, key=lambda row: (row.created_at, row.id), reverse=True)


class MemoryUserRepository(UserRepositoryBase):
    def __init__(self, store: MemoryStore):
        self.store = store

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.store.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.store.users.values() if u.username == username), None)

    def create_user(self, username: str, password: str) -> User:
        if self.get_by_username(username):
            raise ValueError(f"User with username '{username}' already exists")
        now = utcnow()
        user = User(
            id=self.store.next_id("user"),
            username=username,
            password=password,
            created_at=now,
            updated_at=now,
        )
        self.store.users[user.id] = user
        return user


class MemoryBookRepository(BookRepositoryBase):
    def __init__(self, store: MemoryStore):
        self.store = store

    def get_by_id(self, book_id: int) -> Optional[Book]:
        return self.store.books.get(book_id)

    def list_by_user(self, user_id: int, status: Optional[str] = None) -> List[Book]:
        rows = [
            b for b in self.store.books.values()
            if b.user_id == user_id and (not status or b.status == status)
        ]
        return _newest_first(rows)

    def create(self, fields: Dict[str, Any]) -> Book:
        data = {k: v for k, v in fields.items() if k not in ("id", "created_at")}
        now = utcnow()
        data.setdefault("status", "want")
        data.setdefault("progress", 0)
        for column in ("rating", "completed_date", "notes", "publisher", "published_date"):
            data.setdefault(column, None)
        book = Book(id=self.store.next_id("book"), created_at=now, updated_at=now, **data)
        self.store.books[book.id] = book
        return book

    def update(self, book_id: int, changes: Dict[str, Any]) -> Optional[Book]:
        book = self.get_by_id(book_id)
        if book is None:
            return None
        for key, value in changes.items():
            if key in ("id", "created_at"):
                continue
            setattr(book, key, value)
        book.updated_at = utcnow()
        return book

    def delete(self, book_id: int) -> bool:
        return self.store.books.pop(book_id, None) is not None


class MemoryNoteRepository(NoteRepositoryBase):
    def __init__(self, store: MemoryStore):
        self.store = store

    def get_by_id(self, note_id: int) -> Optional[ReadingNote]:
        return self.store.notes.get(note_id)

    def list_by_book(self, book_id: int) -> List[ReadingNote]:
        return _newest_first(n for n in self.store.notes.values() if n.book_id == book_id)

    def count_by_book(self, book_id: int) -> int:
        return sum(1 for n in self.store.notes.values() if n.book_id == book_id)

    def create(self, fields: Dict[str, Any]) -> ReadingNote:
        data = {k: v for k, v in fields.items() if k not in ("id", "created_at")}
        for column in ("quote_text", "thought_text", "page"):
            data.setdefault(column, None)
        now = utcnow()
        note = ReadingNote(id=self.store.next_id("note"), created_at=now, updated_at=now, **data)
        self.store.notes[note.id] = note
        return note

    def delete(self, note_id: int) -> bool:
        return self.store.notes.pop(note_id, None) is not None

    def delete_by_book(self, book_id: int) -> int:
        doomed = [note_id for note_id, n in self.store.notes.items() if n.book_id == book_id]
        for note_id in doomed:
            del self.store.notes[note_id]
        return len(doomed)
