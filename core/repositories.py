# core/repositories.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.sa.models import Book, ReadingNote, User


class UserRepositoryBase(ABC):
    """Storage contract for users."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    def create_user(self, username: str, password: str) -> User:
        """Insert a user; raises ValueError if the username is taken."""


class BookRepositoryBase(ABC):
    """Storage contract for library entries.

    Ids come from the backing store, increase monotonically and are never
    reused, even after deletion.
    """

    @abstractmethod
    def get_by_id(self, book_id: int) -> Optional[Book]:
        ...

    @abstractmethod
    def list_by_user(self, user_id: int, status: Optional[str] = None) -> List[Book]:
        """Entries owned by user_id, newest first."""

    @abstractmethod
    def create(self, fields: Dict[str, Any]) -> Book:
        ...

    @abstractmethod
    def update(self, book_id: int, changes: Dict[str, Any]) -> Optional[Book]:
        """Overwrite only the named attributes. None if the entry does not exist."""

    @abstractmethod
    def delete(self, book_id: int) -> bool:
        ...


class NoteRepositoryBase(ABC):
    """Storage contract for reading notes."""

    @abstractmethod
    def get_by_id(self, note_id: int) -> Optional[ReadingNote]:
        ...

    @abstractmethod
    def list_by_book(self, book_id: int) -> List[ReadingNote]:
        """Notes on book_id, newest first."""

    @abstractmethod
    def count_by_book(self, book_id: int) -> int:
        ...

    @abstractmethod
    def create(self, fields: Dict[str, Any]) -> ReadingNote:
        ...

    @abstractmethod
    def delete(self, note_id: int) -> bool:
        ...

    @abstractmethod
    def delete_by_book(self, book_id: int) -> int:
        """Remove every note on book_id, returning how many were removed."""
