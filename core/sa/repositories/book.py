# core/sa/repositories/book.py
from typing import Optional, List, Dict, Any
from sqlalchemy import desc
from sqlalchemy.orm import Session
from core.models.book import utcnow
from core.repositories import BookRepositoryBase
from ..models import Book

# Attributes a caller may never overwrite after insert
IMMUTABLE_FIELDS = {"id", "created_at"}

class BookRepository(BookRepositoryBase):
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Get a library entry by its ID"""
        return self.session.query(Book).filter(Book.id == book_id).one_or_none()

    def list_by_user(self, user_id: int, status: Optional[str] = None) -> List[Book]:
        """Get the entries owned by a user.
        
        Args:
            user_id: Owner of the entries
            status: Optional reading status to narrow the list to
            
        Returns:
            List of Book objects ordered newest first
        """
        query = self.session.query(Book).filter(Book.user_id == user_id)
        if status:
            query = query.filter(Book.status == status)
        return query.order_by(desc(Book.created_at), desc(Book.id)).all()

    def create(self, fields: Dict[str, Any]) -> Book:
        """Insert a library entry and return it with its generated ID"""
        data = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
        now = utcnow()
        book = Book(**data, created_at=now, updated_at=now)
        self.session.add(book)
        self.session.commit()
        return book

    def update(self, book_id: int, changes: Dict[str, Any]) -> Optional[Book]:
        """Apply a partial update to a library entry.
        
        Args:
            book_id: The ID of the entry to update
            changes: Attribute name to new value; attributes not named are left alone
            
        Returns:
            The updated Book object if found, None otherwise
        """
        book = self.get_by_id(book_id)
        if not book:
            return None

        for key, value in changes.items():
            if key in IMMUTABLE_FIELDS:
                continue
            setattr(book, key, value)
        book.updated_at = utcnow()

        self.session.commit()
        return book

    def delete(self, book_id: int) -> bool:
        """Delete a library entry.
        
        Returns:
            True if the entry was deleted, False if not found
        """
        book = self.get_by_id(book_id)
        if not book:
            return False

        self.session.delete(book)
        self.session.commit()
        return True
