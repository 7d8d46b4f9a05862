# core/sa/models/__init__.py
from .base import Base, TimestampMixin
from .user import User
from .book import Book
from .note import ReadingNote

__all__ = [
    'Base',
    'TimestampMixin',
    'User',
    'Book',
    'ReadingNote',
]
