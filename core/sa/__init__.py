# core/sa/__init__.py
from .database import Database
from .models import Base, Book, ReadingNote, User

__all__ = [
    'Database',
    'Base',
    'Book',
    'ReadingNote',
    'User',
]
