# core/sa/repositories/__init__.py
from .user import UserRepository
from .book import BookRepository
from .note import NoteRepository

__all__ = ['UserRepository', 'BookRepository', 'NoteRepository']
