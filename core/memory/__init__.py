# core/memory/__init__.py
from .repositories import (
    MemoryStore, MemoryUserRepository, MemoryBookRepository, MemoryNoteRepository
)

__all__ = [
    'MemoryStore',
    'MemoryUserRepository',
    'MemoryBookRepository',
    'MemoryNoteRepository',
]
