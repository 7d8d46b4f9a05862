# tests/conftest.py
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from core.memory import MemoryBookRepository, MemoryNoteRepository, MemoryStore, MemoryUserRepository
from core.sa.database import Database
from core.sa.repositories import BookRepository, NoteRepository, UserRepository
from core.services.library_service import LibraryService

FIXED_NOW = datetime(2024, 3, 15, 14, 30, 0)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sql_database(tmp_path):
    """A fresh SQLite file per test."""
    db = Database(f"sqlite:///{tmp_path / 'reading_log.db'}")
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture(params=["memory", "sql"])
def make_service(request, tmp_path):
    """Factory building a LibraryService over either backend.

    Every service made by one factory shares the same underlying data.
    """
    if request.param == "memory":
        store = MemoryStore()

        def build(**kwargs):
            kwargs.setdefault("clock", lambda: FIXED_NOW)
            return LibraryService(
                MemoryUserRepository(store),
                MemoryBookRepository(store),
                MemoryNoteRepository(store),
                **kwargs,
            )

        yield build
        return

    db = Database(f"sqlite:///{tmp_path / 'service.db'}")
    db.init_db()
    sessions = []

    def build(**kwargs):
        kwargs.setdefault("clock", lambda: FIXED_NOW)
        session = db.get_session()
        sessions.append(session)
        return LibraryService(
            UserRepository(session),
            BookRepository(session),
            NoteRepository(session),
            **kwargs,
        )

    yield build
    for session in sessions:
        session.close()
    db.dispose()


@pytest.fixture
def service(make_service):
    return make_service()


@pytest.fixture
def user(service):
    return service.ensure_user("reader", "secret")


@pytest.fixture
def book_data():
    return {
        "title": "데미안",
        "author": "헤르만 헤세",
        "coverUrl": "https://images.unsplash.com/photo-1544947950-fa07a98d237f",
    }
