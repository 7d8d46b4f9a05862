# core/storage.py
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from core.config import settings
from core.memory import MemoryBookRepository, MemoryNoteRepository, MemoryStore, MemoryUserRepository
from core.models.book import NoteDeletePolicy
from core.sa.database import Database
from core.sa.repositories import BookRepository, NoteRepository, UserRepository
from core.services.library_service import LibraryService

logger = logging.getLogger(__name__)

BACKENDS = ("sql", "memory")


class Storage:
    """Chooses the backing store and hands out LibraryService instances bound to it.

    `sql` keeps data in the database named by DATABASE_URL; `memory` keeps it
    in process for the lifetime of this object.
    """

    def __init__(self, backend: Optional[str] = None, database_url: Optional[str] = None,
                 note_delete_policy: Optional[str] = None):
        self.backend = (backend or settings.storage_backend).lower()
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown storage backend '{self.backend}'. Must be one of: {', '.join(BACKENDS)}")
        self.note_delete_policy = NoteDeletePolicy(note_delete_policy or settings.note_delete_policy)

        self.database: Optional[Database] = None
        self.memory: Optional[MemoryStore] = None
        if self.backend == "sql":
            self.database = Database(database_url)
        else:
            self.memory = MemoryStore()

    def init(self) -> None:
        """Create tables if the backend needs them"""
        if self.database is not None:
            self.database.init_db()
        logger.info("Storage ready (backend=%s, note delete policy=%s)",
                    self.backend, self.note_delete_policy.value)

    @contextmanager
    def service(self) -> Iterator[LibraryService]:
        """A LibraryService for one unit of work (one request, one CLI command)"""
        if self.memory is not None:
            yield LibraryService(
                MemoryUserRepository(self.memory),
                MemoryBookRepository(self.memory),
                MemoryNoteRepository(self.memory),
                note_delete_policy=self.note_delete_policy,
            )
            return

        with self.database.get_db() as session:
            yield LibraryService(
                UserRepository(session),
                BookRepository(session),
                NoteRepository(session),
                note_delete_policy=self.note_delete_policy,
            )

    def close(self) -> None:
        if self.database is not None:
            self.database.dispose()
