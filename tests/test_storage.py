# tests/test_storage.py
import pytest

from core.models.book import NoteDeletePolicy
from core.storage import Storage


@pytest.fixture
def sql_storage(tmp_path):
    storage = Storage(backend="sql", database_url=f"sqlite:///{tmp_path / 'storage.db'}")
    storage.init()
    yield storage
    storage.close()


def test_unknown_backend():
    with pytest.raises(ValueError, match="Unknown storage backend 'redis'"):
        Storage(backend="redis")


def test_backend_name_is_case_insensitive():
    assert Storage(backend="MEMORY").backend == "memory"


def test_note_delete_policy_from_argument():
    storage = Storage(backend="memory", note_delete_policy="cascade")
    with storage.service() as service:
        assert service.note_delete_policy == NoteDeletePolicy.CASCADE


def test_sql_data_outlives_the_unit_of_work(sql_storage):
    """Test that each service() call gets a fresh session over the same database"""
    with sql_storage.service() as service:
        user = service.ensure_user("reader", "pw")
        book = service.create_entry({"title": "T", "author": "A", "coverUrl": ""}, user_id=user.id)

    with sql_storage.service() as service:
        assert service.get_entry(book.id).title == "T"


def test_sql_session_closed_after_error(sql_storage):
    """Test that an error inside the unit of work propagates and the session is released"""
    with pytest.raises(RuntimeError):
        with sql_storage.service() as service:
            session = service.books.session
            service.ensure_user("reader", "pw")
            raise RuntimeError("boom")

    assert not session.in_transaction()
    with sql_storage.service() as service:
        assert service.users.get_by_username("reader") is not None


def test_memory_data_shared_between_services():
    storage = Storage(backend="memory")
    with storage.service() as service:
        user = service.ensure_user("reader", "pw")
    with storage.service() as service:
        assert service.users.get_by_id(user.id) is not None
