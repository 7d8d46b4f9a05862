# tests/test_memory_repositories.py
import threading

import pytest

from core.memory import MemoryBookRepository, MemoryNoteRepository, MemoryUserRepository


@pytest.fixture
def book_repo(memory_store):
    return MemoryBookRepository(memory_store)


@pytest.fixture
def note_repo(memory_store):
    return MemoryNoteRepository(memory_store)


@pytest.fixture
def user_repo(memory_store):
    return MemoryUserRepository(memory_store)


@pytest.fixture
def book_fields():
    return {"title": "코스모스", "author": "칼 세이건", "cover_url": "", "user_id": 1}


def test_create_fills_defaults(book_repo, book_fields):
    book = book_repo.create(book_fields)
    assert book.id == 1
    assert book.status == "want"
    assert book.progress == 0
    assert book.rating is None
    assert book.completed_date is None
    assert book.created_at is not None


def test_ids_never_reused(book_repo, book_fields):
    """Test that the id counter keeps moving after deletes"""
    first = book_repo.create(book_fields)
    book_repo.delete(first.id)
    second = book_repo.create(book_fields)
    assert second.id == first.id + 1


def test_ids_unique_across_threads(book_repo, book_fields):
    ids = []

    def worker():
        for _ in range(50):
            ids.append(book_repo.create(book_fields).id)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(set(ids)) == 200


def test_entity_counters_are_independent(book_repo, note_repo, book_fields):
    book = book_repo.create(book_fields)
    note = note_repo.create({"book_id": book.id, "content": "x"})
    assert book.id == 1
    assert note.id == 1


def test_list_by_user_newest_first_and_filtered(book_repo, book_fields):
    first = book_repo.create(book_fields)
    second = book_repo.create({**book_fields, "status": "reading"})
    book_repo.create({**book_fields, "user_id": 2})

    assert [b.id for b in book_repo.list_by_user(1)] == [second.id, first.id]
    assert [b.id for b in book_repo.list_by_user(1, "reading")] == [second.id]


def test_update_partial(book_repo, book_fields):
    book = book_repo.create({**book_fields, "rating": 3.5})
    updated = book_repo.update(book.id, {"status": "completed", "id": 42})
    assert updated.status == "completed"
    assert updated.rating == 3.5
    assert updated.id == book.id
    assert book_repo.update(99, {"status": "want"}) is None


def test_delete_reports_presence(book_repo, book_fields):
    book = book_repo.create(book_fields)
    assert book_repo.delete(book.id) is True
    assert book_repo.delete(book.id) is False


def test_notes_by_book(note_repo):
    note_repo.create({"book_id": 1, "content": "a"})
    latest = note_repo.create({"book_id": 1, "content": "b"})
    note_repo.create({"book_id": 2, "content": "c"})

    assert note_repo.list_by_book(1)[0].id == latest.id
    assert note_repo.count_by_book(1) == 2
    assert note_repo.delete_by_book(1) == 2
    assert note_repo.count_by_book(1) == 0
    assert note_repo.count_by_book(2) == 1


def test_duplicate_username(user_repo):
    user_repo.create_user("reader", "pw")
    with pytest.raises(ValueError, match="already exists"):
        user_repo.create_user("reader", "pw")
    assert user_repo.get_by_username("reader").id == 1


def test_clear_keeps_counters(memory_store, book_repo, book_fields):
    book_repo.create(book_fields)
    memory_store.clear()
    assert book_repo.list_by_user(1) == []
    assert book_repo.create(book_fields).id == 2
