# tests/test_sa/test_repositories/test_book_repository.py
import pytest
from datetime import datetime
from core.sa.repositories.book import BookRepository
from core.sa.models import Book


@pytest.fixture
def book_repo(db_session):
    """Fixture to create a BookRepository instance"""
    return BookRepository(db_session)


@pytest.fixture
def book_fields(sample_user):
    return {
        "title": "파친코",
        "author": "이민진",
        "cover_url": "https://example.com/pachinko.jpg",
        "user_id": sample_user.id,
        "status": "want",
        "progress": 0,
    }


def test_create_assigns_id(book_repo, book_fields):
    """Test that create stores the entry and assigns an ID"""
    book = book_repo.create(book_fields)
    assert book.id is not None
    assert book.title == "파친코"
    assert book.created_at is not None
    assert book_repo.get_by_id(book.id) is book


def test_create_ignores_caller_id(book_repo, book_fields):
    """Test that IDs always come from the store"""
    book = book_repo.create({**book_fields, "id": 500})
    assert book.id != 500


def test_ids_are_never_reused(book_repo, book_fields):
    """Test that deleting the newest entry does not free its ID"""
    first = book_repo.create(book_fields)
    second = book_repo.create(book_fields)
    assert second.id > first.id

    assert book_repo.delete(second.id) is True
    third = book_repo.create(book_fields)
    assert third.id > second.id


def test_get_by_nonexistent_id(book_repo):
    assert book_repo.get_by_id(12345) is None


def test_list_by_user_newest_first(book_repo, book_fields):
    """Test that entries come back newest first"""
    older = book_repo.create({**book_fields, "title": "Older"})
    newer = book_repo.create({**book_fields, "title": "Newer"})
    older.created_at = datetime(2020, 1, 1)
    book_repo.session.commit()

    books = book_repo.list_by_user(book_fields["user_id"])
    assert [b.id for b in books] == [newer.id, older.id]


def test_list_by_user_same_timestamp_orders_by_id(book_repo, book_fields):
    """Test that ties on created_at are broken by the newest ID"""
    stamp = datetime(2024, 1, 1)
    first = book_repo.create(book_fields)
    second = book_repo.create(book_fields)
    first.created_at = second.created_at = stamp
    book_repo.session.commit()

    assert [b.id for b in book_repo.list_by_user(book_fields["user_id"])] == [second.id, first.id]


def test_list_by_user_with_status(book_repo, book_fields):
    """Test narrowing the list to a single status"""
    book_repo.create(book_fields)
    reading = book_repo.create({**book_fields, "status": "reading"})

    books = book_repo.list_by_user(book_fields["user_id"], status="reading")
    assert [b.id for b in books] == [reading.id]
    assert book_repo.list_by_user(book_fields["user_id"], status="completed") == []


def test_list_by_user_only_returns_own_books(book_repo, book_fields, db_session):
    """Test that other users' entries are excluded"""
    book_repo.create(book_fields)
    assert book_repo.list_by_user(book_fields["user_id"] + 1) == []


def test_update_is_partial(book_repo, book_fields):
    """Test that update only touches the named attributes"""
    book = book_repo.create({**book_fields, "rating": 4.5})
    updated = book_repo.update(book.id, {"status": "reading", "progress": 30})

    assert updated.status == "reading"
    assert updated.progress == 30
    assert updated.rating == 4.5
    assert updated.title == "파친코"


def test_update_keeps_id_and_created_at(book_repo, book_fields):
    """Test that id and created_at cannot be overwritten"""
    book = book_repo.create(book_fields)
    original_id, created = book.id, book.created_at

    updated = book_repo.update(book.id, {"id": 999, "created_at": datetime(2000, 1, 1)})
    assert updated.id == original_id
    assert updated.created_at == created


def test_update_nonexistent(book_repo):
    assert book_repo.update(999, {"status": "reading"}) is None


def test_delete(book_repo, book_fields, db_session):
    """Test deleting an entry"""
    book = book_repo.create(book_fields)
    assert book_repo.delete(book.id) is True
    assert db_session.query(Book).filter(Book.id == book.id).first() is None
    assert book_repo.delete(book.id) is False
