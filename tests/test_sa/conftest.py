# tests/test_sa/conftest.py
import pytest
from sqlalchemy.orm import Session

from core.sa.models import Book, User


@pytest.fixture
def db_session(sql_database):
    """Create a new database session for a test"""
    session: Session = sql_database.get_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sample_user(db_session):
    """Create a sample user for testing."""
    user = User(username="Test User", password="password")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def make_book(db_session, sample_user):
    """Insert a library entry for the sample user."""
    def _make(title="Test Book", **fields):
        fields.setdefault("author", "Test Author")
        fields.setdefault("cover_url", "http://example.com/cover.jpg")
        fields.setdefault("user_id", sample_user.id)
        book = Book(title=title, **fields)
        db_session.add(book)
        db_session.commit()
        return book
    return _make
