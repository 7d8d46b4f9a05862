# tests/test_sa/test_repositories/test_user_repository.py

import pytest
from core.sa.repositories.user import UserRepository


@pytest.fixture
def user_repo(db_session):
    """Fixture to create a UserRepository instance."""
    return UserRepository(db_session)


def test_create_user(user_repo):
    """Test creating a new user."""
    user = user_repo.create_user("John Doe", "hunter2")
    assert user is not None
    assert user.username == "John Doe"
    assert user.id is not None


def test_create_duplicate_user(user_repo, sample_user):
    """Test that creating a user with a duplicate username raises an error."""
    with pytest.raises(ValueError, match="User with username 'Test User' already exists"):
        user_repo.create_user("Test User", "other")


def test_get_by_id(user_repo, sample_user):
    user = user_repo.get_by_id(sample_user.id)
    assert user.username == "Test User"


def test_get_by_username(user_repo, sample_user):
    assert user_repo.get_by_username("Test User").id == sample_user.id
    assert user_repo.get_by_username("test user") is None


def test_get_nonexistent_user(user_repo):
    assert user_repo.get_by_id(999) is None
